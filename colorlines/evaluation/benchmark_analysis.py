"""
Benchmark analysis utilities for comparing agent performance.

Ranks evaluation summaries, renders text reports, and optionally plots score
distributions across agents.
"""

try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    PLOTTING_AVAILABLE = True
except ImportError:
    PLOTTING_AVAILABLE = False

from colorlines.evaluation.benchmark_data import EvaluationSummary


def compare_bots(summaries: dict[str, EvaluationSummary]) -> list[tuple[str, EvaluationSummary]]:
    """Rank bots by average score, best first. Equal averages keep insertion order."""
    return sorted(summaries.items(), key=lambda item: item[1].avg_score, reverse=True)


def format_summary(summary: EvaluationSummary) -> list[str]:
    lines = [
        f"Avg Score: {summary.avg_score:.1f} ± {summary.std_dev:.1f}",
        f"Best/Median/Worst: {summary.best} / {summary.median} / {summary.worst}",
        f"Moves: {summary.moves_accepted} accepted, "
        f"{summary.moves_invalid_or_timeout} invalid/timeout",
    ]
    rejected = [f"{reason} {count}" for reason, count in summary.rejections.items() if count]
    if rejected:
        lines.append("Rejected: " + ", ".join(rejected))
    return lines


def generate_report(
    summaries: dict[str, EvaluationSummary], output_file: str | None = None
) -> str:
    """Build a text report of all summaries, writing it to output_file when given."""
    report_lines = []
    report_lines.append("=" * 60)
    report_lines.append("COLOR LINES BENCHMARK REPORT")
    report_lines.append("=" * 60)

    if not summaries:
        report_lines.append("No benchmark results available.")
    else:
        first = next(iter(summaries.values()))
        report_lines.append(
            f"Dataset: {first.games} games, {first.width}x{first.height}, "
            f"{first.colors_count} colors, seed: {first.seed_used}"
        )
        report_lines.append("")

        for bot_name, summary in summaries.items():
            report_lines.append(f"BOT: {bot_name}")
            report_lines.append("-" * 40)
            report_lines.extend(format_summary(summary))
            report_lines.append("")

        if len(summaries) > 1:
            report_lines.append("Ranking by Average Score:")
            for i, (bot_name, summary) in enumerate(compare_bots(summaries), 1):
                report_lines.append(
                    f"  {i}. {bot_name}: {summary.avg_score:.1f} avg, "
                    f"median {summary.median}, best {summary.best}"
                )

    report = "\n".join(report_lines)
    if output_file is not None:
        with open(output_file, "w") as f:
            f.write(report)
        print(f"Performance report saved to {output_file}")
    return report


def plot_score_distributions(
    summaries: dict[str, EvaluationSummary], output_file: str
) -> bool:
    """Save a box plot of per-game scores for each bot. Returns False when plotting is unavailable."""
    if not PLOTTING_AVAILABLE:
        print("Matplotlib not available. Install with: pip install matplotlib")
        return False

    if not summaries:
        return False

    names = list(summaries.keys())
    fig, ax = plt.subplots(figsize=(max(6, 2 * len(names)), 5))
    ax.boxplot([summaries[name].scores for name in names])
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels(names, rotation=15)
    ax.set_ylabel("Balls cleared per game")
    ax.set_title("Score distribution by bot")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_file, dpi=150)
    plt.close(fig)
    return True
