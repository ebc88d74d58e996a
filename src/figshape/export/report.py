"""
Classification report generation for figshape.

Writes the full report as JSON and a plain-text summary with one
`RRGGBB = C` line per figure.
"""

import os

from figshape.io.save_artifacts import ensure_dir, save_json
from figshape.tracer import get_tracer, trace


@trace(label="generate_report")
def generate_report(report, out_dir):
    """
    Generate report files.

    Creates:
    - classification_report.json: full results
    - classification_summary.txt: human-readable summary

    Returns the (json_path, summary_path) tuple.
    """
    tracer = get_tracer()

    report_path = os.path.join(out_dir, "classification_report.json")
    save_json(report, report_path)

    summary_text = format_summary(report)
    summary_path = os.path.join(out_dir, "classification_summary.txt")
    ensure_dir(os.path.dirname(summary_path))
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(summary_text)

    tracer.event(f"Report saved: {len(report.results)} figures, {report.failure_count} failed")

    return report_path, summary_path


def format_summary(report):
    """Render a report as text."""
    lines = ["figshape classification report", "=" * 40, ""]

    counts = report.category_counts()
    lines.append(f"Figures: {len(report.results)}")
    for category, count in sorted(counts.items()):
        lines.append(f"  {category}: {count}")
    lines.append("")

    for image in report.images:
        lines.append(f"{image.source_path} ({image.width}x{image.height})")
        lines.append("-" * 40)
        for result in image.results:
            lines.append(format_result(result))
        lines.append("")

    return "\n".join(lines)


def format_result(result):
    """Format a single result, appending the failure reason if any."""
    if result.succeeded:
        return str(result)
    return f"{result} [{result.failure.value}] {result.message}"
