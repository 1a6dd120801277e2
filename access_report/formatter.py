"""Report formatters — plain text and JSON."""

import json
from typing import Callable, Iterable

from access_report.models import DimensionReport


def format_report_text(report: DimensionReport) -> str:
    """Render one report as a header line followed by indented label/percentage lines."""
    lines = [f"{report.dimension_name}:"]
    if not report.entries:
        lines.append("  (no data)")
    for entry in report.entries:
        lines.append(f"  {entry.label} {entry.percentage:.2f}%")
    return "\n".join(lines)


def format_reports_text(reports: Iterable[DimensionReport], **_run_info) -> str:
    """Render every report.

    Accepts the same keyword arguments as format_reports_json; the skip and
    entry counts are only written in JSON output.
    """
    blocks = [format_report_text(report) for report in reports]
    return "\n\n".join(blocks)


def report_to_dict(report: DimensionReport) -> dict:
    return {
        "dimension": report.dimension_name,
        "entries": [
            {"label": e.label, "percentage": e.percentage}
            for e in report.entries
        ],
    }


def format_reports_json(reports: Iterable[DimensionReport], skipped_lines: int = 0, total_entries: int = 0) -> str:
    return json.dumps({
        "skipped_lines": skipped_lines,
        "total_entries": total_entries,
        "reports": [report_to_dict(r) for r in reports],
    }, indent=2)


def get_formatter(output_format: str = "text") -> Callable[..., str]:
    """Factory that returns the right formatter for the configured output format."""
    if output_format == "json":
        return format_reports_json
    return format_reports_text
