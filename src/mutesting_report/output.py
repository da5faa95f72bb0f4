"""Terminal reporter and structured output for aggregated reports."""

from __future__ import annotations

import json
import os

from mutesting_report.errors import ReportWriteError
from mutesting_report.models import AggregatedReport, Stats


def _pct(ratio: float) -> str:
    """Render a 0..1 ratio from the stats block as a percentage."""
    return f"{ratio * 100:.1f}%"


def _file_label(file_path: str) -> str:
    return os.path.basename(file_path) or "<unknown file>"


def _stats_lines(stats: Stats) -> list[str]:
    return [
        f"Mutants: {stats.total_mutants_count} total, "
        f"{stats.killed_count} killed, {stats.escaped_count} escaped, "
        f"{stats.not_covered_count} not covered",
        f"         {stats.error_count} errored, {stats.skipped_count} skipped, "
        f"{stats.time_out_count} timed out",
        f"MSI: {_pct(stats.msi)}  "
        f"Coverage: {_pct(stats.mutation_code_coverage)}  "
        f"Covered code MSI: {_pct(stats.covered_code_msi)}",
    ]


def format_terminal_report(report: AggregatedReport) -> str:
    """Format a terminal-friendly mutation report."""
    lines: list[str] = []

    lines.append("")
    lines.append("=" * 70)
    lines.append("mutation testing report")
    lines.append("=" * 70)
    lines.extend(_stats_lines(report.stats))
    lines.append("")

    n_files = len(report.report_detail)
    file_label = "file" if n_files == 1 else "files"
    lines.append(f"Files: {n_files} {file_label}")

    for file_path in report.files:
        details = report.report_detail[file_path]
        lines.append(
            f"  {_file_label(file_path):<30s} "
            f"{len(details.killed)}/{details.total} killed, "
            f"{len(details.escaped)} escaped"
        )
        # Escaped mutants are the ones worth a closer look
        for detail in details.escaped:
            lines.append(
                f"    {detail.mutator_name or '?':<40s} ESCAPED  {detail.checksum}"
            )

    lines.append("")
    lines.append(
        f"Overall: {report.killed_total} killed, {report.escaped_total} escaped "
        f"across {n_files} {file_label}"
    )
    lines.append("")

    return "\n".join(lines)


def format_json_report(report: AggregatedReport) -> str:
    """Format the aggregated report as JSON."""
    return json.dumps(report.to_dict(), indent=2)


def write_report_file(output_path: str, content: str) -> None:
    """Write rendered report text, raising ``ReportWriteError`` on failure."""
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ReportWriteError(f"Unable to write report {output_path!r}: {e}") from e
