"""Command line entry point for building mutation reports."""

from __future__ import annotations

import argparse
import logging
import sys

from mutesting_report.config import (
    DEFAULT_OUTPUT_FILE,
    DEFAULT_REPORT_FILE,
    OUTPUT_FORMATS,
    ReportConfig,
)
from mutesting_report.errors import ReportError
from mutesting_report.grouping import group_by_file
from mutesting_report.html_report import generate_html_report
from mutesting_report.loader import discover_report_files, load_reports, read_report_file
from mutesting_report.logging import get_logger, set_global_log_level
from mutesting_report.merging import COLLISION_POLICIES, merge_reports
from mutesting_report.models import AggregatedReport
from mutesting_report.output import (
    format_json_report,
    format_terminal_report,
    write_report_file,
)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mutesting-report",
        description="Render a mutation testing JSON report grouped by source file.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-f", "--file", default=DEFAULT_REPORT_FILE, help="Path to the JSON report"
    )
    source.add_argument(
        "-d", "--dir", default=None, help="Merge every *.json report below this directory"
    )
    parser.add_argument(
        "-t", "--template", default=None, help="HTML template (default: built-in viewer)"
    )
    parser.add_argument(
        "-o", "--out", default=DEFAULT_OUTPUT_FILE, help="Output path for the HTML/JSON report"
    )
    parser.add_argument(
        "--format", choices=OUTPUT_FORMATS, default="html", help="Output format"
    )
    parser.add_argument(
        "--on-collision",
        choices=COLLISION_POLICIES,
        default="replace",
        help="What to do when merged reports share a source file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Enable debug logging"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ReportConfig:
    return ReportConfig(
        report_file=args.file,
        report_dir=args.dir,
        template_path=args.template,
        output_path=args.out,
        output_format=args.format,
        on_collision=args.on_collision,
        verbose=args.verbose,
    )


def build_report(config: ReportConfig) -> AggregatedReport:
    """Load the configured input(s) and aggregate them into one report."""
    if config.merges:
        paths = discover_report_files(config.report_dir)
        logger.info("Found %d report files in %s", len(paths), config.report_dir)
        payloads = load_reports(
            paths, max_bytes=config.max_report_bytes, skip_unrecognized=True
        )
        return merge_reports(payloads, on_collision=config.on_collision)
    payload = read_report_file(config.report_file, max_bytes=config.max_report_bytes)
    return group_by_file(payload)


def write_report(report: AggregatedReport, config: ReportConfig) -> None:
    if config.output_format == "terminal":
        sys.stdout.write(format_terminal_report(report))
        return
    if config.output_format == "json":
        write_report_file(config.output_path, format_json_report(report))
        logger.info("JSON report saved to: %s", config.output_path)
        return
    generate_html_report(report, config.output_path, config.template_path)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    if config.verbose:
        set_global_log_level(logging.DEBUG)

    try:
        report = build_report(config)
        write_report(report, config)
    except ReportError as e:
        print(f"mutesting-report: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
