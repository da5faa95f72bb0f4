"""Settings for a report generation run."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_REPORT_FILE = "report.json"
DEFAULT_OUTPUT_FILE = "report.html"
DEFAULT_REPORT_PATTERN = "*.json"
OUTPUT_FORMATS: tuple[str, ...] = ("html", "json", "terminal")

# Reports are loaded whole into memory; refuse anything unreasonably large
DEFAULT_MAX_REPORT_BYTES = 256 * 1024 * 1024


@dataclass
class ReportConfig:
    """Configurable inputs and outputs of a report run."""

    report_file: str = DEFAULT_REPORT_FILE
    report_dir: str | None = None  # merge every report found below this directory
    template_path: str | None = None  # None uses the built-in HTML viewer
    output_path: str = DEFAULT_OUTPUT_FILE
    output_format: str = "html"
    on_collision: str = "replace"
    max_report_bytes: int | None = DEFAULT_MAX_REPORT_BYTES
    verbose: bool = False

    @property
    def merges(self) -> bool:
        return self.report_dir is not None
