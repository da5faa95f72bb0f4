"""Exceptions raised while loading and aggregating mutation reports."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for every failure of a report aggregation run."""


class MalformedReportError(ReportError, ValueError):
    """The input is not valid JSON or does not have the report shape."""


class ReportCollisionError(MalformedReportError):
    """Two merged reports both contain results for the same source file."""

    def __init__(self, file_path: str) -> None:
        super().__init__(f"Source file reported more than once: {file_path!r}")
        self.file_path = file_path


class ChecksumOutOfRangeError(ReportError, IndexError):
    """Process output has too few tokens to contain a checksum."""

    def __init__(self, process_output: str, index: int) -> None:
        super().__init__(
            f"No token at index {index} in process output: {process_output!r}"
        )
        self.process_output = process_output
        self.index = index


class ReportNotFoundError(ReportError, FileNotFoundError):
    """A referenced report or template file does not exist."""


class ReportWriteError(ReportError, OSError):
    """The rendered report could not be written."""
