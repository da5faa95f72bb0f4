"""Locate and decode mutation report JSON files."""

from __future__ import annotations

import glob as _glob
import json
import os
from typing import Any

from mutesting_report.config import DEFAULT_MAX_REPORT_BYTES, DEFAULT_REPORT_PATTERN
from mutesting_report.errors import MalformedReportError, ReportNotFoundError
from mutesting_report.logging import get_logger
from mutesting_report.models import ReportPayload

logger = get_logger(__name__)


def _decode(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except RecursionError as e:
        raise MalformedReportError("Invalid JSON format: nesting too deep") from e
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError both land here
        raise MalformedReportError(f"Invalid JSON format: {e}") from e


def is_report_document(data: Any) -> bool:
    """Return True if decoded JSON looks like a mutation runner report.

    A report carries ``stats`` and at least one of the ``escaped``/``killed``
    lists; rendered JSON reports and unrelated files do not.
    """
    return (
        isinstance(data, dict)
        and "stats" in data
        and ("escaped" in data or "killed" in data)
    )


def parse_report(text: str | bytes) -> ReportPayload:
    """Decode a report from an in-memory JSON document."""
    return ReportPayload.from_dict(_decode(text))


def _read_document(file_path: str, max_bytes: int | None) -> Any:
    if not file_path or not os.path.isfile(file_path):
        raise ReportNotFoundError(f"Report file not found: {file_path!r}")
    if max_bytes is not None and os.path.getsize(file_path) > max_bytes:
        raise MalformedReportError(
            f"Report file {file_path!r} exceeds the {max_bytes} byte limit"
        )
    with open(file_path, "rb") as f:
        raw = f.read()
    try:
        return _decode(raw)
    except MalformedReportError as e:
        raise MalformedReportError(f"{file_path}: {e}") from e


def _to_payload(file_path: str, data: Any) -> ReportPayload:
    try:
        payload = ReportPayload.from_dict(data)
    except MalformedReportError as e:
        raise MalformedReportError(f"{file_path}: {e}") from e
    logger.debug(
        "Read %s: %d escaped, %d killed",
        file_path,
        len(payload.escaped),
        len(payload.killed),
    )
    return payload


def read_report_file(
    file_path: str, max_bytes: int | None = DEFAULT_MAX_REPORT_BYTES
) -> ReportPayload:
    """Read and decode a single report file."""
    return _to_payload(file_path, _read_document(file_path, max_bytes))


def discover_report_files(root: str, pattern: str = DEFAULT_REPORT_PATTERN) -> list[str]:
    """Recursively find report files below ``root``, sorted by path."""
    root_path = os.path.abspath(root)
    if not os.path.isdir(root_path):
        raise ReportNotFoundError(f"Report directory not found: {root!r}")
    return sorted(
        os.path.abspath(p)
        for p in _glob.glob(os.path.join(root_path, "**", pattern), recursive=True)
        if os.path.isfile(p)
    )


def load_reports(
    file_paths: list[str],
    max_bytes: int | None = DEFAULT_MAX_REPORT_BYTES,
    skip_unrecognized: bool = False,
) -> list[ReportPayload]:
    """Read every report in order, failing on the first bad file.

    With ``skip_unrecognized`` valid JSON files that are not runner reports
    (see ``is_report_document``) are logged and left out.
    """
    payloads: list[ReportPayload] = []
    for file_path in file_paths:
        data = _read_document(file_path, max_bytes)
        if skip_unrecognized and not is_report_document(data):
            logger.warning("Skipping %s: not a mutation report", file_path)
            continue
        payloads.append(_to_payload(file_path, data))
    return payloads
