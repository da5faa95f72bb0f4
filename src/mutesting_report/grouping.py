"""Group the mutants of one report by the source file they mutate."""

from __future__ import annotations

from mutesting_report.checksum import extract_checksum
from mutesting_report.logging import get_logger
from mutesting_report.models import (
    AggregatedReport,
    FileReportDetails,
    MutantResult,
    MutatorDetail,
    ReportPayload,
)

logger = get_logger(__name__)


def _to_detail(entry: MutantResult) -> MutatorDetail:
    return MutatorDetail(
        mutator_name=entry.mutator.mutator_name,
        diff=entry.diff,
        checksum=extract_checksum(entry.process_output),
    )


def _bucket(
    file_map: dict[str, FileReportDetails], file_path: str
) -> FileReportDetails:
    if file_path not in file_map:
        file_map[file_path] = FileReportDetails()
    return file_map[file_path]


def _group_entries(payload: ReportPayload) -> dict[str, FileReportDetails]:
    file_map: dict[str, FileReportDetails] = {}
    # Buckets are mutated in place so the escaped and killed lists of a file
    # never overwrite each other.
    for entry in payload.escaped:
        bucket = _bucket(file_map, entry.mutator.original_file_path)
        bucket.escaped.append(_to_detail(entry))
    for entry in payload.killed:
        bucket = _bucket(file_map, entry.mutator.original_file_path)
        bucket.killed.append(_to_detail(entry))
    return file_map


def group_by_file(payload: ReportPayload) -> AggregatedReport:
    """Build the per-file report of a single payload.

    Escaped entries are processed before killed ones and each keeps its
    input order.  The payload's stats are passed through unchanged.  A
    malformed process output aborts the whole call.
    """
    file_map = _group_entries(payload)
    logger.debug(
        "Grouped %d escaped and %d killed mutants into %d files",
        len(payload.escaped),
        len(payload.killed),
        len(file_map),
    )
    return AggregatedReport(stats=payload.stats, report_detail=file_map)
