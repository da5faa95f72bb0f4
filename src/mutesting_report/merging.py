"""Merge the reports of several independent mutation runs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from mutesting_report.errors import MalformedReportError, ReportCollisionError
from mutesting_report.grouping import group_by_file
from mutesting_report.logging import get_logger
from mutesting_report.models import AggregatedReport, FileReportDetails, ReportPayload, Stats

logger = get_logger(__name__)

CollisionPolicy = Literal["replace", "error"]
COLLISION_POLICIES: tuple[str, ...] = ("replace", "error")


def merge_reports(
    payloads: Sequence[ReportPayload],
    stats: Stats | None = None,
    on_collision: CollisionPolicy = "replace",
) -> AggregatedReport:
    """Combine several payloads (e.g. one per package) into one report.

    Every file bucket of every payload is kept.  When two payloads report
    the same file, ``on_collision`` decides: ``"replace"`` keeps the later
    payload's bucket, ``"error"`` raises ``ReportCollisionError``.

    Stats are not summed.  ``stats`` is used when given, otherwise the first
    payload's stats are carried forward.
    """
    if on_collision not in COLLISION_POLICIES:
        raise ValueError(f"Unknown collision policy: {on_collision!r}")
    if not payloads:
        raise MalformedReportError("No reports to merge")

    merged: dict[str, FileReportDetails] = {}
    for idx, payload in enumerate(payloads):
        grouped = group_by_file(payload)
        for file_path, details in grouped.report_detail.items():
            if file_path in merged:
                if on_collision == "error":
                    raise ReportCollisionError(file_path)
                logger.warning(
                    "Report %d replaces earlier results for %r", idx, file_path
                )
            merged[file_path] = details

    logger.debug("Merged %d reports into %d files", len(payloads), len(merged))
    return AggregatedReport(
        stats=payloads[0].stats if stats is None else stats,
        report_detail=merged,
    )
