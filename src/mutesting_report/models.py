"""Data models for mutation testing reports.

Input documents are validated with pydantic models whose camelCase aliases
match the mutation runner's JSON.  The aggregated report built from them is
made of plain dataclasses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from mutesting_report.errors import MalformedReportError

# Unknown keys are ignored like the runner's own decoder does
INPUT_MODEL_CONFIG: ConfigDict = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def describe_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as ``loc: message`` lines."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"]) or "report"
        lines.append(f"{loc}: {item['msg']}")
    return "; ".join(lines)


_M = TypeVar("_M", bound="_InputModel")


class _InputModel(BaseModel):
    model_config: ClassVar[ConfigDict] = INPUT_MODEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat ``null`` values as absent so fields take their zero value."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_dict(cls: type[_M], data: Any) -> _M:
        """Validate decoded JSON, raising ``MalformedReportError`` on bad input."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedReportError(
                f"Invalid {cls.__name__}: {describe_validation_error(e)}"
            ) from e


class Mutator(_InputModel):
    """Metadata describing how a single mutant was produced."""

    mutator_name: StrictStr = ""
    original_source_code: StrictStr = ""
    mutated_source_code: StrictStr = ""
    original_file_path: StrictStr = ""  # grouping key, may be empty
    original_start_line: StrictInt = 0


class MutantResult(_InputModel):
    """One escaped or killed mutant as recorded by the mutation runner."""

    mutator: Mutator = Field(default_factory=Mutator)
    diff: StrictStr = ""
    process_output: StrictStr = ""  # e.g. 'PASS "x.go" with checksum abc123'


class Stats(_InputModel):
    """Pre-computed counters and ratios of a mutation run.

    These values are copied through as given and never recomputed.
    """

    total_mutants_count: StrictInt = 0
    killed_count: StrictInt = 0
    not_covered_count: StrictInt = 0
    escaped_count: StrictInt = 0
    error_count: StrictInt = 0
    skipped_count: StrictInt = 0
    time_out_count: StrictInt = 0
    msi: StrictFloat = 0.0
    mutation_code_coverage: StrictFloat = 0.0
    covered_code_msi: StrictFloat = 0.0

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ReportPayload(_InputModel):
    """A single decoded mutation report file."""

    stats: Stats = Field(default_factory=Stats)
    escaped: tuple[MutantResult, ...] = ()
    killed: tuple[MutantResult, ...] = ()
    # Opaque passthrough values, never interpreted
    timeouted: Any = None
    errored: Any = None


@dataclass(frozen=True)
class MutatorDetail:
    """The part of a mutant result shown in the report."""

    mutator_name: str
    diff: str
    checksum: str

    def to_dict(self) -> dict[str, str]:
        return {
            "mutatorName": self.mutator_name,
            "diff": self.diff,
            "checksum": self.checksum,
        }


@dataclass
class FileReportDetails:
    """Escaped and killed mutants of one source file, in input order."""

    escaped: list[MutatorDetail] = field(default_factory=list)
    killed: list[MutatorDetail] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.escaped) + len(self.killed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "escaped": [d.to_dict() for d in self.escaped],
            "killed": [d.to_dict() for d in self.killed],
        }


@dataclass(frozen=True)
class AggregatedReport:
    """Global stats plus per-file mutant details, ready for rendering."""

    stats: Stats
    report_detail: Mapping[str, FileReportDetails] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "report_detail", MappingProxyType(dict(self.report_detail))
        )

    @property
    def files(self) -> list[str]:
        return sorted(self.report_detail)

    @property
    def escaped_total(self) -> int:
        return sum(len(d.escaped) for d in self.report_detail.values())

    @property
    def killed_total(self) -> int:
        return sum(len(d.killed) for d in self.report_detail.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": self.stats.to_dict(),
            "reportDetail": {
                path: self.report_detail[path].to_dict() for path in self.files
            },
        }
