"""Tests for mutesting_report.loader — reading and discovering report files."""

import json

import pytest

from mutesting_report.errors import MalformedReportError, ReportNotFoundError
from mutesting_report.loader import (
    discover_report_files,
    is_report_document,
    load_reports,
    parse_report,
    read_report_file,
)


def _report_json(total: int = 10, file_path: str = "x.go") -> str:
    return json.dumps({
        "stats": {"totalMutantsCount": total, "killedCount": 5, "msi": 0.50},
        "escaped": [],
        "killed": [{
            "mutator": {"mutatorName": "m", "originalFilePath": file_path},
            "diff": "",
            "processOutput": f"PASS {file_path} with checksum c{total}",
        }],
    })


def describe_parse_report():
    def it_decodes_a_valid_document():
        payload = parse_report(_report_json())
        assert payload.stats.total_mutants_count == 10
        assert payload.stats.msi == 0.5
        assert len(payload.killed) == 1

    def it_rejects_invalid_json():
        with pytest.raises(MalformedReportError, match="Invalid JSON format"):
            parse_report("{invalid json}")

    def it_rejects_a_json_array():
        with pytest.raises(MalformedReportError):
            parse_report("[]")

    def it_rejects_invalid_utf8_bytes():
        with pytest.raises(MalformedReportError, match="Invalid JSON format"):
            parse_report(b'{"x": "\xff"}')

    def it_rejects_deeply_nested_passthrough_data():
        text = '{"timeouted":' + "[" * 100000 + "]" * 100000 + "}"
        with pytest.raises(MalformedReportError, match="nesting"):
            parse_report(text)

    def it_decodes_utf8_bytes():
        payload = parse_report(_report_json().encode("utf-8"))
        assert payload.stats.total_mutants_count == 10


def describe_read_report_file():
    def it_reads_a_report_from_disk(tmp_path):
        path = tmp_path / "report.json"
        path.write_text(_report_json(total=4))
        payload = read_report_file(str(path))
        assert payload.stats.total_mutants_count == 4

    def it_raises_not_found_for_missing_files(tmp_path):
        with pytest.raises(ReportNotFoundError):
            read_report_file(str(tmp_path / "nonexistent.json"))

    def it_raises_not_found_for_an_empty_path():
        with pytest.raises(FileNotFoundError):
            read_report_file("")

    def it_raises_not_found_for_directories(tmp_path):
        with pytest.raises(ReportNotFoundError):
            read_report_file(str(tmp_path))

    def it_rejects_files_that_are_not_utf8(tmp_path):
        path = tmp_path / "report.json"
        path.write_bytes(b'{"stats": {}, "escaped": [], "x": "\xff"}')
        with pytest.raises(MalformedReportError, match="report.json"):
            read_report_file(str(path))

    def it_names_the_file_in_decode_errors(tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{invalid json}")
        with pytest.raises(MalformedReportError, match="broken.json"):
            read_report_file(str(path))

    def it_refuses_files_over_the_size_limit(tmp_path):
        path = tmp_path / "report.json"
        path.write_text(_report_json())
        with pytest.raises(MalformedReportError, match="byte limit"):
            read_report_file(str(path), max_bytes=10)

    def it_allows_disabling_the_size_limit(tmp_path):
        path = tmp_path / "report.json"
        path.write_text(_report_json())
        assert read_report_file(str(path), max_bytes=None).stats.killed_count == 5


def describe_discover_report_files():
    def it_finds_json_files_recursively_in_sorted_order(tmp_path):
        (tmp_path / "pkg2").mkdir()
        (tmp_path / "pkg1" / "sub").mkdir(parents=True)
        (tmp_path / "pkg2" / "report.json").write_text("{}")
        (tmp_path / "pkg1" / "sub" / "report.json").write_text("{}")
        (tmp_path / "pkg1" / "notes.txt").write_text("ignored")
        result = discover_report_files(str(tmp_path))
        assert result == [
            str((tmp_path / "pkg1" / "sub" / "report.json").resolve()),
            str((tmp_path / "pkg2" / "report.json").resolve()),
        ]

    def it_honours_a_custom_pattern(tmp_path):
        (tmp_path / "a.mutesting.json").write_text("{}")
        (tmp_path / "b.json").write_text("{}")
        result = discover_report_files(str(tmp_path), pattern="*.mutesting.json")
        assert [p.rsplit("/", 1)[-1] for p in result] == ["a.mutesting.json"]

    def it_returns_empty_for_a_directory_without_reports(tmp_path):
        assert discover_report_files(str(tmp_path)) == []

    def it_raises_for_a_missing_directory(tmp_path):
        with pytest.raises(ReportNotFoundError):
            discover_report_files(str(tmp_path / "missing"))


def describe_load_reports():
    def it_loads_reports_in_the_given_order(tmp_path):
        first = tmp_path / "b.json"
        second = tmp_path / "a.json"
        first.write_text(_report_json(total=1))
        second.write_text(_report_json(total=2))
        payloads = load_reports([str(first), str(second)])
        assert [p.stats.total_mutants_count for p in payloads] == [1, 2]

    def it_fails_on_the_first_bad_file(tmp_path):
        good = tmp_path / "good.json"
        good.write_text(_report_json())
        with pytest.raises(ReportNotFoundError):
            load_reports([str(good), str(tmp_path / "missing.json")])

    def it_skips_non_report_documents_when_asked(tmp_path):
        report = tmp_path / "a.json"
        rendered = tmp_path / "b.json"
        report.write_text(_report_json(total=7))
        rendered.write_text(json.dumps({"stats": {"totalMutantsCount": 1}, "reportDetail": {}}))
        payloads = load_reports([str(rendered), str(report)], skip_unrecognized=True)
        assert [p.stats.total_mutants_count for p in payloads] == [7]

    def it_keeps_non_report_documents_by_default(tmp_path):
        other = tmp_path / "other.json"
        other.write_text("{}")
        assert len(load_reports([str(other)])) == 1


def describe_is_report_document():
    def it_accepts_runner_reports():
        assert is_report_document(json.loads(_report_json())) is True

    def it_accepts_reports_with_null_lists():
        assert is_report_document({"stats": {}, "escaped": None}) is True

    def it_rejects_rendered_json_reports():
        assert is_report_document({"stats": {}, "reportDetail": {}}) is False

    def it_rejects_documents_without_stats():
        assert is_report_document({"escaped": []}) is False

    def it_rejects_non_objects():
        assert is_report_document([]) is False
