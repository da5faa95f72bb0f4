"""HTML report generation for aggregated mutation reports."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from string import Template
from typing import Any

from mutesting_report.errors import MalformedReportError, ReportNotFoundError
from mutesting_report.logging import get_logger
from mutesting_report.models import AggregatedReport
from mutesting_report.output import write_report_file

logger = get_logger(__name__)

DEFAULT_TITLE = "Mutation Testing Report"


def _build_report_data(report: AggregatedReport) -> dict[str, Any]:
    """Build the JSON-serializable structure embedded in the page.

    Adds per-file totals and a generation timestamp to
    ``AggregatedReport.to_dict()``.
    """
    data = report.to_dict()
    files = {}
    for file_path in report.files:
        details = report.report_detail[file_path]
        files[file_path] = {
            "escaped": len(details.escaped),
            "killed": len(details.killed),
            "total": details.total,
        }
    data["fileStats"] = files
    data["version"] = 1
    data["generatedAt"] = datetime.now(timezone.utc).isoformat()
    return data


def _escape_json_for_html(json_str: str) -> str:
    """Escape JSON for safe embedding in HTML script tags.

    Replaces ``</`` with ``<\\/`` to prevent premature script tag closure.
    ``\\/`` is valid JSON (RFC 8259 section 7) and evaluates to ``/`` at runtime.
    """
    return json_str.replace("</", "<\\/")


def _render_template(template_text: str, json_data: str, generated_at: str) -> str:
    """Fill a user template's ``$report_json``, ``$title`` and ``$generated_at``."""
    try:
        return Template(template_text).substitute(
            report_json=json_data,
            title=DEFAULT_TITLE,
            generated_at=generated_at,
        )
    except (KeyError, ValueError) as e:
        raise MalformedReportError(f"Invalid report template: {e}") from e


def _build_html_viewer(json_data: str) -> str:
    """Build the built-in HTML viewer with inline JSON data.

    Returns a self-contained page: a stats header, a sidebar listing files
    with their escaped/killed counts, and a panel of mutant cards showing
    the mutator name, checksum and diff of the selected file.
    """
    return f"""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{DEFAULT_TITLE}</title>
<style>
body {{ margin: 0; font-family: -apple-system, "Segoe UI", sans-serif; background: #1e1e2e; color: #cdd6f4; }}
header {{ padding: 12px 20px; background: #181825; border-bottom: 1px solid #313244; }}
header h1 {{ margin: 0 0 6px 0; font-size: 18px; }}
.stats span {{ margin-right: 16px; font-size: 13px; }}
.stats .msi {{ font-weight: bold; color: #f9e2af; }}
main {{ display: flex; height: calc(100vh - 70px); }}
nav {{ width: 320px; overflow-y: auto; border-right: 1px solid #313244; }}
.file-item {{ padding: 6px 12px; cursor: pointer; font-size: 13px; display: flex; justify-content: space-between; }}
.file-item:hover, .file-item.active {{ background: #313244; }}
.count-escaped {{ color: #f38ba8; }}
.count-killed {{ color: #a6e3a1; }}
section {{ flex: 1; overflow-y: auto; padding: 12px 20px; }}
.mutant-card {{ border: 1px solid #313244; border-left: 4px solid #a6e3a1; margin-bottom: 10px; border-radius: 4px; }}
.mutant-card.escaped {{ border-left-color: #f38ba8; }}
.mc-header {{ padding: 6px 10px; font-size: 13px; background: #181825; }}
.mc-header .checksum {{ color: #6c7086; float: right; font-family: monospace; }}
pre.diff {{ margin: 0; padding: 8px 10px; font-size: 12px; overflow-x: auto; }}
.diff .add {{ color: #a6e3a1; }}
.diff .del {{ color: #f38ba8; }}
.diff .hunk {{ color: #89b4fa; }}
.empty {{ color: #6c7086; padding: 16px; }}
</style>
</head>
<body>
<header>
<h1>{DEFAULT_TITLE}</h1>
<div class="stats" id="stats"></div>
</header>
<main>
<nav id="files"></nav>
<section id="detail"><div class="empty">Select a file</div></section>
</main>
<script id="report-data" type="application/json">{json_data}</script>
<script>
(function() {{
    var data = JSON.parse(document.getElementById("report-data").textContent);
    var detail = data.reportDetail;
    var fileStats = data.fileStats;

    function esc(s) {{
        return String(s).replace(/&/g, "&amp;").replace(/</g, "&lt;").replace(/>/g, "&gt;").replace(/"/g, "&quot;");
    }}

    function pct(x) {{ return (x * 100).toFixed(1) + "%"; }}

    function renderStats() {{
        var s = data.stats;
        var html = '<span class="msi">MSI ' + pct(s.msi) + "</span>";
        html += "<span>Coverage " + pct(s.mutationCodeCoverage) + "</span>";
        html += "<span>Covered code MSI " + pct(s.coveredCodeMsi) + "</span>";
        html += "<span>Total " + s.totalMutantsCount + "</span>";
        html += '<span class="count-killed">Killed ' + s.killedCount + "</span>";
        html += '<span class="count-escaped">Escaped ' + s.escapedCount + "</span>";
        html += "<span>Not covered " + s.notCoveredCount + "</span>";
        html += "<span>Errors " + s.errorCount + "</span>";
        html += "<span>Skipped " + s.skippedCount + "</span>";
        html += "<span>Timeouts " + s.timeOutCount + "</span>";
        document.getElementById("stats").innerHTML = html;
    }}

    function renderDiff(diff) {{
        return diff.split("\\n").map(function(line) {{
            var cls = "";
            if (line.indexOf("@@") === 0) cls = "hunk";
            else if (line.charAt(0) === "+") cls = "add";
            else if (line.charAt(0) === "-") cls = "del";
            return '<span class="' + cls + '">' + esc(line) + "</span>";
        }}).join("\\n");
    }}

    function renderCards(mutants, kind) {{
        var html = "";
        mutants.forEach(function(m) {{
            html += '<div class="mutant-card ' + kind + '">';
            html += '<div class="mc-header">' + (kind === "escaped" ? "Escaped" : "Killed") + ": " + esc(m.mutatorName || "?");
            html += '<span class="checksum">' + esc(m.checksum) + "</span></div>";
            if (m.diff) html += '<pre class="diff">' + renderDiff(m.diff) + "</pre>";
            html += "</div>";
        }});
        return html;
    }}

    function loadFile(path) {{
        document.querySelectorAll(".file-item").forEach(function(el) {{
            el.classList.toggle("active", el.getAttribute("data-file") === path);
        }});
        var d = detail[path];
        var html = "<h2>" + esc(path || "<unknown file>") + "</h2>";
        html += renderCards(d.escaped, "escaped");
        html += renderCards(d.killed, "killed");
        document.getElementById("detail").innerHTML = html;
    }}

    function renderFiles() {{
        var paths = Object.keys(detail).sort();
        var html = "";
        paths.forEach(function(p) {{
            var fs = fileStats[p];
            html += '<div class="file-item" data-file="' + esc(p) + '">';
            html += "<span>" + esc(p || "<unknown file>") + "</span>";
            html += '<span><span class="count-escaped">' + fs.escaped + '</span> / <span class="count-killed">' + fs.killed + "</span></span>";
            html += "</div>";
        }});
        if (!paths.length) html = '<div class="empty">No mutants reported</div>';
        var nav = document.getElementById("files");
        nav.innerHTML = html;
        nav.querySelectorAll(".file-item").forEach(function(el) {{
            el.addEventListener("click", function() {{ loadFile(el.getAttribute("data-file")); }});
        }});
        if (paths.length) loadFile(paths[0]);
    }}

    renderStats();
    renderFiles();
}})();
</script>
</body>
</html>
"""


def generate_html_report(
    report: AggregatedReport,
    output_path: str,
    template_path: str | None = None,
) -> None:
    """Write a single self-contained HTML report.

    With ``template_path`` the given ``string.Template`` file is filled in
    instead of using the built-in viewer.
    """
    data = _build_report_data(report)
    escaped = _escape_json_for_html(json.dumps(data))

    if template_path is None:
        html_content = _build_html_viewer(escaped)
    else:
        if not os.path.isfile(template_path):
            raise ReportNotFoundError(f"Template file not found: {template_path!r}")
        with open(template_path, encoding="utf-8") as f:
            template_text = f.read()
        html_content = _render_template(template_text, escaped, data["generatedAt"])

    write_report_file(output_path, html_content)
    logger.info("HTML report saved to: %s", output_path)
