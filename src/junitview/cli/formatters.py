"""Output formatters for the ``summary`` command."""

from __future__ import annotations

import json

from rich.table import Table

from junitview.core.models import Report
from junitview.navigation.projector import make_row
from junitview.reports.report_set import ReportSet
from junitview.tui.renderer import GLYPH_BADGES, GLYPH_STYLES, format_time


def format_summary_json(report_set: ReportSet) -> str:
    """Format every loaded report, and every load failure, as JSON."""
    data = {
        "totals": report_set.totals.to_dict(),
        "reports": [report.to_dict() for report in report_set],
        "failures": [
            {"source_name": failure.source_name, "reason": failure.reason}
            for failure in report_set.failures
        ],
    }
    return json.dumps(data, indent=2)


def build_suite_table(report: Report) -> Table:
    """Table of a report's top-level suites, one row per suite."""
    table = Table(title=report.source_name, title_justify="left", expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("Suite")
    table.add_column("Tests", justify="right")
    table.add_column("Pass", justify="right", style="green")
    table.add_column("Fail", justify="right", style="red")
    table.add_column("Err", justify="right", style="magenta")
    table.add_column("Skip", justify="right", style="yellow")
    table.add_column("Time", justify="right", style="dim")

    for suite in report.suites:
        row = make_row(suite)
        style = GLYPH_STYLES[row.glyph]
        table.add_row(
            f"[{style}]{GLYPH_BADGES[row.glyph]}[/{style}]",
            suite.name,
            str(row.counts.total),
            str(row.counts.passed),
            str(row.counts.failed),
            str(row.counts.errored),
            str(row.counts.skipped),
            format_time(row.time_seconds),
        )
    return table
