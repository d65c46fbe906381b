"""Read-only projection of navigation state into render-ready data.

``project`` is called on every render tick. It never mutates the state or
the reports; the renderer only ever sees the ``ViewSnapshot`` it returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from junitview.core.exceptions import NavigationError
from junitview.core.models import Case, CaseStatus, Counts, Node, Report, Suite
from junitview.navigation.detail import DetailView, build_detail
from junitview.navigation.state import FrameKind, NavigationState, current_report
from junitview.navigation.tree import ancestry, resolve, rows_of
from junitview.reports.report_set import LoadFailure, ReportSet


class ViewKind(Enum):
    """Which screen the snapshot describes."""

    EMPTY = "empty"
    SUITE_LIST = "suite_list"
    CHILD_LIST = "child_list"
    DETAIL = "detail"


class Glyph(Enum):
    """Status category used to pick a badge and colour."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    SKIPPED = "skipped"
    EMPTY = "empty"


_CASE_GLYPHS = {
    CaseStatus.PASSED: Glyph.PASSED,
    CaseStatus.FAILED: Glyph.FAILED,
    CaseStatus.ERRORED: Glyph.ERRORED,
    CaseStatus.SKIPPED: Glyph.SKIPPED,
}


@dataclass(frozen=True)
class Row:
    """One line of a list view."""

    label: str
    name: str
    glyph: Glyph
    counts: Counts
    time_seconds: float | None
    is_suite: bool


@dataclass(frozen=True)
class FileTab:
    """Entry of the file sidebar."""

    name: str
    counts: Counts
    is_current: bool


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything needed to draw one frame."""

    view: ViewKind
    title: str
    breadcrumb: tuple[str, ...]
    rows: tuple[Row, ...]
    selected: int
    detail: DetailView | None
    files: tuple[FileTab, ...]
    load_failures: tuple[LoadFailure, ...]
    totals: Counts

    @property
    def multi_file(self) -> bool:
        return len(self.files) > 1

    @property
    def scroll_offset(self) -> int:
        """Detail scroll position (0 outside the detail view)."""
        return self.selected if self.view is ViewKind.DETAIL else 0


def glyph_for_counts(counts: Counts) -> Glyph:
    """Summarise a suite: errors beat failures, all-skipped is skipped."""
    if counts.errored:
        return Glyph.ERRORED
    if counts.failed:
        return Glyph.FAILED
    if counts.total == 0:
        return Glyph.EMPTY
    if counts.skipped == counts.total:
        return Glyph.SKIPPED
    return Glyph.PASSED


def suite_label(suite: Suite) -> str:
    """``"Auth (1 passed, 1 failed)"``; errored and skipped only when non-zero."""
    counts = suite.counts
    parts = [f"{counts.passed} passed", f"{counts.failed} failed"]
    if counts.errored:
        parts.append(f"{counts.errored} errored")
    if counts.skipped:
        parts.append(f"{counts.skipped} skipped")
    return f"{suite.name} ({', '.join(parts)})"


def make_row(node: Node) -> Row:
    if isinstance(node, Suite):
        return Row(
            label=suite_label(node),
            name=node.name,
            glyph=glyph_for_counts(node.counts),
            counts=node.counts,
            time_seconds=node.time_seconds,
            is_suite=True,
        )
    return Row(
        label=node.name,
        name=node.name,
        glyph=_CASE_GLYPHS[node.status],
        counts=node.counts,
        time_seconds=node.time_seconds,
        is_suite=False,
    )


def _file_tabs(state: NavigationState, report_set: ReportSet) -> tuple[FileTab, ...]:
    return tuple(
        FileTab(name=report.source_name, counts=report.counts, is_current=i == state.file_index)
        for i, report in enumerate(report_set)
    )


def _title(view: ViewKind, report: Report, node: Report | Node) -> str:
    match view:
        case ViewKind.SUITE_LIST:
            return f"Test Suites — {report.source_name}"
        case ViewKind.CHILD_LIST:
            return f"Tests — {node.name}"
        case ViewKind.DETAIL:
            return f"Detail — {node.name}"
    return ""


def project(state: NavigationState, report_set: ReportSet) -> ViewSnapshot:
    """Build the snapshot for the current state."""
    files = _file_tabs(state, report_set)
    report = current_report(state, report_set)

    if report is None:
        return ViewSnapshot(
            view=ViewKind.EMPTY,
            title="No reports loaded",
            breadcrumb=(),
            rows=(),
            selected=0,
            detail=None,
            files=files,
            load_failures=report_set.failures,
            totals=report_set.totals,
        )

    frame = state.frame
    node = resolve(report, frame.path)
    breadcrumb = (report.source_name,) + tuple(n.name for n in ancestry(report, frame.path))

    if frame.kind is FrameKind.DETAIL:
        if not isinstance(node, Case):
            raise NavigationError(f"detail frame {frame.path} does not point at a case")
        view = ViewKind.DETAIL
        rows: tuple[Row, ...] = ()
        detail = build_detail(node)
    else:
        view = ViewKind.SUITE_LIST if state.depth == 0 else ViewKind.CHILD_LIST
        rows = tuple(make_row(child) for child in rows_of(node))
        detail = None

    return ViewSnapshot(
        view=view,
        title=_title(view, report, node),
        breadcrumb=breadcrumb,
        rows=rows,
        selected=frame.selected,
        detail=detail,
        files=files,
        load_failures=report_set.failures,
        totals=report_set.totals,
    )
