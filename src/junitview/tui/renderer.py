"""Rich-based rendering of view snapshots.

The renderer knows nothing about the report tree; it only draws the
``ViewSnapshot`` produced by the projector.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from junitview.core.models import CaseStatus, Counts
from junitview.navigation.projector import FileTab, Glyph, Row, ViewKind, ViewSnapshot

GLYPH_STYLES = {
    Glyph.PASSED: "green",
    Glyph.FAILED: "red",
    Glyph.ERRORED: "magenta",
    Glyph.SKIPPED: "yellow",
    Glyph.EMPTY: "dim",
}

GLYPH_BADGES = {
    Glyph.PASSED: "PASS",
    Glyph.FAILED: "FAIL",
    Glyph.ERRORED: "ERR ",
    Glyph.SKIPPED: "SKIP",
    Glyph.EMPTY: "----",
}

STATUS_STYLES = {
    CaseStatus.PASSED: "green",
    CaseStatus.FAILED: "red",
    CaseStatus.ERRORED: "magenta",
    CaseStatus.SKIPPED: "yellow",
}

SECTION_STYLES = {
    "failure": "red",
    "error": "magenta",
    "skipped": "yellow",
    "stdout": "blue",
    "stderr": "yellow",
}

KEY_HINTS = {
    ViewKind.EMPTY: [("q", "quit")],
    ViewKind.SUITE_LIST: [("j/k", "navigate"), ("Enter", "open"), ("q", "quit")],
    ViewKind.CHILD_LIST: [
        ("j/k", "navigate"),
        ("Enter", "open"),
        ("Esc", "back"),
        ("q", "quit"),
    ],
    ViewKind.DETAIL: [("j/k", "scroll"), ("Esc", "back"), ("q", "quit")],
}

SELECTED_STYLE = "bold on grey23"
BORDER_STYLE = "cyan"
STATUS_BAR_HEIGHT = 2
# Panel borders plus the title row
PANEL_CHROME = 2


def truncate_str(s: str, max_len: int) -> str:
    """Shorten ``s`` to ``max_len`` characters, marking the cut with ``...``."""
    if len(s) <= max_len:
        return s
    return s[: max(max_len - 3, 0)] + "..."


def format_time(seconds: float | None, precision: int = 1) -> str:
    return f"{seconds:.{precision}f}s" if seconds is not None else ""


def visible_window(selected: int, total: int, height: int) -> range:
    """Indices of the rows that fit in ``height`` lines, keeping ``selected`` in view."""
    height = max(height, 1)
    if total <= height:
        return range(total)
    start = min(max(selected - height + 1, 0), total - height)
    return range(start, start + height)


class BrowserRenderer:
    """Builds rich renderables for the browser screens."""

    def render(self, snapshot: ViewSnapshot, height: int) -> RenderableType:
        """Full screen for a snapshot, sized to ``height`` terminal lines."""
        layout = Layout()
        layout.split_column(
            Layout(name="main", ratio=1),
            Layout(self.render_status_bar(snapshot), name="status", size=STATUS_BAR_HEIGHT),
        )
        content_height = max(height - STATUS_BAR_HEIGHT - PANEL_CHROME, 1)
        content = self.render_content(snapshot, content_height)

        if snapshot.multi_file or snapshot.load_failures:
            layout["main"].split_row(
                Layout(self.render_file_sidebar(snapshot), name="files", ratio=1),
                Layout(content, name="content", ratio=3),
            )
        else:
            layout["main"].update(content)
        return layout

    def render_content(self, snapshot: ViewSnapshot, height: int) -> RenderableType:
        match snapshot.view:
            case ViewKind.EMPTY:
                return self.render_empty(snapshot)
            case ViewKind.DETAIL:
                return self.render_detail(snapshot, height)
        return self.render_list(snapshot, height)

    # =========================================================================
    # LIST VIEWS
    # =========================================================================

    def render_list(self, snapshot: ViewSnapshot, height: int) -> Panel:
        table = Table.grid(padding=(0, 1), expand=True)
        table.add_column(width=2, no_wrap=True)
        if snapshot.view is ViewKind.SUITE_LIST:
            table.add_column(ratio=1, no_wrap=True)
            for label in ("tests", "pass", "fail", "err", "skip"):
                table.add_column(justify="right", width=max(len(label), 3) + 4, no_wrap=True)
        else:
            table.add_column(width=6, no_wrap=True)
            table.add_column(ratio=1, no_wrap=True)
        table.add_column(justify="right", width=8, no_wrap=True)

        for index in visible_window(snapshot.selected, len(snapshot.rows), height):
            row = snapshot.rows[index]
            is_selected = index == snapshot.selected
            cells = self._row_cells(row, snapshot.view)
            table.add_row(
                "> " if is_selected else "  ",
                *cells,
                style=SELECTED_STYLE if is_selected else None,
            )

        body: RenderableType = table
        if not snapshot.rows:
            body = Text("(empty)", style="dim")

        return Panel(
            body,
            title=f" {snapshot.title} ",
            title_align="left",
            subtitle=" > ".join(snapshot.breadcrumb),
            subtitle_align="left",
            border_style=BORDER_STYLE,
        )

    def _row_cells(self, row: Row, view: ViewKind) -> list[RenderableType]:
        style = GLYPH_STYLES[row.glyph]
        if view is ViewKind.SUITE_LIST:
            counts = row.counts
            return [
                Text(truncate_str(row.name, 50), style=style),
                Text(f"{counts.total} tests"),
                Text(f"{counts.passed} pass", style="green"),
                Text(f"{counts.failed} fail", style="red" if counts.failed else "dim"),
                Text(f"{counts.errored} err", style="magenta" if counts.errored else "dim"),
                Text(f"{counts.skipped} skip", style="yellow" if counts.skipped else "dim"),
                Text(format_time(row.time_seconds), style="dim"),
            ]
        label = row.label if row.is_suite else truncate_str(row.name, 70)
        return [
            Text(f"[{GLYPH_BADGES[row.glyph]}]", style=f"bold {style}"),
            Text(truncate_str(label, 70), style=style if row.is_suite else "white"),
            Text(format_time(row.time_seconds, precision=2), style="dim"),
        ]

    # =========================================================================
    # DETAIL VIEW
    # =========================================================================

    def render_detail(self, snapshot: ViewSnapshot, height: int) -> Panel:
        detail = snapshot.detail
        text = Text()
        if detail is not None:
            styled: list[Text] = []
            for line in detail.header_lines:
                label, _, value = line.partition(": ")
                value_style = ""
                if label.strip() == "Status":
                    value_style = f"bold {STATUS_STYLES[detail.status]}"
                styled.append(Text.assemble((f"{label}: ", "bold cyan"), (value, value_style)))
            for section in detail.sections:
                style = SECTION_STYLES.get(section.kind, "white")
                styled.append(Text(""))
                styled.append(Text(f"── {section.title} ──", style=f"bold {style}"))
                styled.extend(Text(line) for line in section.lines)

            # Keep the last screenful in view when scrolled to the end
            offset = min(snapshot.scroll_offset, max(len(styled) - height, 0))
            visible = styled[offset : offset + height]
            text = Text("\n").join(visible)

        return Panel(
            text,
            title=f" {snapshot.title} ",
            title_align="left",
            subtitle=" > ".join(snapshot.breadcrumb),
            subtitle_align="left",
            border_style=BORDER_STYLE,
        )

    # =========================================================================
    # EMPTY STATE, SIDEBAR, STATUS BAR
    # =========================================================================

    def render_empty(self, snapshot: ViewSnapshot) -> Panel:
        lines = [Text("No reports could be loaded.", style="bold")]
        if snapshot.load_failures:
            lines.append(Text(""))
            for failure in snapshot.load_failures:
                lines.append(
                    Text.assemble(
                        ("✗ ", "red"), (failure.source_name, "bold"), f": {failure.reason}"
                    )
                )
        return Panel(Group(*lines), title=f" {snapshot.title} ", border_style="red")

    def render_file_sidebar(self, snapshot: ViewSnapshot) -> Panel:
        table = Table.grid(expand=True)
        table.add_column(no_wrap=True)
        for tab in snapshot.files:
            table.add_row(self._file_label(tab), style=SELECTED_STYLE if tab.is_current else None)
        for failure in snapshot.load_failures:
            table.add_row(Text(f"✗ {failure.source_name}", style="dim red"))
        return Panel(table, title=" Files ", title_align="left", border_style=BORDER_STYLE)

    def _file_label(self, tab: FileTab) -> Text:
        style = "red" if tab.counts.has_problems else "green"
        if tab.is_current:
            style = f"bold {style}"
        marker = "> " if tab.is_current else "  "
        return Text(f"{marker}{tab.name} ({tab.counts.passed}/{tab.counts.total})", style=style)

    def render_status_bar(self, snapshot: ViewSnapshot) -> Group:
        stats = self.render_totals(snapshot.totals)
        stats.stylize("on grey23")

        keys = Text(" ")
        hints = list(KEY_HINTS[snapshot.view])
        if snapshot.multi_file:
            hints.insert(-1, ("Tab", "switch file"))
        for key, action in hints:
            keys.append(key, style="bold cyan")
            keys.append(f" {action}  ", style="dim")
        return Group(stats, keys)

    @staticmethod
    def render_totals(totals: Counts) -> Text:
        return Text.assemble(
            (" Total: ", "bold"),
            (f"{totals.total} ", "bold white"),
            "│ ",
            ("Passed: ", "green"),
            (f"{totals.passed} ", "bold green"),
            "│ ",
            ("Failed: ", "red"),
            (f"{totals.failed} ", "bold red"),
            "│ ",
            ("Errors: ", "magenta"),
            (f"{totals.errored} ", "bold magenta"),
            "│ ",
            ("Skipped: ", "yellow"),
            (f"{totals.skipped}", "bold yellow"),
        )
