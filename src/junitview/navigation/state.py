"""Navigation state machine for the report browser.

The state is a file index plus a drill stack of frames. Each frame holds a
path descriptor (row indices from the report root) rather than a reference
into the tree, so states are plain values: they compare, hash and can be
kept around freely.

``transition`` is total. Every command applied to a valid state yields a
valid state; moves past a boundary are no-ops, never errors.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from junitview.core.exceptions import NavigationError
from junitview.core.models import Case, Report, Suite
from junitview.navigation.detail import build_detail
from junitview.navigation.tree import resolve, rows_of
from junitview.reports.report_set import ReportSet

DEFAULT_PAGE_SIZE = 10


class Command(Enum):
    """Discrete navigation events produced by key bindings."""

    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    JUMP_FIRST = "jump_first"
    JUMP_LAST = "jump_last"
    ENTER = "enter"
    BACK = "back"
    NEXT_FILE = "next_file"
    PREV_FILE = "prev_file"
    QUIT = "quit"


class FrameKind(Enum):
    """What a frame shows."""

    LIST = "list"  # rows of a report root or suite
    DETAIL = "detail"  # a single case, ``selected`` is the scroll offset


@dataclass(frozen=True)
class Frame:
    """One level of the drill stack."""

    path: tuple[int, ...] = ()
    selected: int = 0
    kind: FrameKind = FrameKind.LIST


ROOT_FRAME = Frame()


@dataclass(frozen=True)
class NavigationState:
    """Cursor into a report set."""

    file_index: int = 0
    drill_stack: tuple[Frame, ...] = (ROOT_FRAME,)

    @property
    def frame(self) -> Frame:
        return self.drill_stack[-1]

    @property
    def depth(self) -> int:
        """0 at the suite list of a file."""
        return len(self.drill_stack) - 1

    @property
    def in_detail(self) -> bool:
        return self.frame.kind is FrameKind.DETAIL

    def with_frame(self, frame: Frame) -> NavigationState:
        """Replace the top frame."""
        return replace(self, drill_stack=self.drill_stack[:-1] + (frame,))


def current_report(state: NavigationState, report_set: ReportSet) -> Report | None:
    """Report under the cursor, or None for an empty set."""
    if report_set.is_empty:
        return None
    return report_set.get(state.file_index)


def extent(frame: Frame, report: Report) -> int:
    """Number of positions ``selected`` can take in a frame."""
    node = resolve(report, frame.path)
    if frame.kind is FrameKind.DETAIL:
        if not isinstance(node, Case):
            raise NavigationError(f"detail frame {frame.path} does not point at a case")
        return len(build_detail(node).lines)
    return len(rows_of(node))


def _clamp(index: int, size: int) -> int:
    if size <= 0:
        return 0
    return max(0, min(index, size - 1))


def _move(state: NavigationState, report: Report, delta: int) -> NavigationState:
    frame = state.frame
    size = extent(frame, report)
    if size == 0:
        return state
    return state.with_frame(replace(frame, selected=_clamp(frame.selected + delta, size)))


def _jump(state: NavigationState, report: Report, last: bool) -> NavigationState:
    frame = state.frame
    size = extent(frame, report)
    if size == 0:
        return state
    return state.with_frame(replace(frame, selected=size - 1 if last else 0))


def _enter(state: NavigationState, report: Report) -> NavigationState:
    frame = state.frame
    if frame.kind is FrameKind.DETAIL:
        return state
    rows = rows_of(resolve(report, frame.path))
    if not rows:
        return state
    target = rows[frame.selected]
    path = frame.path + (frame.selected,)
    if isinstance(target, Suite):
        pushed = Frame(path=path)
    else:
        pushed = Frame(path=path, kind=FrameKind.DETAIL)
    return replace(state, drill_stack=state.drill_stack + (pushed,))


def _back(state: NavigationState) -> NavigationState:
    if state.depth == 0:
        return state
    return replace(state, drill_stack=state.drill_stack[:-1])


def _switch_file(state: NavigationState, report_set: ReportSet, delta: int) -> NavigationState:
    count = len(report_set)
    if count == 0:
        return state
    return NavigationState(file_index=(state.file_index + delta) % count)


def transition(
    state: NavigationState,
    command: Command,
    report_set: ReportSet,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> NavigationState:
    """Apply a command and return the resulting state.

    Args:
        state: Current state; must resolve against ``report_set``.
        command: Navigation event.
        report_set: Reports being browsed.
        page_size: Rows moved by PAGE_DOWN / PAGE_UP.

    Returns:
        The new state. Boundary moves return ``state`` unchanged.

    Raises:
        NavigationError: If ``state`` does not resolve, which means a bug.
    """
    report = current_report(state, report_set)
    if report is None:
        return state

    match command:
        case Command.MOVE_DOWN:
            return _move(state, report, 1)
        case Command.MOVE_UP:
            return _move(state, report, -1)
        case Command.PAGE_DOWN:
            return _move(state, report, page_size)
        case Command.PAGE_UP:
            return _move(state, report, -page_size)
        case Command.JUMP_FIRST:
            return _jump(state, report, last=False)
        case Command.JUMP_LAST:
            return _jump(state, report, last=True)
        case Command.ENTER:
            return _enter(state, report)
        case Command.BACK:
            return _back(state)
        case Command.NEXT_FILE:
            return _switch_file(state, report_set, 1)
        case Command.PREV_FILE:
            return _switch_file(state, report_set, -1)
        case Command.QUIT:
            return state
    return state
