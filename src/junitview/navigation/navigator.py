"""Stateful wrapper around the navigation state machine."""

from __future__ import annotations

from junitview.logging import get_logger
from junitview.navigation.projector import ViewSnapshot, project
from junitview.navigation.state import (
    DEFAULT_PAGE_SIZE,
    Command,
    NavigationState,
    transition,
)
from junitview.reports.report_set import ReportSet

logger = get_logger(__name__)


class Navigator:
    """Holds the current state for the interactive loop.

    The loop feeds commands to ``dispatch`` and asks for ``snapshot`` on
    every render tick.
    """

    def __init__(self, report_set: ReportSet, page_size: int = DEFAULT_PAGE_SIZE):
        self.report_set = report_set
        self.page_size = page_size
        self.state = NavigationState()
        self.should_quit = False

    def dispatch(self, command: Command) -> NavigationState:
        """Apply a command to the current state."""
        if command is Command.QUIT:
            self.should_quit = True
            return self.state
        new_state = transition(self.state, command, self.report_set, self.page_size)
        if new_state != self.state:
            logger.debug(
                "navigation",
                command=command.value,
                file_index=new_state.file_index,
                depth=new_state.depth,
                selected=new_state.frame.selected,
            )
        self.state = new_state
        return new_state

    def snapshot(self) -> ViewSnapshot:
        return project(self.state, self.report_set)
