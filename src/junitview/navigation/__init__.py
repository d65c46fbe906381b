"""Navigation state machine and view projection."""

from junitview.navigation.navigator import Navigator
from junitview.navigation.projector import Glyph, Row, ViewKind, ViewSnapshot, project
from junitview.navigation.state import Command, Frame, FrameKind, NavigationState, transition

__all__ = [
    "Command",
    "Frame",
    "FrameKind",
    "Glyph",
    "NavigationState",
    "Navigator",
    "Row",
    "ViewKind",
    "ViewSnapshot",
    "project",
    "transition",
]
