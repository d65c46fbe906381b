"""Shared exceptions for the junitview package."""

from __future__ import annotations


class JunitViewError(Exception):
    """Base class for all junitview errors."""


class ParseError(JunitViewError):
    """A report file could not be turned into a Report."""

    def __init__(self, source_name: str, reason: str) -> None:
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"{source_name}: {reason}")


class MalformedReportError(ParseError):
    """Unreadable or structurally invalid XML.

    ``position`` is a human-readable hint such as ``"line 3, column 14"``
    when the XML layer reports one.
    """

    def __init__(self, source_name: str, reason: str, position: str | None = None) -> None:
        self.position = position
        if position:
            reason = f"{reason} ({position})"
        super().__init__(source_name, reason)


class EmptyReportError(ParseError):
    """Well-formed XML without any suite content."""

    def __init__(self, source_name: str) -> None:
        super().__init__(source_name, "report contains no test suites")


class UnreadableReportError(ParseError):
    """The report file could not be read from disk."""

    def __init__(self, source_name: str, cause: OSError) -> None:
        self.cause = cause
        super().__init__(source_name, f"unreadable file: {cause.strerror or cause}")


class IndexOutOfRangeError(JunitViewError, IndexError):
    """Report index outside the bounds of the report set."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"report index {index} out of range for {size} report(s)")


class NavigationError(JunitViewError):
    """Navigation state no longer resolves against the report tree.

    Never raised for user input; it signals a bug in the state machine.
    """


class SourceNotFoundError(JunitViewError):
    """Input path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path does not exist: {path}")


class NoReportsFoundError(JunitViewError):
    """Directory contains no files matching the report pattern."""

    def __init__(self, path: str, pattern: str) -> None:
        self.path = path
        self.pattern = pattern
        super().__init__(f"No files matching {pattern!r} found in: {path}")
