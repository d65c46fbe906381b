"""Report file discovery.

Turns a command-line path into ``(name, bytes)`` sources for the report set.
A file path yields itself; a directory yields every file matching a glob,
non-recursively, sorted by name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from junitview.core.exceptions import NoReportsFoundError, SourceNotFoundError
from junitview.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A report file found on disk."""

    name: str
    path: Path


def discover_sources(path: Path | str, pattern: str = "*.xml") -> list[SourceFile]:
    """Find report files for a path.

    Args:
        path: A report file or a directory of report files.
        pattern: Glob used when ``path`` is a directory.

    Returns:
        Source files sorted by name.

    Raises:
        SourceNotFoundError: If ``path`` does not exist.
        NoReportsFoundError: If a directory holds no matching files.
    """
    path = Path(path)
    if not path.exists():
        raise SourceNotFoundError(str(path))

    if path.is_file():
        return [SourceFile(name=path.name, path=path)]

    found = sorted(
        (SourceFile(name=p.name, path=p) for p in path.glob(pattern) if p.is_file()),
        key=lambda s: s.name,
    )
    if not found:
        raise NoReportsFoundError(str(path), pattern)
    logger.debug("discovered report files", directory=str(path), count=len(found))
    return found


def read_sources(files: list[SourceFile]) -> Iterator[tuple[str, bytes | OSError]]:
    """Yield ``(name, bytes)`` for each file.

    A file that cannot be read yields its ``OSError`` in place of the bytes;
    the report set records it as a load failure and keeps going.
    """
    for source in files:
        try:
            data = source.path.read_bytes()
        except OSError as e:
            logger.warning("failed to read report file", path=str(source.path), error=str(e))
            yield source.name, e
            continue
        yield source.name, data
