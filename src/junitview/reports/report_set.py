"""Fixed, ordered collection of parsed reports.

The set is built once at startup from ``(name, bytes)`` pairs. A file that
fails to parse is recorded as a ``LoadFailure`` and logged; it never stops
the other files from loading.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from junitview.core.exceptions import IndexOutOfRangeError, ParseError, UnreadableReportError
from junitview.core.models import Counts, Report
from junitview.logging import get_logger
from junitview.parsers.junit import JUnitParser

logger = get_logger(__name__)

# Raw bytes, or the OSError raised while reading them
Source = tuple[str, bytes | OSError]


@dataclass(frozen=True)
class LoadFailure:
    """A report file that could not be loaded."""

    source_name: str
    error: ParseError

    @property
    def reason(self) -> str:
        return self.error.reason


def _parse_source(source: Source) -> Report | LoadFailure:
    name, data = source
    try:
        if isinstance(data, OSError):
            raise UnreadableReportError(name, data)
        return JUnitParser.parse_bytes(data, name)
    except ParseError as e:
        logger.warning("failed to parse report", source=name, reason=e.reason)
        return LoadFailure(source_name=name, error=e)


class ReportSet:
    """Parsed reports in input order, plus the files that failed to load."""

    def __init__(
        self,
        reports: Iterable[Report] = (),
        failures: Iterable[LoadFailure] = (),
    ) -> None:
        self._reports: tuple[Report, ...] = tuple(reports)
        self._failures: tuple[LoadFailure, ...] = tuple(failures)
        self._totals = sum((r.counts for r in self._reports), Counts())

    @classmethod
    def load(cls, sources: Iterable[Source], max_workers: int = 4) -> ReportSet:
        """Parse every source, in parallel, keeping input order.

        Args:
            sources: ``(display name, raw bytes)`` pairs; an ``OSError`` in
                place of the bytes is recorded as a load failure.
            max_workers: Upper bound on parser threads.

        Returns:
            ReportSet over the successfully parsed reports.
        """
        sources = list(sources)
        if max_workers > 1 and len(sources) > 1:
            with ThreadPoolExecutor(max_workers=min(max_workers, len(sources))) as pool:
                results = list(pool.map(_parse_source, sources))
        else:
            results = [_parse_source(source) for source in sources]

        reports = [r for r in results if isinstance(r, Report)]
        failures = [r for r in results if isinstance(r, LoadFailure)]
        logger.info("loaded reports", loaded=len(reports), failed=len(failures))
        return cls(reports, failures)

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[Report]:
        return iter(self._reports)

    def get(self, index: int) -> Report:
        """Return the report at ``index``.

        Raises:
            IndexOutOfRangeError: If ``index`` is outside ``[0, len)``.
        """
        if not 0 <= index < len(self._reports):
            raise IndexOutOfRangeError(index, len(self._reports))
        return self._reports[index]

    @property
    def reports(self) -> tuple[Report, ...]:
        return self._reports

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        return self._failures

    @property
    def is_empty(self) -> bool:
        return not self._reports

    @property
    def totals(self) -> Counts:
        """Aggregate counts across every loaded report."""
        return self._totals
