"""Immutable report model for parsed JUnit XML.

A parsed file becomes a ``Report`` holding a tree of ``Suite`` objects, each
with its own ``Case`` rows and nested child suites. Every object is frozen
and all sequences are tuples, so a report can be shared freely once built.

Aggregate ``Counts`` are computed once, bottom-up, when a node is constructed.
They are always a recount of the tree below the node and never the counters a
producer wrote into the XML attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class CaseStatus(Enum):
    """Outcome classification of a test case."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Counts:
    """Per-status totals for a subtree."""

    passed: int = 0
    failed: int = 0
    errored: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.errored + self.skipped

    @property
    def has_problems(self) -> bool:
        """Whether anything failed or errored."""
        return self.failed > 0 or self.errored > 0

    def __add__(self, other: Counts) -> Counts:
        if not isinstance(other, Counts):
            return NotImplemented
        return Counts(
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
            errored=self.errored + other.errored,
            skipped=self.skipped + other.skipped,
        )

    @classmethod
    def of(cls, status: CaseStatus) -> Counts:
        """Unit count for a single case with the given status."""
        return cls(**{status.value: 1})

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errored": self.errored,
            "skipped": self.skipped,
        }


@dataclass(frozen=True)
class Failure:
    """Details of a failure or error element."""

    message: str | None = None
    type: str | None = None
    stack_trace: str | None = None

    @property
    def summary(self) -> str:
        """One-line description: the message, else the first trace line."""
        if self.message:
            return self.message
        if self.stack_trace:
            for line in self.stack_trace.splitlines():
                if line.strip():
                    return line.strip()
        return ""

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "type": self.type, "stack_trace": self.stack_trace}


@dataclass(frozen=True)
class Outcome:
    """Exactly one of passed, failed, errored or skipped.

    Build instances through the classmethods; the constructor rejects
    combinations that do not belong to the status.
    """

    status: CaseStatus
    failure: Failure | None = None
    skip_reason: str | None = None

    def __post_init__(self) -> None:
        carries_failure = self.status in (CaseStatus.FAILED, CaseStatus.ERRORED)
        if carries_failure and self.failure is None:
            raise ValueError(f"{self.status.value} outcome requires a Failure")
        if not carries_failure and self.failure is not None:
            raise ValueError(f"{self.status.value} outcome cannot carry a Failure")
        if self.status is not CaseStatus.SKIPPED and self.skip_reason is not None:
            raise ValueError("only skipped outcomes carry a skip reason")

    @classmethod
    def passed(cls) -> Outcome:
        return cls(CaseStatus.PASSED)

    @classmethod
    def failed(cls, failure: Failure) -> Outcome:
        return cls(CaseStatus.FAILED, failure=failure)

    @classmethod
    def errored(cls, failure: Failure) -> Outcome:
        return cls(CaseStatus.ERRORED, failure=failure)

    @classmethod
    def skipped(cls, reason: str | None = None) -> Outcome:
        return cls(CaseStatus.SKIPPED, skip_reason=reason)


@dataclass(frozen=True)
class Property:
    """A ``<property name=... value=...>`` entry of a suite."""

    name: str
    value: str


@dataclass(frozen=True)
class Case:
    """One test execution."""

    name: str
    outcome: Outcome = field(default_factory=Outcome.passed)
    class_name: str | None = None
    time_seconds: float | None = None
    file: str | None = None
    line: int | None = None
    system_out: str | None = None
    system_err: str | None = None

    @property
    def status(self) -> CaseStatus:
        return self.outcome.status

    @property
    def counts(self) -> Counts:
        return Counts.of(self.outcome.status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "class_name": self.class_name,
            "status": self.status.value,
            "time_seconds": self.time_seconds,
            "file": self.file,
            "line": self.line,
            "failure": self.outcome.failure.to_dict() if self.outcome.failure else None,
            "skip_reason": self.outcome.skip_reason,
            "system_out": self.system_out,
            "system_err": self.system_err,
        }


@dataclass(frozen=True)
class Suite:
    """A named group of cases, optionally containing nested suites."""

    name: str
    cases: tuple[Case, ...] = ()
    child_suites: tuple[Suite, ...] = ()
    class_name: str | None = None
    time_seconds: float | None = None
    timestamp: str | None = None
    hostname: str | None = None
    properties: tuple[Property, ...] = ()
    system_out: str | None = None
    system_err: str | None = None
    counts: Counts = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        total = Counts()
        for child in self.child_suites:
            total = total + child.counts
        for case in self.cases:
            total = total + case.counts
        object.__setattr__(self, "counts", total)

    @property
    def children(self) -> tuple[Node, ...]:
        """Navigable rows: child suites first, then cases."""
        return self.child_suites + self.cases

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "class_name": self.class_name,
            "time_seconds": self.time_seconds,
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "properties": [{"name": p.name, "value": p.value} for p in self.properties],
            "system_out": self.system_out,
            "system_err": self.system_err,
            "counts": self.counts.to_dict(),
            "suites": [s.to_dict() for s in self.child_suites],
            "cases": [c.to_dict() for c in self.cases],
        }


Node = Union[Suite, Case]


@dataclass(frozen=True)
class Report:
    """Root of one parsed report file."""

    source_name: str
    suites: tuple[Suite, ...] = ()
    name: str | None = None
    time_seconds: float | None = None
    counts: Counts = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        total = Counts()
        for suite in self.suites:
            total = total + suite.counts
        object.__setattr__(self, "counts", total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_name": self.source_name,
            "name": self.name,
            "time_seconds": self.time_seconds,
            "counts": self.counts.to_dict(),
            "suites": [s.to_dict() for s in self.suites],
        }
