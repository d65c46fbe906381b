"""Detail view of a single test case."""

from __future__ import annotations

from dataclasses import dataclass

from junitview.core.models import Case, CaseStatus

STATUS_LABELS = {
    CaseStatus.PASSED: "PASSED",
    CaseStatus.FAILED: "FAILED",
    CaseStatus.ERRORED: "ERROR",
    CaseStatus.SKIPPED: "SKIPPED",
}


@dataclass(frozen=True)
class DetailSection:
    """Titled block of text lines, e.g. the failure or captured stdout."""

    title: str
    kind: str  # failure, error, skipped, stdout, stderr
    lines: tuple[str, ...]


@dataclass(frozen=True)
class DetailView:
    """Everything the detail screen shows for one case."""

    name: str
    status: CaseStatus
    class_name: str | None
    file: str | None
    line: int | None
    time_seconds: float | None
    message: str | None
    failure_type: str | None
    stack_trace: str | None
    sections: tuple[DetailSection, ...]

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    @property
    def header_lines(self) -> tuple[str, ...]:
        lines = [f"  Name: {self.name}"]
        if self.class_name:
            lines.append(f" Class: {self.class_name}")
        if self.file:
            location = f"{self.file}:{self.line}" if self.line is not None else self.file
            lines.append(f"  File: {location}")
        time_str = f"{self.time_seconds:.3f}s" if self.time_seconds is not None else ""
        lines.append(f"  Time: {time_str}")
        lines.append(f"Status: {self.status_label}")
        return tuple(lines)

    @property
    def lines(self) -> tuple[str, ...]:
        """Header and sections flattened into display lines."""
        lines = list(self.header_lines)
        for section in self.sections:
            lines.append("")
            lines.append(f"── {section.title} ──")
            lines.extend(section.lines)
        return tuple(lines)

    @property
    def text(self) -> str:
        """Full text block, as shown on the detail screen."""
        return "\n".join(self.lines)


def build_detail(case: Case) -> DetailView:
    """Project a case into its detail view."""
    outcome = case.outcome
    failure = outcome.failure
    sections = []

    if failure is not None:
        is_error = outcome.status is CaseStatus.ERRORED
        lines = []
        if failure.type:
            lines.append(f"Type: {failure.type}")
        if failure.message:
            lines.extend(failure.message.splitlines())
        if failure.stack_trace:
            if lines:
                lines.append("")
            lines.extend(f"  {line}" for line in failure.stack_trace.splitlines())
        sections.append(
            DetailSection(
                title="Error" if is_error else "Failure",
                kind="error" if is_error else "failure",
                lines=tuple(lines),
            )
        )
    elif outcome.status is CaseStatus.SKIPPED:
        reason = outcome.skip_reason or "skipped"
        sections.append(
            DetailSection(title="Skipped", kind="skipped", lines=tuple(reason.splitlines()))
        )

    if case.system_out:
        sections.append(
            DetailSection(
                title="System Out",
                kind="stdout",
                lines=tuple(f"  {line}" for line in case.system_out.splitlines()),
            )
        )
    if case.system_err:
        sections.append(
            DetailSection(
                title="System Err",
                kind="stderr",
                lines=tuple(f"  {line}" for line in case.system_err.splitlines()),
            )
        )

    return DetailView(
        name=case.name,
        status=outcome.status,
        class_name=case.class_name,
        file=case.file,
        line=case.line,
        time_seconds=case.time_seconds,
        message=failure.message if failure else None,
        failure_type=failure.type if failure else None,
        stack_trace=failure.stack_trace if failure else None,
        sections=tuple(sections),
    )
