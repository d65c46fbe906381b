"""JUnit XML parser for test reports.

JUnit XML has no single canonical schema; this parser accepts the shapes
emitted by common producers:

- a single ``<testsuite>`` root or a ``<testsuites>`` root wrapping suites
- suites nested inside suites (attached as child suites)
- ``<testcase>`` elements directly under ``<testsuites>``
- CDATA or plain-text stack traces, namespaced tags

Outcome precedence for a case is error, then failure, then skipped, then
passed. Reports are built bottom-up, so the counters of every node are a
recount of the cases below it.
"""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from junitview.core.exceptions import EmptyReportError, MalformedReportError
from junitview.core.models import Case, Failure, Outcome, Property, Report, Suite
from junitview.logging import get_logger

logger = get_logger(__name__)

_THOUSANDS = re.compile(r"^\d{1,3}(,\d{3})+(\.\d+)?$")

SUITE_TAGS = frozenset({"testsuite", "testsuites"})

# Declared counter attributes compared against the recount of a suite.
_DECLARED_COUNTERS = {
    "failures": "failed",
    "errors": "errored",
    "skipped": "skipped",
}


def _local(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from a tag."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _children(element: ET.Element, tag: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == tag]


def _first(element: ET.Element, tag: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == tag:
            return child
    return None


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_time(value: str | None) -> float | None:
    """Parse a ``time`` attribute; absent, invalid or negative means None.

    ``1,234.5`` is read as a thousands separator; a lone comma without a
    dot (``0,5``) is a decimal comma.
    """
    if value is None:
        return None
    text = value.strip()
    if _THOUSANDS.match(text):
        text = text.replace(",", "")
    elif text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")
    try:
        seconds = float(text)
    except ValueError:
        logger.debug("ignoring invalid time attribute", value=value)
        return None
    if seconds < 0 or not math.isfinite(seconds):
        return None
    return seconds


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def trim_block(text: str | None) -> str | None:
    """Trim structural whitespace around a text block.

    Blank lines before and after the content and trailing whitespace are
    removed. Line breaks and indentation inside the block are kept verbatim.
    """
    if text is None:
        return None
    lines = text.replace("\r\n", "\n").split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return None
    lines[-1] = lines[-1].rstrip()
    return "\n".join(lines)


class JUnitParser:
    """Parser for JUnit XML reports."""

    @staticmethod
    def parse_bytes(data: bytes, source_name: str) -> Report:
        """Parse JUnit XML from raw bytes.

        Args:
            data: Contents of the report file.
            source_name: Display name of the report (usually the file name).

        Returns:
            Report with parsed data.

        Raises:
            MalformedReportError: If the bytes are not a JUnit XML document.
            EmptyReportError: If the document contains no suites.
        """
        try:
            root = ET.fromstring(data)  # noqa: S314 - trusted test report data
        except ET.ParseError as e:
            line, column = getattr(e, "position", (None, None))
            position = f"line {line}, column {column}" if line is not None else None
            raise MalformedReportError(source_name, "invalid XML", position) from e
        except (LookupError, ValueError) as e:
            raise MalformedReportError(source_name, f"unreadable byte stream: {e}") from e
        return JUnitParser._parse_root(root, source_name)

    @staticmethod
    def parse_string(xml_content: str, source_name: str = "<string>") -> Report:
        """Parse JUnit XML from string.

        Args:
            xml_content: JUnit XML as string.
            source_name: Display name of the report.

        Returns:
            Report with parsed data.
        """
        return JUnitParser.parse_bytes(xml_content.encode("utf-8"), source_name)

    @staticmethod
    def parse_file(file_path: Path | str) -> Report:
        """Parse JUnit XML from file.

        Args:
            file_path: Path to JUnit XML file.

        Returns:
            Report named after the file.
        """
        path = Path(file_path)
        return JUnitParser.parse_bytes(path.read_bytes(), path.name)

    @staticmethod
    def _parse_root(root: ET.Element, source_name: str) -> Report:
        """Parse the root element of JUnit XML."""
        tag = _local(root.tag)

        if tag == "testsuite":
            suites = (JUnitParser._parse_testsuite(root, source_name),)
        elif tag == "testsuites":
            suites = tuple(
                JUnitParser._parse_testsuite(child, source_name)
                for child in root
                if _local(child.tag) in SUITE_TAGS
            )
            loose_cases = _children(root, "testcase")
            if loose_cases:
                # Some producers put cases straight under <testsuites>
                implicit = Suite(
                    name=_optional(root.get("name")) or source_name,
                    cases=tuple(JUnitParser._parse_testcase(tc) for tc in loose_cases),
                )
                suites = suites + (implicit,)
        else:
            raise MalformedReportError(
                source_name,
                f"unexpected root element <{tag}>, expected <testsuites> or <testsuite>",
            )

        if not suites:
            raise EmptyReportError(source_name)

        report = Report(
            source_name=source_name,
            suites=suites,
            name=_optional(root.get("name")),
            time_seconds=_parse_time(root.get("time")),
        )
        logger.debug(
            "parsed report",
            source=source_name,
            suites=len(suites),
            **report.counts.to_dict(),
        )
        return report

    @staticmethod
    def _parse_testsuite(testsuite: ET.Element, source_name: str) -> Suite:
        """Parse a testsuite element and everything nested inside it."""
        child_suites = []
        cases = []
        for child in testsuite:
            child_tag = _local(child.tag)
            if child_tag in SUITE_TAGS:
                child_suites.append(JUnitParser._parse_testsuite(child, source_name))
            elif child_tag == "testcase":
                cases.append(JUnitParser._parse_testcase(child))

        properties_el = _first(testsuite, "properties")
        properties = ()
        if properties_el is not None:
            properties = tuple(
                Property(name=prop.get("name", ""), value=prop.get("value", prop.text or ""))
                for prop in _children(properties_el, "property")
            )

        suite = Suite(
            name=testsuite.get("name", ""),
            cases=tuple(cases),
            child_suites=tuple(child_suites),
            class_name=_optional(testsuite.get("classname")),
            time_seconds=_parse_time(testsuite.get("time")),
            timestamp=_optional(testsuite.get("timestamp")),
            hostname=_optional(testsuite.get("hostname")),
            properties=properties,
            system_out=JUnitParser._element_text(testsuite, "system-out"),
            system_err=JUnitParser._element_text(testsuite, "system-err"),
        )
        JUnitParser._check_declared_counts(testsuite, suite, source_name)
        return suite

    @staticmethod
    def _check_declared_counts(testsuite: ET.Element, suite: Suite, source_name: str) -> None:
        """Log when the producer's counters disagree with the recount."""
        mismatches = {}
        declared_tests = _parse_int(testsuite.get("tests"))
        if declared_tests is not None and declared_tests != suite.counts.total:
            mismatches["tests"] = (declared_tests, suite.counts.total)
        for attribute, counter in _DECLARED_COUNTERS.items():
            declared = _parse_int(testsuite.get(attribute))
            actual = getattr(suite.counts, counter)
            if declared is not None and declared != actual:
                mismatches[attribute] = (declared, actual)
        if mismatches:
            logger.warning(
                "declared suite counters differ from recount",
                source=source_name,
                suite=suite.name,
                mismatches=mismatches,
            )

    @staticmethod
    def _parse_testcase(testcase: ET.Element) -> Case:
        """Parse a testcase element."""
        return Case(
            name=testcase.get("name", ""),
            outcome=JUnitParser._resolve_outcome(testcase),
            class_name=_optional(testcase.get("classname")),
            time_seconds=_parse_time(testcase.get("time")),
            file=_optional(testcase.get("file")),
            line=_parse_int(testcase.get("line")),
            system_out=JUnitParser._element_text(testcase, "system-out"),
            system_err=JUnitParser._element_text(testcase, "system-err"),
        )

    @staticmethod
    def _resolve_outcome(testcase: ET.Element) -> Outcome:
        """Pick the outcome of a case: error, then failure, then skipped."""
        error = _first(testcase, "error")
        if error is not None:
            return Outcome.errored(JUnitParser._parse_failure(error))

        failure = _first(testcase, "failure")
        if failure is not None:
            return Outcome.failed(JUnitParser._parse_failure(failure))

        skipped = _first(testcase, "skipped")
        if skipped is not None:
            reason = _optional(skipped.get("message")) or trim_block(skipped.text)
            return Outcome.skipped(reason)

        return Outcome.passed()

    @staticmethod
    def _parse_failure(element: ET.Element) -> Failure:
        return Failure(
            message=trim_block(element.get("message")),
            type=_optional(element.get("type")),
            stack_trace=trim_block(element.text),
        )

    @staticmethod
    def _element_text(parent: ET.Element, tag: str) -> str | None:
        element = _first(parent, tag)
        if element is None:
            return None
        return trim_block(element.text)
