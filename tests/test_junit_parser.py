"""Tests for JUnit XML parser.

These tests verify that junitview can parse the JUnit XML shapes emitted by
common producers into the immutable report model.
"""

from __future__ import annotations

import pytest

from junitview.core.exceptions import EmptyReportError, MalformedReportError, ParseError
from junitview.core.models import CaseStatus
from junitview.parsers.junit import JUnitParser, trim_block


class TestJUnitParser:
    """Tests for JUnitParser class."""

    def test_parse_simple_report_with_failures(self):
        """Parse JUnit XML with failures."""
        xml = """<?xml version="1.0" encoding="UTF-8"?>
        <testsuites name="test suite" tests="3" failures="1" errors="0" time="5.0">
            <testsuite name="LoginTests" tests="3" failures="1" time="5.0">
                <testcase classname="LoginTests" name="test_login_success" time="1.0"/>
                <testcase classname="LoginTests" name="test_login_failure" time="2.0">
                    <failure message="Expected true but got false" type="AssertionError">
AssertionError: Expected true but got false
    at LoginTests.test_login_failure(LoginTests.java:42)
    at junit.framework.TestCase.runTest(TestCase.java:176)
                    </failure>
                </testcase>
                <testcase classname="LoginTests" name="test_logout" time="1.5"/>
            </testsuite>
        </testsuites>
        """

        report = JUnitParser.parse_string(xml, "results.xml")

        assert report.source_name == "results.xml"
        assert report.name == "test suite"
        assert report.time_seconds == 5.0
        assert report.counts.total == 3
        assert report.counts.passed == 2
        assert report.counts.failed == 1

        failure_case = report.suites[0].cases[1]
        assert failure_case.name == "test_login_failure"
        assert failure_case.class_name == "LoginTests"
        assert failure_case.status is CaseStatus.FAILED
        assert failure_case.outcome.failure.message == "Expected true but got false"
        assert failure_case.outcome.failure.type == "AssertionError"

    def test_parse_report_with_errors(self):
        """Parse JUnit XML with errors (exceptions)."""
        xml = """<?xml version="1.0" encoding="UTF-8"?>
        <testsuites tests="2" failures="0" errors="1">
            <testsuite name="APITests" tests="2" errors="1">
                <testcase classname="APITests" name="test_connection" time="0.5">
                    <error message="Connection refused" type="ConnectionError">
ConnectionError: Connection refused
    at APITests.test_connection(APITests.java:15)
                    </error>
                </testcase>
                <testcase classname="APITests" name="test_ping" time="0.1"/>
            </testsuite>
        </testsuites>
        """

        report = JUnitParser.parse_string(xml)

        assert report.counts.total == 2
        assert report.counts.errored == 1
        assert report.counts.failed == 0

        case = report.suites[0].cases[0]
        assert case.status is CaseStatus.ERRORED
        assert case.outcome.failure.message == "Connection refused"

    def test_parse_report_with_skipped(self):
        """Parse JUnit XML with skipped tests."""
        xml = """<?xml version="1.0" encoding="UTF-8"?>
        <testsuites tests="3" failures="0" skipped="1">
            <testsuite name="FeatureTests" tests="3" skipped="1">
                <testcase classname="FeatureTests" name="test_feature_a" time="1.0"/>
                <testcase classname="FeatureTests" name="test_feature_b" time="0.0">
                    <skipped message="Feature not implemented"/>
                </testcase>
                <testcase classname="FeatureTests" name="test_feature_c" time="1.0"/>
            </testsuite>
        </testsuites>
        """

        report = JUnitParser.parse_string(xml)

        assert report.counts.total == 3
        assert report.counts.passed == 2
        assert report.counts.skipped == 1
        assert report.suites[0].cases[1].outcome.skip_reason == "Feature not implemented"

    def test_skip_reason_falls_back_to_element_text(self):
        """A <skipped> element without a message uses its text as the reason."""
        xml = """<testsuite name="S">
            <testcase name="t"><skipped>needs a GPU</skipped></testcase>
            <testcase name="u"><skipped/></testcase>
        </testsuite>"""

        report = JUnitParser.parse_string(xml)

        assert report.suites[0].cases[0].outcome.skip_reason == "needs a GPU"
        assert report.suites[0].cases[1].outcome.skip_reason is None

    def test_parse_multiple_test_suites(self):
        """Parse JUnit XML with multiple test suites."""
        xml = """<?xml version="1.0" encoding="UTF-8"?>
        <testsuites tests="4" failures="2">
            <testsuite name="Suite1" tests="2" failures="1">
                <testcase classname="Suite1" name="test1" time="1.0">
                    <failure message="Error 1"/>
                </testcase>
                <testcase classname="Suite1" name="test2" time="1.0"/>
            </testsuite>
            <testsuite name="Suite2" tests="2" failures="1">
                <testcase classname="Suite2" name="test3" time="1.0"/>
                <testcase classname="Suite2" name="test4" time="1.0">
                    <failure message="Error 2"/>
                </testcase>
            </testsuite>
        </testsuites>
        """

        report = JUnitParser.parse_string(xml)

        assert [s.name for s in report.suites] == ["Suite1", "Suite2"]
        assert report.counts.total == 4
        assert report.counts.failed == 2
        assert report.suites[0].counts.failed == 1
        assert report.suites[1].counts.failed == 1

    def test_parse_single_testsuite_root(self):
        """Parse JUnit XML with single testsuite as root."""
        xml = """<?xml version="1.0" encoding="UTF-8"?>
        <testsuite name="UnitTests" tests="2" failures="1">
            <testcase classname="UnitTests" name="test_pass" time="0.5"/>
            <testcase classname="UnitTests" name="test_fail" time="0.5">
                <failure message="Assertion failed"/>
            </testcase>
        </testsuite>
        """

        report = JUnitParser.parse_string(xml)

        assert len(report.suites) == 1
        assert report.suites[0].name == "UnitTests"
        assert report.counts.total == 2
        assert report.counts.failed == 1

    def test_parse_bytes_honours_encoding_declaration(self):
        """Bytes are decoded according to the XML declaration."""
        xml = '<?xml version="1.0" encoding="ISO-8859-1"?><testsuite name="Café"/>'

        report = JUnitParser.parse_bytes(xml.encode("latin-1"), "latin.xml")

        assert report.suites[0].name == "Café"

    def test_parse_file_uses_file_name(self, tmp_path):
        """parse_file names the report after the file."""
        path = tmp_path / "unit.xml"
        path.write_bytes(b'<testsuite name="S"><testcase name="t"/></testsuite>')

        report = JUnitParser.parse_file(path)

        assert report.source_name == "unit.xml"
        assert report.counts.passed == 1


class TestOutcomePrecedence:
    """A case with several outcome children resolves deterministically."""

    def test_error_wins_over_failure(self):
        """Both failure and error present: the case is errored."""
        xml = """<testsuite name="S">
            <testcase name="both">
                <failure message="assertion"/>
                <error message="crash"/>
            </testcase>
        </testsuite>"""

        case = JUnitParser.parse_string(xml).suites[0].cases[0]

        assert case.status is CaseStatus.ERRORED
        assert case.outcome.failure.message == "crash"

    def test_failure_wins_over_skipped(self):
        xml = """<testsuite name="S">
            <testcase name="t"><skipped/><failure message="f"/></testcase>
        </testsuite>"""

        case = JUnitParser.parse_string(xml).suites[0].cases[0]

        assert case.status is CaseStatus.FAILED

    def test_first_of_repeated_children_is_used(self):
        xml = """<testsuite name="S">
            <testcase name="t"><failure message="first"/><failure message="second"/></testcase>
        </testsuite>"""

        case = JUnitParser.parse_string(xml).suites[0].cases[0]

        assert case.outcome.failure.message == "first"
        assert case.counts.total == 1

    def test_case_without_children_passes(self):
        report = JUnitParser.parse_string('<testsuite name="S"><testcase name="t"/></testsuite>')
        assert report.suites[0].cases[0].status is CaseStatus.PASSED


class TestStructuralVariants:
    """Non-standard shapes observed in the wild."""

    def test_nested_suites_become_child_suites(self):
        xml = """<testsuites>
            <testsuite name="outer">
                <testcase name="outer_case"/>
                <testsuite name="inner">
                    <testcase name="inner_case"><failure message="x"/></testcase>
                </testsuite>
            </testsuite>
        </testsuites>"""

        report = JUnitParser.parse_string(xml)
        outer = report.suites[0]

        assert len(report.suites) == 1
        assert [c.name for c in outer.cases] == ["outer_case"]
        assert [s.name for s in outer.child_suites] == ["inner"]
        assert outer.counts.total == 2
        assert outer.counts.failed == 1
        assert [n.name for n in outer.children] == ["inner", "outer_case"]

    def test_testcases_directly_under_testsuites(self):
        """Loose cases under <testsuites> are gathered into an implicit suite."""
        xml = """<testsuites name="jest tests">
            <testcase name="a"/>
            <testcase name="b"><failure/></testcase>
        </testsuites>"""

        report = JUnitParser.parse_string(xml, "jest.xml")

        assert [s.name for s in report.suites] == ["jest tests"]
        assert report.counts.failed == 1

    def test_implicit_suite_falls_back_to_source_name(self):
        report = JUnitParser.parse_string('<testsuites><testcase name="a"/></testsuites>', "x.xml")
        assert report.suites[0].name == "x.xml"

    def test_namespaced_tags(self):
        xml = """<ns:testsuites xmlns:ns="urn:junit">
            <ns:testsuite name="S"><ns:testcase name="t"><ns:error/></ns:testcase></ns:testsuite>
        </ns:testsuites>"""

        report = JUnitParser.parse_string(xml)

        assert report.suites[0].cases[0].status is CaseStatus.ERRORED

    def test_properties_and_metadata(self):
        xml = """<testsuite name="S" timestamp="2024-01-01T10:00:00" hostname="ci-1">
            <properties>
                <property name="env" value="ci"/>
                <property name="java.version" value="17"/>
            </properties>
            <testcase name="t" file="src/test_t.py" line="12"/>
        </testsuite>"""

        suite = JUnitParser.parse_string(xml).suites[0]

        assert suite.timestamp == "2024-01-01T10:00:00"
        assert suite.hostname == "ci-1"
        assert [(p.name, p.value) for p in suite.properties] == [
            ("env", "ci"),
            ("java.version", "17"),
        ]
        assert suite.cases[0].file == "src/test_t.py"
        assert suite.cases[0].line == 12

    def test_system_out_and_err(self):
        xml = """<testsuite name="S">
            <testcase name="t">
                <system-out>
Attempting login with expired token
                </system-out>
                <system-err><![CDATA[java.lang.NullPointerException
    at Foo.bar(Foo.java:1)]]></system-err>
            </testcase>
        </testsuite>"""

        case = JUnitParser.parse_string(xml).suites[0].cases[0]

        assert case.system_out == "Attempting login with expired token"
        assert case.system_err == "java.lang.NullPointerException\n    at Foo.bar(Foo.java:1)"


class TestTimes:
    """Optional numeric attributes stay absent rather than becoming zero."""

    @pytest.mark.parametrize(
        "attribute,expected",
        [
            ('time="1.5"', 1.5),
            ('time="0"', 0.0),
            ('time="1,234.5"', 1234.5),
            ('time="1,234"', 1234.0),
            ('time="0,5"', 0.5),
            ('time="1,2,3"', None),
            ('time="1,5.0"', None),
            ("", None),
            ('time="abc"', None),
            ('time="-1"', None),
            ('time="nan"', None),
        ],
    )
    def test_case_time(self, attribute: str, expected: float | None) -> None:
        xml = f'<testsuite name="S"><testcase name="t" {attribute}/></testsuite>'
        case = JUnitParser.parse_string(xml).suites[0].cases[0]
        assert case.time_seconds == expected

    def test_suite_without_time_is_absent(self):
        suite = JUnitParser.parse_string('<testsuite name="S"/>').suites[0]
        assert suite.time_seconds is None


class TestStackTraces:
    """Stack traces keep their internal layout."""

    def test_cdata_stack_trace_preserved(self):
        xml = """<testsuite name="S">
            <testcase name="t">
                <failure message="Expected 401"><![CDATA[
java.lang.AssertionError: Expected 401
	at com.example.LoginTest.test(LoginTest.java:10)

	at org.junit.Runner.run(Runner.java:5)
]]></failure>
            </testcase>
        </testsuite>"""

        failure = JUnitParser.parse_string(xml).suites[0].cases[0].outcome.failure

        assert failure.stack_trace == (
            "java.lang.AssertionError: Expected 401\n"
            "\tat com.example.LoginTest.test(LoginTest.java:10)\n"
            "\n"
            "\tat org.junit.Runner.run(Runner.java:5)"
        )

    def test_trim_block_keeps_indentation_of_first_line(self):
        assert trim_block("\n\n    indented\n  next\n   \n") == "    indented\n  next"

    def test_trim_block_blank_is_none(self):
        assert trim_block(" \n\t\n") is None
        assert trim_block(None) is None


class TestParseErrors:
    """Malformed and empty inputs fail with ParseError subclasses."""

    def test_unclosed_tag_is_malformed_with_position(self):
        xml = b'<testsuites>\n  <testsuite name="S">\n</testsuites>'

        with pytest.raises(MalformedReportError) as excinfo:
            JUnitParser.parse_bytes(xml, "broken.xml")

        assert excinfo.value.source_name == "broken.xml"
        assert excinfo.value.position is not None
        assert excinfo.value.position.startswith("line 3")
        assert "broken.xml" in str(excinfo.value)

    def test_empty_bytes_are_malformed(self):
        with pytest.raises(MalformedReportError):
            JUnitParser.parse_bytes(b"", "empty.xml")

    def test_binary_garbage_is_malformed(self):
        with pytest.raises(MalformedReportError):
            JUnitParser.parse_bytes(b"\x89PNG\r\n\x1a\n\x00\x00", "image.xml")

    def test_wrong_root_element(self):
        with pytest.raises(MalformedReportError, match="unexpected root element <html>"):
            JUnitParser.parse_bytes(b"<html><body/></html>", "page.xml")

    def test_testsuites_without_suites_is_empty(self):
        with pytest.raises(EmptyReportError):
            JUnitParser.parse_bytes(b"<testsuites/>", "none.xml")

    def test_errors_share_a_base_class(self):
        assert issubclass(MalformedReportError, ParseError)
        assert issubclass(EmptyReportError, ParseError)

    def test_empty_testsuite_root_is_valid(self):
        report = JUnitParser.parse_bytes(b'<testsuite name="Empty"/>', "b.xml")
        assert len(report.suites) == 1
        assert report.counts.total == 0
