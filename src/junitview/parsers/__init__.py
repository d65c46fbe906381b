"""Report parsers."""

from junitview.parsers.junit import JUnitParser

__all__ = ["JUnitParser"]
