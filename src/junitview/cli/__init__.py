"""CLI package for junitview."""

from junitview.cli.app import app


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = ["app", "main"]
