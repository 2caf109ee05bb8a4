"""Output formatting utilities for CLI."""

from __future__ import annotations

import click

from dbgrep.core.report import Report


class OutputFormatter:
    """Write CLI output to the right stream.

    The report is the only thing written to stdout; everything addressed to
    the operator goes to stderr.

    Example:
        >>> out = OutputFormatter()
        >>> out.report(report)
        >>> out.summary(report)
    """

    @staticmethod
    def report(report: Report) -> None:
        """Write the report text to stdout."""
        if report.text:
            click.echo(report.text, nl=False)

    @staticmethod
    def summary(report: Report) -> None:
        """Write the summary counts to stderr."""
        click.echo(report.summary, err=True)
