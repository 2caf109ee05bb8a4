"""CLI decorators for common options and error handling."""

from dbgrep.cli.decorators.error_handling import handle_errors
from dbgrep.cli.decorators.options import (
    split_globs,
    with_connection_options,
    with_display_options,
    with_filter_options,
)

__all__ = [
    "handle_errors",
    "split_globs",
    "with_connection_options",
    "with_display_options",
    "with_filter_options",
]
