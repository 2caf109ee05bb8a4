"""Error handling decorators for CLI commands."""

from __future__ import annotations

import signal
import sys
from functools import wraps

import click

from dbgrep.errors import (
    CatalogError,
    ConfigurationError,
    DatabaseConnectionError,
    DbGrepError,
)
from dbgrep.utils.logging import get_logger

logger = get_logger(__name__)

# Handle SIGPIPE gracefully (prevent BrokenPipeError when piping to head, etc.)
try:
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
except AttributeError:
    # Windows doesn't have SIGPIPE
    pass


def handle_errors(f):
    """Decorator to turn fatal errors into a message and a non-zero exit.

    Example:
        @click.command()
        @handle_errors
        def my_command():
            pass
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except click.Abort:
            raise
        except BrokenPipeError:
            # Output was cut short (e.g. piped to head); not an error
            sys.stdout = open("/dev/null", "w")
            sys.exit(0)
        except ConfigurationError as e:
            click.echo(f"❌ Configuration error: {e}", err=True)
            raise click.Abort()
        except DatabaseConnectionError as e:
            click.echo(f"❌ Error connecting to database: {e}", err=True)
            raise click.Abort()
        except CatalogError as e:
            click.echo(f"❌ Error getting tables: {e}", err=True)
            raise click.Abort()
        except DbGrepError as e:
            click.echo(f"❌ {e}", err=True)
            raise click.Abort()
        except Exception as e:
            click.echo(f"❌ Unexpected error: {e}", err=True)
            logger.exception("Unexpected error in command")
            raise click.Abort()

    return wrapper
