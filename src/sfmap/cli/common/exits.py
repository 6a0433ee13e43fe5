"""Exit handling for the CLI.

Operational failures (`MapperError`) end the command with a red error line
and exit code 1. Empty results end it with a warning and exit code 0.
"""

from typing import NoReturn

import typer

from sfmap.cli.common.output import out
from sfmap.core.errors import MapperError


def abort(exc: MapperError, *, prefix: str | None = None, code: int = 1) -> NoReturn:
    """Report a mapper failure (optionally prefixed, e.g. "Run aborted") and exit."""
    out.error(f"{prefix}: {exc}" if prefix else str(exc))
    raise typer.Exit(code) from exc


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning, used when there is nothing to process."""
    out.warn(msg)
    raise typer.Exit(code)
