"""Logging set-up for the CLI.

Core modules log through the standard `logging` module; the CLI routes
those records to the shared Rich console so they interleave cleanly with
status spinners and progress bars.
"""

import logging

from rich.logging import RichHandler

from sfmap.cli.common.output import console


def configure_logging(debug: bool = False) -> None:
    """Install a Rich handler on the root logger (DEBUG with --debug, else INFO)."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # the connector is chatty at INFO
    logging.getLogger("snowflake.connector").setLevel(
        logging.DEBUG if debug else logging.WARNING
    )
