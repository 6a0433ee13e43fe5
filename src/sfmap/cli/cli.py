"""CLI application for Snowflake schema mapping."""

import typer

from sfmap.cli.commands.catalog import databases_command, warehouses_command
from sfmap.cli.commands.mapping import map_command
from sfmap.cli.common.logs import configure_logging
from sfmap.cli.common.options import DebugOpt

app = typer.Typer(
    help="sfmap - fetch and map Snowflake database schemas",
    no_args_is_help=True,
)


@app.callback()
def _init(debug: bool = DebugOpt):
    """Fetch and map Snowflake database schemas to JSON files."""
    configure_logging(debug)


app.command("map")(map_command)
app.command("warehouses")(warehouses_command)
app.command("databases")(databases_command)


if __name__ == "__main__":
    app()
