"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitedoc.cli.commands import build_cmd, show_cmd


app = typer.Typer(name="sitedoc", no_args_is_help=True, help="Resolve and write front matter documents")

app.command(name="build")(build_cmd)
app.command(name="show")(show_cmd)
