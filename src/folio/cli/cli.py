"""CLI entrypoint: Typer app definition and command registration"""

import typer

from folio.cli.commands import check_cmd, list_cmd, show_cmd


app = typer.Typer(name="folio", no_args_is_help=True, help="Markdown writing collection: validate, list, and render posts")

app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="check")(check_cmd)
