"""CLI entrypoint: Typer app definition and command registration"""

import typer

from vaultdocx.cli.commands import callback, export_cmd, export_file_cmd, menu_cmd


app = typer.Typer(name="vaultdocx", no_args_is_help=True, help="Export vault markdown notes as Word documents")

app.callback()(callback)
app.command(name="export")(export_cmd)
app.command(name="export-file")(export_file_cmd)
app.command(name="menu")(menu_cmd)
