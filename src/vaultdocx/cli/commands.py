"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from vaultdocx.config import Settings, load_config
from vaultdocx.core.export import ExportError
from vaultdocx.host.local import open_local_host
from vaultdocx.host.model import Menu, VaultEntry, VaultFolder
from vaultdocx.host.ports import Host
from vaultdocx.log import configure_logging
from vaultdocx.plugin import ExportToDocxPlugin


VaultOption = Annotated[Optional[str], typer.Option("--vault", help="Vault root directory (default: cwd)")]
TitleOption = Annotated[Optional[str], typer.Option("--title-field", help="Front-matter field used as note title")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _entry(host: Host, path: str, folder: bool) -> VaultEntry:
    """Resolve a filesystem path to a vault folder or file."""
    try:
        rel = host.vault.relative(Path(path))
        return host.vault.get_folder(rel) if folder else host.vault.get_file(rel)
    except (ValueError, FileNotFoundError) as e:
        _fail(f"Cannot open {path}", e)


def _click(plugin: ExportToDocxPlugin, menu: Menu) -> None:
    """Click the export item of menu; failures were already shown by the notifier."""
    try:
        menu.item(plugin.settings.menu_title).click()
    except KeyError as e:
        _fail("Export is not available here", e)
    except ExportError:
        raise typer.Exit(1)


def callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Log level, e.g. INFO or DEBUG")] = None,
    log_format: Annotated[Optional[str], typer.Option("--log-format", help="console or json")] = None,
    ):
    """Export vault folders of markdown notes as Word documents."""
    settings = _settings(overrides={"log_level": log_level, "log_format": log_format})
    configure_logging(settings.log_level, settings.log_format)


def export_cmd(
    folder: Annotated[str, typer.Argument(help="Folder of notes to export")],
    vault: VaultOption = None,
    title_field: TitleOption = None,
    navigator: Annotated[bool, typer.Option("--navigator", help="Open the menu through the companion navigator")] = False,
    ):
    """Export a folder's notes to <folder>.docx beside the folder."""
    settings = _settings(overrides={"title_field": title_field})
    host = open_local_host(Path(vault or "."), navigator=navigator)
    plugin = ExportToDocxPlugin(host, settings)
    plugin.load()
    try:
        entry = _entry(host, folder, folder=True)
        menu = host.navigator.open_folder_menu(entry) if navigator else host.workspace.open_menu(entry)
        _click(plugin, menu)
    finally:
        plugin.unload()


def export_file_cmd(
    file: Annotated[str, typer.Argument(help="Markdown note to export")],
    vault: VaultOption = None,
    title_field: TitleOption = None,
    ):
    """Export a single note to <note>.docx beside it."""
    settings = _settings(overrides={"title_field": title_field})
    host = open_local_host(Path(vault or "."))
    plugin = ExportToDocxPlugin(host, settings)
    plugin.load()
    try:
        _click(plugin, host.workspace.open_menu(_entry(host, file, folder=False)))
    finally:
        plugin.unload()


def menu_cmd(
    path: Annotated[str, typer.Argument(help="Folder or note to show the context menu for")],
    vault: VaultOption = None,
    ):
    """List the context-menu items registered for a folder or note."""
    settings = _settings()
    host = open_local_host(Path(vault or "."))
    plugin = ExportToDocxPlugin(host, settings)
    plugin.load()
    try:
        is_folder = Path(path).is_dir()
        entry = _entry(host, path, folder=is_folder)
        items = host.workspace.open_menu(entry).items
    finally:
        plugin.unload()

    if not items:
        typer.echo(f"No menu items for {entry.path or '/'}.")
        raise typer.Exit(1)
    kind = "folder" if isinstance(entry, VaultFolder) else "file"
    for item in items:
        typer.echo(f"  [{kind}] {item.title} ({item.icon})")
