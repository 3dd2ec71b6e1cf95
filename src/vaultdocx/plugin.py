"""Plugin lifecycle: menu registration, teardown, and export actions"""

from typing import Optional

import structlog

from vaultdocx.config import Settings
from vaultdocx.core.export import ExportError, markdown_files, output_path, run_export
from vaultdocx.host.model import FolderMenuContext, Menu, MenuItem, VaultEntry, VaultFile, VaultFolder
from vaultdocx.host.ports import Disposer, Host


logger = structlog.get_logger(__name__)


class PluginError(RuntimeError):
    """Raised when releasing plugin registrations fails."""


class ExportToDocxPlugin:
    """Adds "Export as Word document" to markdown file and folder menus."""

    def __init__(self, host: Host, settings: Optional[Settings] = None):
        self.host = host
        self.settings = settings or Settings()
        self._disposers: list[Disposer] = []

    @property
    def loaded(self) -> bool:
        return bool(self._disposers)

    def load(self) -> None:
        """Register menu callbacks with the workspace and, when present, the navigator."""
        workspace = self.host.workspace
        self._disposers.append(workspace.on_file_menu(self._on_file_menu))
        self._disposers.append(workspace.on_folder_menu(self._on_folder_menu))

        navigator = self.host.navigator
        if navigator is not None:
            dispose = navigator.register_folder_menu(self._on_navigator_folder_menu)
            if dispose is not None:
                self._disposers.append(dispose)
        logger.debug("plugin.loaded", registrations=len(self._disposers))

    def unload(self) -> None:
        """Release every registration made by load, even when one of them fails."""
        disposers, self._disposers = self._disposers, []
        errors: list[Exception] = []
        for dispose in disposers:
            try:
                dispose()
            except Exception as exc:
                errors.append(exc)
        logger.debug("plugin.unloaded", released=len(disposers) - len(errors), failed=len(errors))
        if errors:
            raise PluginError(f"Failed to release {len(errors)} registration(s): {errors[0]}") from errors[0]

    # --- menus ---

    def _add_export_item(self, item: MenuItem, entry: VaultEntry) -> None:
        action = self.export_folder if isinstance(entry, VaultFolder) else self.export_file
        (item.set_title(self.settings.menu_title)
             .set_icon(self.settings.menu_icon)
             .on_click(lambda: self._run(action, entry)))

    def _on_file_menu(self, menu: Menu, entry: VaultEntry) -> None:
        if not isinstance(entry, VaultFile) or entry.extension != self.settings.markdown_extension:
            return
        menu.add_item(lambda item: self._add_export_item(item, entry))

    def _on_folder_menu(self, menu: Menu, entry: VaultEntry) -> None:
        if not isinstance(entry, VaultFolder):
            return
        menu.add_item(lambda item: self._add_export_item(item, entry))

    def _on_navigator_folder_menu(self, context: FolderMenuContext) -> None:
        context.add_item(lambda item: self._add_export_item(item, context.folder))

    def _run(self, action, entry: VaultEntry) -> str:
        """Run an export from a menu click, reporting the outcome to the user."""
        try:
            path = action(entry)
        except ExportError as exc:
            logger.error("export.failed", path=entry.path, error=str(exc))
            self.host.notifier.notice(f"Export failed: {exc}")
            raise
        self.host.notifier.notice(f"Exported to {path}")
        return path

    # --- actions ---

    def export_folder(self, folder: VaultFolder) -> str:
        """Export the folder's markdown notes to <folder-name>.<ext> beside the folder."""
        destination = output_path(folder.parent, folder.name, self.settings.output_extension)
        return run_export(
            markdown_files(folder, self.settings.markdown_extension),
            destination,
            self.host.vault,
            self.host.metadata_cache,
            self.settings,
        )

    def export_file(self, file: VaultFile) -> str:
        """Export a single note to <basename>.<ext> beside it."""
        destination = output_path(file.parent, file.basename, self.settings.output_extension)
        return run_export(
            [file],
            destination,
            self.host.vault,
            self.host.metadata_cache,
            self.settings,
        )
