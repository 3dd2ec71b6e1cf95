"""Filesystem-backed host: vault, metadata cache, menus, and notices"""

import posixpath
from pathlib import Path
from typing import Callable, Optional

import typer

from vaultdocx.core.parse import split_frontmatter
from vaultdocx.host.model import FileCache, FolderMenuContext, Menu, VaultEntry, VaultFile, VaultFolder
from vaultdocx.host.ports import Disposer, Host, MenuCallback


def _normalize(path: str) -> str:
    """Vault-relative posix path without leading/trailing slashes; "" is the root."""
    rel = posixpath.normpath(str(path).replace("\\", "/")).strip("/")
    return "" if rel == "." else rel


class LocalVault:
    """Vault rooted at a directory; dot-prefixed entries are hidden."""

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def relative(self, path: Path) -> str:
        """Vault-relative path of a filesystem path; raises ValueError outside the vault."""
        path = Path(path)
        if not path.is_absolute():
            path = Path.cwd() / path
        return _normalize(path.resolve().relative_to(self.root).as_posix())

    def _parent(self, rel: str) -> Optional[VaultFolder]:
        if not rel:
            return None
        parent_rel = posixpath.dirname(rel)
        name = posixpath.basename(parent_rel) if parent_rel else self.root.name
        return VaultFolder(path=parent_rel, name=name, parent=self._parent(parent_rel))

    def _entry(self, path: Path, folder: VaultFolder) -> VaultEntry:
        rel = posixpath.join(folder.path, path.name) if folder.path else path.name
        if path.is_dir():
            return VaultFolder(path=rel, name=path.name, parent=folder)
        return VaultFile(path=rel, name=path.name, parent=folder)

    def get_folder(self, path: str) -> VaultFolder:
        """Return the folder at path with its direct children sorted by name."""
        rel = _normalize(path)
        target = self.root / rel
        if not target.is_dir():
            raise FileNotFoundError(f"Folder not found in vault: {rel or '/'}")
        folder = VaultFolder(
            path=rel,
            name=posixpath.basename(rel) if rel else self.root.name,
            parent=self._parent(rel),
        )
        folder.children = [
            self._entry(p, folder)
            for p in sorted(target.iterdir(), key=lambda p: p.name)
            if not p.name.startswith(".")
        ]
        return folder

    def get_file(self, path: str) -> VaultFile:
        rel = _normalize(path)
        if not rel or not (self.root / rel).is_file():
            raise FileNotFoundError(f"File not found in vault: {rel or '/'}")
        return VaultFile(
            path=rel,
            name=posixpath.basename(rel),
            parent=self.get_folder(posixpath.dirname(rel)),
        )

    def read(self, file: VaultFile) -> str:
        return (self.root / file.path).read_text(encoding="utf-8")

    def write_binary(self, path: str, data: bytes) -> None:
        (self.root / _normalize(path)).write_bytes(data)


class LocalMetadataCache:
    """Reads front matter straight from the note on each lookup."""

    def __init__(self, vault: LocalVault):
        self.vault = vault

    def get_file_cache(self, file: VaultFile) -> Optional[FileCache]:
        frontmatter, end_line = split_frontmatter(self.vault.read(file))
        if end_line is None:
            return None
        return FileCache(frontmatter=frontmatter, frontmatter_end_line=end_line)


def _register(callbacks: list, callback) -> Disposer:
    callbacks.append(callback)

    def dispose() -> None:
        if callback in callbacks:
            callbacks.remove(callback)

    return dispose


class LocalWorkspace:
    """In-process context menus built on demand for an entry."""

    def __init__(self):
        self._file_callbacks: list[MenuCallback] = []
        self._folder_callbacks: list[MenuCallback] = []

    def on_file_menu(self, callback: MenuCallback) -> Disposer:
        return _register(self._file_callbacks, callback)

    def on_folder_menu(self, callback: MenuCallback) -> Disposer:
        return _register(self._folder_callbacks, callback)

    def open_menu(self, entry: VaultEntry) -> Menu:
        callbacks = self._folder_callbacks if isinstance(entry, VaultFolder) else self._file_callbacks
        menu = Menu()
        for callback in list(callbacks):
            callback(menu, entry)
        return menu


class LocalNavigator:
    """Companion folder-menu channel with the {add_item, folder} callback shape."""

    def __init__(self):
        self._callbacks: list[Callable[[FolderMenuContext], None]] = []

    def register_folder_menu(self, callback: Callable[[FolderMenuContext], None]) -> Optional[Disposer]:
        return _register(self._callbacks, callback)

    @property
    def registered(self) -> int:
        return len(self._callbacks)

    def open_folder_menu(self, folder: VaultFolder) -> Menu:
        menu = Menu()
        context = FolderMenuContext(add_item=menu.add_item, folder=folder)
        for callback in list(self._callbacks):
            callback(context)
        return menu


class EchoNotifier:
    def notice(self, message: str) -> None:
        typer.echo(message)


def open_local_host(root: Path, navigator: bool = False) -> Host:
    """Assemble a Host over the directory at root."""
    vault = LocalVault(root)
    return Host(
        vault=vault,
        metadata_cache=LocalMetadataCache(vault),
        workspace=LocalWorkspace(),
        notifier=EchoNotifier(),
        navigator=LocalNavigator() if navigator else None,
    )
