from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol

from vaultdocx.host.model import FileCache, FolderMenuContext, Menu, VaultEntry, VaultFile, VaultFolder

Disposer = Callable[[], None]
MenuCallback = Callable[[Menu, VaultEntry], None]


class Vault(Protocol):
    """
    Folder tree plus text reads and binary writes, addressed by vault-relative path.
    """

    def get_folder(self, path: str) -> VaultFolder:
        pass

    def get_file(self, path: str) -> VaultFile:
        pass

    def read(self, file: VaultFile) -> str:
        pass

    def write_binary(self, path: str, data: bytes) -> None:
        pass

    def relative(self, path: Path) -> str:
        """Vault-relative path of a filesystem path; ValueError when it lies outside the vault."""


class MetadataCache(Protocol):
    def get_file_cache(self, file: VaultFile) -> Optional[FileCache]:
        pass


class WorkspaceMenus(Protocol):
    """
    Context-menu hooks; each registration returns a disposer.
    """

    def on_file_menu(self, callback: MenuCallback) -> Disposer:
        pass

    def on_folder_menu(self, callback: MenuCallback) -> Disposer:
        pass


class Notifier(Protocol):
    def notice(self, message: str) -> None:
        pass


class NavigatorMenus(Protocol):
    """
    Optional companion extension offering its own folder menu.
    """

    def register_folder_menu(
        self, callback: Callable[[FolderMenuContext], None]
    ) -> Optional[Disposer]:
        pass


@dataclass
class Host:
    vault:          Vault
    metadata_cache: MetadataCache
    workspace:      WorkspaceMenus
    notifier:       Notifier
    navigator:      Optional[NavigatorMenus] = None
