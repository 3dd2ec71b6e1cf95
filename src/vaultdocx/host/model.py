"""Vault entries, file metadata, and context menus exposed by a host"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union


@dataclass(eq=False)
class VaultFolder:
    path:     str                                # vault-relative, "" for the root
    name:     str
    parent:   Optional[VaultFolder] = None
    children: list[VaultEntry] = field(default_factory=list)


@dataclass(eq=False)
class VaultFile:
    path:   str
    name:   str                                  # file name with extension
    parent: Optional[VaultFolder] = None

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else ""

    @property
    def basename(self) -> str:
        stem, dot, _ = self.name.rpartition(".")
        return stem if dot else self.name


VaultEntry = Union[VaultFolder, VaultFile]


@dataclass(frozen=True)
class FileCache:
    """Metadata the host derives from a note without a full parse."""
    frontmatter:          Optional[dict[str, Any]] = None
    frontmatter_end_line: Optional[int] = None   # 0-based line of the closing delimiter


class MenuItem:
    """A context-menu entry configured through chained setters."""

    def __init__(self):
        self.title = ""
        self.icon: Optional[str] = None
        self._callback: Optional[Callable[[], Any]] = None

    def set_title(self, title: str) -> MenuItem:
        self.title = title
        return self

    def set_icon(self, icon: str) -> MenuItem:
        self.icon = icon
        return self

    def on_click(self, callback: Callable[[], Any]) -> MenuItem:
        self._callback = callback
        return self

    def click(self) -> Any:
        if self._callback is None:
            return None
        return self._callback()


class Menu:
    def __init__(self):
        self.items: list[MenuItem] = []

    def add_item(self, build: Callable[[MenuItem], Any]) -> Menu:
        item = MenuItem()
        build(item)
        self.items.append(item)
        return self

    def item(self, title: str) -> MenuItem:
        """Return the first item with the given title."""
        for item in self.items:
            if item.title == title:
                return item
        raise KeyError(f"No menu item titled {title!r}")


@dataclass(frozen=True)
class FolderMenuContext:
    """Callback argument of a companion navigator's folder menu."""
    add_item: Callable[[Callable[[MenuItem], Any]], Any]
    folder:   VaultFolder
