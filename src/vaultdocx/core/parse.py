"""Frontmatter splitting and markdown-it parsing into MdNode trees"""

import re
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from vaultdocx.core.models import MdNode, Position


FRONTMATTER_DELIM = "---"
KIND_ALIASES = {"em": "emphasis", "s": "delete"}
LINE_BREAKS = {"softbreak", "hardbreak"}
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")  # the breaks markdown-it normalizes to \n


class FrontmatterError(ValueError):
    """Raised when a note's front-matter block is not a YAML mapping."""


def make_parser(preset: str = "gfm-like") -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_frontmatter(text: str) -> tuple[Optional[dict[str, Any]], Optional[int]]:
    """Return (frontmatter, end_line) where end_line is the 0-based closing delimiter line.

    Both are None when the text has no delimited front-matter block.
    """
    lines = text.split("\n")
    if lines[0].rstrip() != FRONTMATTER_DELIM:
        return None, None
    end_line = next(
        (i for i, line in enumerate(lines[1:], start=1) if line.rstrip() == FRONTMATTER_DELIM),
        None,
    )
    if end_line is None:
        return None, None
    try:
        data = yaml.safe_load("\n".join(lines[1:end_line])) or {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(data, dict):
        raise FrontmatterError(f"Invalid YAML frontmatter: expected a mapping, got {type(data).__name__}")
    return data, end_line


def body_text(content: str, frontmatter_end_line: Optional[int]) -> str:
    """Return content from the line after the front-matter block, or all of it."""
    start = frontmatter_end_line + 1 if frontmatter_end_line is not None else 0
    return "\n".join(content.split("\n")[start:])


class _LineIndex:
    """Maps markdown-it line ranges onto character offsets of the source."""

    def __init__(self, source: str):
        self.source = source
        self.starts = [0]
        self.ends = []
        for m in LINE_BREAK_RE.finditer(source):
            self.ends.append(m.start())
            self.starts.append(m.end())
        self.ends.append(len(source))

    def _blank(self, line: int) -> bool:
        return not self.source[self.starts[line]:self.ends[line]].strip()

    def position(self, line_map: Optional[tuple[int, int]]) -> Optional[Position]:
        """Span from the first line to the end of the last non-blank line, line break excluded."""
        if not line_map:
            return None
        first, last = line_map[0], min(line_map[1], len(self.starts)) - 1
        while last > first and self._blank(last):
            last -= 1
        return Position(self.starts[first], self.ends[last])


def to_node(tree: SyntaxTreeNode, index: Optional[_LineIndex] = None) -> MdNode:
    """Convert a markdown-it syntax tree node into an MdNode."""
    if tree.type in LINE_BREAKS:
        return MdNode(kind="text", value="\n")

    if tree.type == "paragraph":
        # paragraph -> inline -> phrasing nodes; the inline wrapper is dropped
        sources = [c for inline in tree.children for c in inline.children]
    else:
        sources = tree.children
    # markdown-it leaves empty text tokens beside delimiter pairs at paragraph edges
    children = tuple(
        to_node(child) for child in sources
        if not (child.type == "text" and child.content == "")
    )

    value = None
    if not tree.is_nested and not children:
        value = tree.content

    return MdNode(
        kind=KIND_ALIASES.get(tree.type, tree.type),
        value=value,
        children=children,
        position=index.position(tree.map) if index is not None else None,
    )


def parse_body(body: str, preset: str = "gfm-like") -> tuple[MdNode, ...]:
    """Parse body text and return its top-level block nodes in document order."""
    root = SyntaxTreeNode(make_parser(preset).parse(body))
    index = _LineIndex(body)
    return tuple(to_node(child, index) for child in root.children)
