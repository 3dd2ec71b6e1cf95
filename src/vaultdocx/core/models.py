"""Markdown syntax nodes and the styled document model built from them"""

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class Position:
    """Character offsets into the body text the node was parsed from."""
    start: int
    end: int


@dataclass(frozen=True)
class MdNode:
    """Parser-independent markdown syntax node."""
    kind:     str                            # text | strong | emphasis | delete | paragraph | other
    value:    Optional[str] = None           # literal text for leaf kinds
    children: tuple["MdNode", ...] = ()
    position: Optional[Position] = None      # block-level nodes only


@dataclass(frozen=True)
class Flags:
    """Inline formatting attributes; accumulated, never cleared."""
    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False

    def with_(self, **attrs: bool) -> "Flags":
        """Return a copy with the given attributes switched on."""
        return replace(self, **{name: True for name, on in attrs.items() if on})


NO_FLAGS = Flags()


@dataclass(frozen=True)
class StyledRun:
    text:  str
    flags: Flags = NO_FLAGS


@dataclass(frozen=True)
class StyledParagraph:
    runs:              tuple[StyledRun, ...] = ()
    heading_level:     Optional[int] = None
    page_break_before: bool = False

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class ParagraphStyle:
    """Named paragraph style; sizes in half-points, spacing in twips."""
    id:                   str
    name:                 str
    font:                 str
    size:                 int
    alignment:            str                    # justify | left | center | right
    first_line_indent_mm: float = 0.0
    line_spacing:         int = 240
    space_after:          Optional[int] = None
    color:                Optional[str] = None   # hex RGB, e.g. "000000"
    based_on:             Optional[str] = None
    next:                 Optional[str] = None


@dataclass(frozen=True)
class StyleSheet:
    styles: tuple[ParagraphStyle, ...] = ()

    def get(self, style_id: str) -> Optional[ParagraphStyle]:
        return next((s for s in self.styles if s.id == style_id), None)


@dataclass(frozen=True)
class Document:
    paragraphs: tuple[StyledParagraph, ...]
    styles:     StyleSheet = field(default_factory=StyleSheet)
