"""Top-level block nodes to styled paragraphs, with a raw-source fallback"""

from typing import Iterable

from vaultdocx.core.inline import format_children
from vaultdocx.core.models import MdNode, StyledParagraph, StyledRun


def source_text(node: MdNode, body: str) -> str:
    """Return the exact body substring spanned by node; empty when it has no position."""
    if node.position is None:
        return ""
    return body[node.position.start:node.position.end]


def convert_block(node: MdNode, body: str) -> StyledParagraph:
    """Convert one top-level node; only paragraphs keep inline formatting."""
    if node.kind == 'paragraph':
        return StyledParagraph(runs=tuple(format_children(node)))
    return StyledParagraph(runs=(StyledRun(source_text(node, body)),))


def convert_blocks(body: str, nodes: Iterable[MdNode]) -> list[StyledParagraph]:
    """Convert top-level nodes of body to paragraphs in document order."""
    return [convert_block(node, body) for node in nodes]
