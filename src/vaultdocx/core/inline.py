"""Inline formatter: phrasing nodes to flat styled runs"""

from vaultdocx.core.models import NO_FLAGS, Flags, MdNode, StyledRun


FLAG_BY_KIND: dict[str, str] = {
    'strong':   'bold',
    'emphasis': 'italic',
    'delete':   'strikethrough',
}


def format_children(node: MdNode, flags: Flags = NO_FLAGS) -> list[StyledRun]:
    """Concatenate the runs of each child of node, in child order."""
    runs: list[StyledRun] = []
    for child in node.children:
        runs.extend(format_inline(child, flags))
    return runs


def format_inline(node: MdNode, flags: Flags = NO_FLAGS) -> list[StyledRun]:
    """Flatten one phrasing node into runs carrying the accumulated flags.

    Unknown kinds keep their text: a literal value becomes one run, children
    are descended with the ambient flags. Only a node with neither yields
    nothing.
    """
    attr = FLAG_BY_KIND.get(node.kind)
    if attr is not None:
        return format_children(node, flags.with_(**{attr: True}))
    if node.value is not None:
        return [StyledRun(node.value, flags)]
    return format_children(node, flags)
