"""Fixed two-style sheet for exported documents"""

from vaultdocx.config import Settings
from vaultdocx.core.models import ParagraphStyle, StyleSheet


NORMAL = "Normal"
HEADING_1 = "Heading1"


def build_stylesheet(settings: Settings) -> StyleSheet:
    """Return the Normal body style and the Heading1 style based on it."""
    normal = ParagraphStyle(
        id=NORMAL,
        name="Normal",
        font=settings.font,
        size=settings.body_size,
        alignment="justify",
        first_line_indent_mm=settings.first_line_indent_mm,
        line_spacing=settings.line_spacing,
    )
    heading = ParagraphStyle(
        id=HEADING_1,
        name="Heading 1",
        font=settings.font,
        size=settings.heading_size,
        alignment="left",
        first_line_indent_mm=0.0,
        line_spacing=settings.heading_line_spacing,
        space_after=settings.heading_space_after,
        color="000000",
        based_on=NORMAL,
        next=NORMAL,
    )
    return StyleSheet(styles=(normal, heading))
