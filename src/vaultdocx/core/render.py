"""Document serializer: styled paragraphs to .docx bytes via python-docx"""

import io

import docx
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Mm, Pt, RGBColor, Twips

from vaultdocx.core.models import Document, ParagraphStyle, StyledParagraph, StyleSheet
from vaultdocx.core.styles import NORMAL


ALIGNMENTS = {
    'justify': WD_ALIGN_PARAGRAPH.JUSTIFY,
    'left':    WD_ALIGN_PARAGRAPH.LEFT,
    'center':  WD_ALIGN_PARAGRAPH.CENTER,
    'right':   WD_ALIGN_PARAGRAPH.RIGHT,
}
SINGLE_LINE_TWIPS = 240
THEME_FONT_ATTRS = ("w:asciiTheme", "w:hAnsiTheme", "w:eastAsiaTheme", "w:cstheme")


def _docx_style(doc, name: str):
    """Look up a style by name, adding a paragraph style when the template lacks it."""
    try:
        return doc.styles[name]
    except KeyError:
        return doc.styles.add_style(name, WD_STYLE_TYPE.PARAGRAPH)


def _apply_style(doc, definition: ParagraphStyle, sheet: StyleSheet) -> None:
    """Write one ParagraphStyle onto the matching docx style."""
    style = _docx_style(doc, definition.name)
    if definition.based_on and (base := sheet.get(definition.based_on)):
        style.base_style = _docx_style(doc, base.name)
    if definition.next and (nxt := sheet.get(definition.next)):
        style.next_paragraph_style = _docx_style(doc, nxt.name)

    style.font.name = definition.font
    style.font.size = Pt(definition.size / 2)
    if definition.color:
        style.font.color.rgb = RGBColor.from_string(definition.color)
    # built-in headings name theme fonts, which win over an explicit font name
    rfonts = style.element.rPr.rFonts
    for attr in THEME_FONT_ATTRS:
        rfonts.attrib.pop(qn(attr), None)

    fmt = style.paragraph_format
    fmt.alignment = ALIGNMENTS[definition.alignment]
    fmt.first_line_indent = Mm(definition.first_line_indent_mm)
    fmt.line_spacing = definition.line_spacing / SINGLE_LINE_TWIPS
    if definition.space_after is not None:
        fmt.space_after = Twips(definition.space_after)


def _style_name(paragraph: StyledParagraph, sheet: StyleSheet) -> str:
    """Return the docx style name for a paragraph: HeadingN or Normal."""
    if paragraph.heading_level:
        definition = sheet.get(f"Heading{paragraph.heading_level}")
        return definition.name if definition else f"Heading {paragraph.heading_level}"
    definition = sheet.get(NORMAL)
    return definition.name if definition else "Normal"


def _add_paragraph(doc, paragraph: StyledParagraph, sheet: StyleSheet) -> None:
    p = doc.add_paragraph(style=_style_name(paragraph, sheet))
    if paragraph.page_break_before:
        p.paragraph_format.page_break_before = True
    for run in paragraph.runs:
        r = p.add_run(run.text)
        if run.flags.bold:
            r.bold = True
        if run.flags.italic:
            r.italic = True
        if run.flags.strikethrough:
            r.font.strike = True


def render_docx(document: Document) -> bytes:
    """Serialize a Document to .docx bytes."""
    doc = docx.Document()
    for definition in document.styles.styles:
        _apply_style(doc, definition, document.styles)
    for paragraph in document.paragraphs:
        _add_paragraph(doc, paragraph, document.styles)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()
