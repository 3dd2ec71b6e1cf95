"""Export orchestration: notes to titled paragraphs, document assembly, and output paths"""

from typing import Iterable, Optional

import structlog

from vaultdocx.config import Settings
from vaultdocx.core.blocks import convert_blocks
from vaultdocx.core.models import Document, StyledParagraph, StyledRun
from vaultdocx.core.parse import body_text, parse_body
from vaultdocx.core.render import render_docx
from vaultdocx.core.styles import build_stylesheet
from vaultdocx.host.model import FileCache, VaultFile, VaultFolder
from vaultdocx.host.ports import MetadataCache, Vault


logger = structlog.get_logger(__name__)


class ExportError(RuntimeError):
    """Raised when reading, converting, or writing an export fails."""


def markdown_files(folder: VaultFolder, extension: str = "md") -> list[VaultFile]:
    """Return the folder's direct markdown children in the folder's own order."""
    return [c for c in folder.children if isinstance(c, VaultFile) and c.extension == extension]


def resolve_title(file: VaultFile, cache: Optional[FileCache], title_field: str = "dxtitle") -> str:
    """Return the front-matter title field when set, else the file's base name."""
    value = (cache.frontmatter or {}).get(title_field) if cache else None
    return file.basename if value is None else str(value)


def title_paragraph(title: str) -> StyledParagraph:
    """Level-1 heading that starts a new page."""
    return StyledParagraph(runs=(StyledRun(title),), heading_level=1, page_break_before=True)


def file_paragraphs(
    file: VaultFile,
    vault: Vault,
    metadata: MetadataCache,
    settings: Settings,
    ) -> list[StyledParagraph]:
    """Title heading followed by the converted body of one note."""
    cache = metadata.get_file_cache(file)
    paragraphs = [title_paragraph(resolve_title(file, cache, settings.title_field))]

    content = vault.read(file)
    body = body_text(content, cache.frontmatter_end_line if cache else None)
    paragraphs.extend(convert_blocks(body, parse_body(body, settings.parser_config)))
    return paragraphs


def collect_paragraphs(
    files: Iterable[VaultFile],
    vault: Vault,
    metadata: MetadataCache,
    settings: Settings,
    ) -> list[StyledParagraph]:
    """Concatenate file_paragraphs for each file, wrapping failures with the file path."""
    paragraphs: list[StyledParagraph] = []
    for file in files:
        try:
            converted = file_paragraphs(file, vault, metadata, settings)
        except Exception as e:
            raise ExportError(f"Failed to export {file.path}: {e}") from e
        logger.debug("export.file", path=file.path, paragraphs=len(converted))
        paragraphs.extend(converted)
    return paragraphs


def build_document(paragraphs: Iterable[StyledParagraph], settings: Settings) -> Document:
    return Document(paragraphs=tuple(paragraphs), styles=build_stylesheet(settings))


def output_path(parent: Optional[VaultFolder], name: str, extension: str = "docx") -> str:
    """Return <parent>/<name>.<ext>, or <name>.<ext> at the vault root."""
    filename = f"{name}.{extension}"
    if parent is not None and parent.path:
        return f"{parent.path}/{filename}"
    return filename


def run_export(
    files: Iterable[VaultFile],
    destination: str,
    vault: Vault,
    metadata: MetadataCache,
    settings: Settings,
    ) -> str:
    """Convert files into one document written to destination. Returns destination."""
    files = list(files)
    logger.info("export.started", destination=destination, files=len(files))

    document = build_document(collect_paragraphs(files, vault, metadata, settings), settings)
    try:
        data = render_docx(document)
    except Exception as e:
        raise ExportError(f"Failed to render {destination}: {e}") from e
    try:
        vault.write_binary(destination, data)
    except Exception as e:
        raise ExportError(f"Failed to write {destination}: {e}") from e

    logger.info("export.written", destination=destination, paragraphs=len(document.paragraphs))
    return destination
