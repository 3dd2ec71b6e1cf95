"""Unit tests for core/export.py"""

import io

import docx
import pytest

from vaultdocx.config import Settings
from vaultdocx.core.export import (
    ExportError,
    collect_paragraphs,
    markdown_files,
    output_path,
    resolve_title,
    run_export,
    title_paragraph,
)
from vaultdocx.core.models import Flags, StyledRun
from vaultdocx.host.local import LocalMetadataCache, LocalVault
from vaultdocx.host.model import FileCache, VaultFile, VaultFolder


@pytest.fixture(name="vault")
def vault_fixture(vault_root):
    return LocalVault(vault_root)


@pytest.fixture(name="metadata")
def metadata_fixture(vault):
    return LocalMetadataCache(vault)


def test_markdown_files_skips_other_entries(vault):
    """Only direct .md children are exported; folders and other files are skipped."""
    files = markdown_files(vault.get_folder("Book"))
    assert [f.path for f in files] == ["Book/A.md", "Book/B.md"]


@pytest.mark.parametrize("cache,expected", [
    (FileCache(frontmatter={"dxtitle": "First"}, frontmatter_end_line=2), "First"),
    (FileCache(frontmatter={"dxtitle": None}, frontmatter_end_line=2), "note"),
    (FileCache(frontmatter={"title": "Other"}, frontmatter_end_line=2), "note"),
    (FileCache(frontmatter={"dxtitle": 3}, frontmatter_end_line=2), "3"),
    (None, "note"),
])
def test_resolve_title(cache, expected):
    """The dxtitle field wins; otherwise the file's base name is used."""
    assert resolve_title(VaultFile(path="note.md", name="note.md"), cache) == expected


def test_title_paragraph_starts_new_page():
    """Title headings are level 1 with a page break before."""
    paragraph = title_paragraph("First")
    assert paragraph.runs == (StyledRun("First"),)
    assert paragraph.heading_level == 1
    assert paragraph.page_break_before is True


def test_collect_paragraphs_orders_files_and_bodies(vault, metadata):
    """Each file contributes its heading then its body paragraphs, in folder order."""
    files = markdown_files(vault.get_folder("Book"))
    paragraphs = collect_paragraphs(files, vault, metadata, Settings())
    assert [(p.text, p.heading_level) for p in paragraphs] == [
        ("First", 1),
        ("Alpha bold text.", None),
        ("- one\n- two", None),
        ("B", 1),
        ("hello", None),
    ]
    assert StyledRun("bold", Flags(bold=True)) in paragraphs[1].runs


def test_collect_paragraphs_is_deterministic(vault, metadata):
    """Re-running on an unchanged folder yields identical paragraphs."""
    files = markdown_files(vault.get_folder("Book"))
    first = collect_paragraphs(files, vault, metadata, Settings())
    second = collect_paragraphs(markdown_files(vault.get_folder("Book")), vault, metadata, Settings())
    assert first == second


def test_custom_title_field(vault_root, vault, metadata):
    """title_field selects which front-matter key provides the title."""
    (vault_root / "Book" / "B.md").write_text("---\nname: Second\n---\nhello\n")
    files = markdown_files(vault.get_folder("Book"))
    paragraphs = collect_paragraphs(files, vault, metadata, Settings(title_field="name"))
    titles = [p.text for p in paragraphs if p.heading_level == 1]
    assert titles == ["A", "Second"]


def test_bad_frontmatter_aborts_with_path(vault_root, vault, metadata):
    """A parse failure in one note aborts the export and names the note."""
    (vault_root / "Book" / "B.md").write_text("---\nkey: [unclosed\n---\nhello\n")
    files = markdown_files(vault.get_folder("Book"))
    with pytest.raises(ExportError, match="Book/B.md"):
        collect_paragraphs(files, vault, metadata, Settings())


@pytest.mark.parametrize("parent,expected", [
    (None, "Book.docx"),
    (VaultFolder(path="", name="vault"), "Book.docx"),
    (VaultFolder(path="notes/2024", name="2024"), "notes/2024/Book.docx"),
])
def test_output_path(parent, expected):
    """Output sits in the parent folder, or at the vault root."""
    assert output_path(parent, "Book") == expected


def test_run_export_writes_document(vault_root, vault, metadata):
    """run_export writes a .docx whose paragraphs mirror the notes."""
    files = markdown_files(vault.get_folder("Book"))
    dest = run_export(files, "Book.docx", vault, metadata, Settings())
    assert dest == "Book.docx"

    document = docx.Document(io.BytesIO((vault_root / "Book.docx").read_bytes()))
    texts = [p.text for p in document.paragraphs]
    assert texts == ["First", "Alpha bold text.", "- one\n- two", "B", "hello"]


def test_run_export_overwrites(vault_root, vault, metadata):
    """An existing output file is replaced."""
    (vault_root / "Book.docx").write_bytes(b"stale")
    run_export(markdown_files(vault.get_folder("Book")), "Book.docx", vault, metadata, Settings())
    assert (vault_root / "Book.docx").read_bytes()[:2] == b"PK"


def test_run_export_write_failure(vault, metadata):
    """A write into a missing directory raises ExportError."""
    files = markdown_files(vault.get_folder("Book"))
    with pytest.raises(ExportError, match="Failed to write"):
        run_export(files, "missing/dir/Book.docx", vault, metadata, Settings())


class _RejectingVault(LocalVault):
    def write_binary(self, path, data):
        raise RuntimeError("vault is read-only")


def test_run_export_wraps_any_write_error(vault_root):
    """A non-OS error from the vault write is reported as ExportError."""
    vault = _RejectingVault(vault_root)
    files = markdown_files(vault.get_folder("Book"))
    with pytest.raises(ExportError, match="Failed to write Book.docx: vault is read-only"):
        run_export(files, "Book.docx", vault, LocalMetadataCache(vault), Settings())
