"""Integration tests for the export, export-file and menu commands"""

import io

import docx
import pytest
from typer.testing import CliRunner

from vaultdocx.cli.cli import app


@pytest.fixture(name="runner")
def runner_fixture(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VAULTDOCX_TITLE_FIELD", raising=False)
    return CliRunner()


def _paragraphs(path):
    return [p.text for p in docx.Document(io.BytesIO(path.read_bytes())).paragraphs]


def test_export_cmd_writes_sibling_docx(runner, vault_root):
    """export writes <folder>.docx next to the folder and reports the path."""
    result = runner.invoke(app, ["export", str(vault_root / "Book"), "--vault", str(vault_root)])

    assert result.exit_code == 0, result.output
    assert "Exported to Book.docx" in result.output
    assert _paragraphs(vault_root / "Book.docx") == [
        "First", "Alpha bold text.", "- one\n- two", "B", "hello",
    ]


def test_export_cmd_via_navigator(runner, vault_root):
    """--navigator routes the click through the companion folder menu."""
    result = runner.invoke(app, [
        "export", str(vault_root / "Book"), "--vault", str(vault_root), "--navigator",
    ])
    assert result.exit_code == 0, result.output
    assert (vault_root / "Book.docx").exists()


def test_export_cmd_title_field_option(runner, vault_root):
    """--title-field changes which front-matter key is used for titles."""
    result = runner.invoke(app, [
        "export", str(vault_root / "Book"), "--vault", str(vault_root), "--title-field", "missing",
    ])
    assert result.exit_code == 0, result.output
    assert _paragraphs(vault_root / "Book.docx")[0] == "A"


def test_export_cmd_failure_exits_nonzero(runner, vault_root):
    """A broken note aborts the export with exit code 1 and a visible message."""
    (vault_root / "Book" / "B.md").write_text("---\nkey: [unclosed\n---\n")
    result = runner.invoke(app, ["export", str(vault_root / "Book"), "--vault", str(vault_root)])
    assert result.exit_code == 1
    assert "Export failed" in result.output
    assert not (vault_root / "Book.docx").exists()


def test_export_cmd_outside_vault(runner, vault_root, tmp_path):
    """Folders outside the vault are rejected."""
    result = runner.invoke(app, ["export", str(tmp_path), "--vault", str(vault_root)])
    assert result.exit_code == 1
    assert "Cannot open" in result.output


def test_export_file_cmd(runner, vault_root):
    """export-file writes <note>.docx beside the note."""
    result = runner.invoke(app, ["export-file", str(vault_root / "Book" / "B.md"), "--vault", str(vault_root)])
    assert result.exit_code == 0, result.output
    assert _paragraphs(vault_root / "Book" / "B.docx") == ["B", "hello"]


def test_export_file_cmd_rejects_non_markdown(runner, vault_root):
    """Non-markdown files have no export item."""
    result = runner.invoke(app, ["export-file", str(vault_root / "Book" / "cover.png"), "--vault", str(vault_root)])
    assert result.exit_code == 1
    assert "not available" in result.output


def test_menu_cmd_lists_items(runner, vault_root):
    """menu lists the export item for a folder."""
    result = runner.invoke(app, ["menu", str(vault_root / "Book"), "--vault", str(vault_root)])
    assert result.exit_code == 0, result.output
    assert "[folder] Export as Word document (file-output)" in result.output
