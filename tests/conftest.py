"""Root test configuration: a small on-disk vault"""

import pytest


@pytest.fixture(name="vault_root")
def vault_root_fixture(tmp_path):
    """Vault with one folder of notes, a non-note file and a nested folder."""
    root = tmp_path / "vault"
    book = root / "Book"
    book.mkdir(parents=True)
    (book / "A.md").write_text('---\ndxtitle: "First"\n---\nAlpha **bold** text.\n\n- one\n- two\n')
    (book / "B.md").write_text("hello")
    (book / "cover.png").write_bytes(b"\x89PNG")
    (book / "drafts").mkdir()
    (book / "drafts" / "C.md").write_text("nested draft")
    (root / ".obsidian").mkdir()
    return root
