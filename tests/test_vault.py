import pytest

from sorter.errors import MoveError, ReadError
from sorter.models import Document
from sorter.vault import FilesystemVault


@pytest.fixture
def vault_dir(tmp_path):
    (tmp_path / "Work").mkdir()
    (tmp_path / "Personal").mkdir()
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / "Inbox" / "nested").mkdir(parents=True)

    (tmp_path / "a.md").write_text("alpha", encoding="utf-8")
    (tmp_path / "b.md").write_text("beta", encoding="utf-8")
    (tmp_path / "image.png").write_bytes(b"\x89PNG")
    (tmp_path / ".hidden.md").write_text("hidden", encoding="utf-8")
    (tmp_path / "Work" / "existing.md").write_text("work", encoding="utf-8")
    (tmp_path / "Inbox" / "c.md").write_text("gamma", encoding="utf-8")
    (tmp_path / "Inbox" / "nested" / "d.md").write_text("delta", encoding="utf-8")
    (tmp_path / ".obsidian" / "workspace.md").write_text("{}", encoding="utf-8")
    return tmp_path


@pytest.fixture
def vault(vault_dir):
    return FilesystemVault(vault_dir)


def test_root_scope_lists_only_top_level_documents(vault):
    docs = vault.list_documents("")

    assert [d.identifier for d in docs] == ["a.md", "b.md"]


def test_folder_scope_is_recursive(vault):
    docs = vault.list_documents("Inbox")

    assert [d.identifier for d in docs] == ["Inbox/c.md", "Inbox/nested/d.md"]
    assert docs[1].location == "Inbox/nested"
    assert docs[1].name == "d.md"


def test_missing_scope_lists_nothing(vault):
    assert vault.list_documents("Nope") == []


def test_extensions_filter(vault_dir):
    vault = FilesystemVault(vault_dir, extensions=(".png",))

    assert [d.identifier for d in vault.list_documents()] == ["image.png"]


def test_list_locations_skips_hidden_folders(vault):
    assert vault.list_locations() == ["Inbox", "Personal", "Work"]


def test_read_content(vault):
    assert vault.read_content(Document("a.md")) == "alpha"


def test_read_missing_document_raises_read_error(vault):
    with pytest.raises(ReadError):
        vault.read_content(Document("missing.md"))


def test_create_location_is_idempotent(vault, vault_dir):
    assert not vault.location_exists("Maths")

    vault.create_location("Maths")
    vault.create_location("Maths")

    assert vault.location_exists("Maths")
    assert [p.name for p in vault_dir.iterdir()].count("Maths") == 1


@pytest.mark.parametrize("name", ["", "..", "a/b", "/abs"])
def test_create_location_rejects_paths(vault, name):
    with pytest.raises(MoveError):
        vault.create_location(name)


def test_move_document(vault, vault_dir):
    moved = vault.move_document(Document("a.md"), "Work/a.md")

    assert moved == Document("Work/a.md")
    assert (vault_dir / "Work" / "a.md").read_text(encoding="utf-8") == "alpha"
    assert not (vault_dir / "a.md").exists()


def test_move_document_collision_raises(vault, vault_dir):
    (vault_dir / "existing.md").write_text("root copy", encoding="utf-8")

    with pytest.raises(MoveError, match="Destination already exists"):
        vault.move_document(Document("existing.md"), "Work/existing.md")

    assert (vault_dir / "Work" / "existing.md").read_text(encoding="utf-8") == "work"
    assert (vault_dir / "existing.md").exists()


def test_move_missing_document_raises(vault):
    with pytest.raises(MoveError):
        vault.move_document(Document("missing.md"), "Work/missing.md")


def test_vault_requires_directory(tmp_path):
    with pytest.raises(ValueError, match="is not a directory"):
        FilesystemVault(tmp_path / "nope")


@pytest.mark.parametrize("name", ["..", ".", "Inbox/nested", "/abs", ""])
def test_location_exists_only_for_top_level_names(vault, name):
    assert not vault.location_exists(name)


@pytest.mark.parametrize(
    "destination", ["../a.md", "Work/../../a.md", "/elsewhere/a.md"]
)
def test_move_outside_vault_raises(vault, vault_dir, destination):
    with pytest.raises(MoveError, match="escapes the vault"):
        vault.move_document(Document("a.md"), destination)

    assert (vault_dir / "a.md").exists()
    assert not (vault_dir.parent / "a.md").exists()
