import pytest

from draft_dedupe.errors import NotFound
from draft_dedupe.sources import DirectoryDocumentSource, InMemoryDocumentSource


def test_directory_source_lists_relative_paths_in_sorted_order(tmp_path) -> None:
    (tmp_path / "nested").mkdir()
    (tmp_path / "b.md").write_text("B", encoding="utf-8")
    (tmp_path / "a.md").write_text("A", encoding="utf-8")
    (tmp_path / "nested" / "c.md").write_text("C", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    source = DirectoryDocumentSource(tmp_path)

    assert source.list() == ["a.md", "b.md", "nested/c.md"]
    assert source.read("nested/c.md") == b"C"


def test_directory_source_missing_document_raises_not_found(tmp_path) -> None:
    source = DirectoryDocumentSource(tmp_path)

    with pytest.raises(NotFound) as excinfo:
        source.read("gone.md")
    assert excinfo.value.doc_id == "gone.md"


def test_directory_source_missing_root_raises_not_found(tmp_path) -> None:
    with pytest.raises(NotFound):
        DirectoryDocumentSource(tmp_path / "absent").list()


def test_in_memory_source_keeps_insertion_order_and_encodes_text() -> None:
    source = InMemoryDocumentSource({"z.md": "Zed", "a.md": b"raw"})

    assert source.list() == ["z.md", "a.md"]
    assert source.read("z.md") == b"Zed"
    assert source.read("a.md") == b"raw"
    with pytest.raises(NotFound):
        source.read("missing.md")


def test_directory_source_rejects_ids_outside_the_root(tmp_path) -> None:
    root = tmp_path / "drafts"
    root.mkdir()
    (tmp_path / "secret.md").write_text("outside", encoding="utf-8")
    source = DirectoryDocumentSource(root)

    with pytest.raises(NotFound):
        source.read("../secret.md")
    with pytest.raises(NotFound):
        source.read(str(tmp_path / "secret.md"))
