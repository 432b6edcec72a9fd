"""
Tests for reading and writing the contributions document.
"""

import pytest

from ghcontribs.store import StoreError, read_document, write_document


def test_write_creates_directories_and_reads_back(tmp_path):
    path = tmp_path / "_data" / "github-contributions.json"
    document = {"user": {"name": "Zoë"}, "stats": {"total_stars": 3}}

    write_document(path, document)

    assert read_document(path) == document
    assert "Zoë" in path.read_text(encoding="utf-8")
    assert path.read_text(encoding="utf-8").startswith("{\n  ")


def test_missing_file_raises_store_error(tmp_path):
    with pytest.raises(StoreError, match="Failed to load GitHub data"):
        read_document(tmp_path / "missing.json")


def test_invalid_json_raises_store_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError) as info:
        read_document(path)

    assert info.value.__cause__ is not None


def test_unwritable_destination_raises_store_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(StoreError, match="Failed to write GitHub data"):
        write_document(blocker / "out.json", {})


@pytest.mark.parametrize("content", ["[]", '"text"', "null"])
def test_non_object_document_raises_store_error(tmp_path, content):
    path = tmp_path / "github-contributions.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StoreError, match="expected an object"):
        read_document(path)
