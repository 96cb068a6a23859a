"""Tests for the chapter indexer."""

import json
from pathlib import Path

import pytest

from book_search.catalog import load_catalog
from book_search.indexer import ChapterIndexer
from book_search.search import search


@pytest.fixture
def indexer() -> ChapterIndexer:
    """Create an indexer instance.

    Returns:
        ChapterIndexer instance.
    """
    return ChapterIndexer()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create a chapter sources directory with two chapters.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Path to the chapter sources directory.
    """
    docs_dir = tmp_path / "source"
    docs_dir.mkdir()

    (docs_dir / "10-concurrency.rst").write_text(
        """
:chapter: Глава 10
:keywords: async, await

Concurrency
===========

Tasks and actors.
""",
        encoding="utf-8",
    )

    (docs_dir / "09-generics.rst").write_text(
        """
:chapter: Глава 9
:keywords: generics, where

Generics
========

Type parameters.
""",
        encoding="utf-8",
    )
    return docs_dir


def test_index_from_path(indexer: ChapterIndexer, docs_dir: Path) -> None:
    """Test indexing from a local directory."""
    documents = indexer.index_from_path(docs_dir)

    assert [doc.title for doc in documents] == ["Generics", "Concurrency"]
    assert documents[1].keywords == ("async", "await")


def test_index_from_path_with_subdirectories(indexer: ChapterIndexer, docs_dir: Path) -> None:
    """Test indexing RST files in subdirectories."""
    extras_dir = docs_dir / "extras"
    extras_dir.mkdir()
    (extras_dir / "debugging.rst").write_text("Отладка\n=======\n\nLLDB.\n", encoding="utf-8")

    documents = indexer.index_from_path(docs_dir)

    assert len(documents) == 3
    debugging = next(doc for doc in documents if doc.title == "Отладка")
    assert debugging.chapter == "extras"
    assert debugging.url == "chapters/extras/debugging.html"


def test_index_from_path_nonexistent(indexer: ChapterIndexer, tmp_path: Path) -> None:
    """Test indexing from a nonexistent path raises error."""
    with pytest.raises(ValueError, match="Chapter sources path does not exist"):
        indexer.index_from_path(tmp_path / "nonexistent")


def test_index_skips_invalid_files(indexer: ChapterIndexer, docs_dir: Path) -> None:
    """Test that unreadable files are skipped."""
    (docs_dir / "broken.rst").write_bytes(b"\xff\xfe\xfa invalid utf-8")

    documents = indexer.index_from_path(docs_dir)

    assert len(documents) == 2


def test_index_ignores_other_files(indexer: ChapterIndexer, docs_dir: Path) -> None:
    """Test that non-RST files are not indexed."""
    (docs_dir / "notes.md").write_text("# Notes\n", encoding="utf-8")

    assert len(indexer.index_from_path(docs_dir)) == 2


def test_build_catalog(indexer: ChapterIndexer, docs_dir: Path, tmp_path: Path) -> None:
    """Test building a JSON catalog that can be searched."""
    output_path = tmp_path / "catalog.json"

    count = indexer.build_catalog(docs_dir, output_path)

    assert count == 2
    entries = json.loads(output_path.read_text(encoding="utf-8"))
    assert entries[0]["chapter"] == "Глава 9"
    documents = load_catalog(output_path)
    assert [doc.title for doc in search(documents, "async")] == ["Concurrency"]
