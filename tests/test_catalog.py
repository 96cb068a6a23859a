"""Tests for built-in catalogs and the JSON catalog format."""

import json
from pathlib import Path

import pytest

from book_search.catalog import (
    ANDROID_BOOK,
    CATALOGS,
    SWIFT_BOOK,
    SWIFTUI_BOOK,
    document_from_dict,
    dump_catalog,
    get_catalog,
    load_catalog,
)
from book_search.models import Document
from book_search.search import search


@pytest.fixture
def sample_documents() -> list[Document]:
    """Create sample documents for testing.

    Returns:
        List of Document instances.
    """
    return [
        Document(
            title="Протоколы",
            url="chapters/06-protocols.html",
            chapter="Глава 6",
            keywords=("protocol", "протокол"),
        ),
        Document(
            title="Generics",
            url="chapters/09-generics.html",
            chapter="Глава 9",
            keywords=("generics", "associated type"),
        ),
    ]


@pytest.mark.parametrize("documents", [SWIFT_BOOK, ANDROID_BOOK, SWIFTUI_BOOK])
def test_builtin_catalogs_are_well_formed(documents: tuple[Document, ...]) -> None:
    """Test that built-in catalogs have unique URLs and lowercase keywords."""
    assert documents
    urls = [doc.url for doc in documents]
    assert len(urls) == len(set(urls))
    for doc in documents:
        assert doc.url.startswith("chapters/")
        assert doc.chapter
        assert doc.keywords
        assert all(keyword == keyword.lower() for keyword in doc.keywords)


def test_swift_catalog_contents() -> None:
    """Test known entries of the Swift book catalog."""
    assert len(SWIFT_BOOK) == 22
    assert SWIFT_BOOK[0].title == "Введение"
    assert SWIFT_BOOK[10].title == "Concurrency"
    assert "async" in SWIFT_BOOK[10].keywords
    assert "interface builder" in SWIFT_BOOK[1].keywords


def test_sub_site_keywords_are_split() -> None:
    """Test that space-separated keyword strings become keyword tuples."""
    search_chapter = next(doc for doc in ANDROID_BOOK if doc.url == "chapters/07-search.html")
    assert search_chapter.keywords == ("search", "searchbar", "поиск", "фильтрация", "flow", "debounce")
    assert search_chapter.chapter == "Глава 7"


def test_get_catalog() -> None:
    """Test looking up built-in catalogs by name."""
    for name, documents in CATALOGS.items():
        assert get_catalog(name) is documents


def test_get_unknown_catalog() -> None:
    """Test that unknown catalog names raise an error."""
    with pytest.raises(ValueError, match="Unknown catalog"):
        get_catalog("kotlin")


def test_dump_and_load_catalog(sample_documents: list[Document], tmp_path: Path) -> None:
    """Test writing a catalog and reading it back."""
    catalog_path = tmp_path / "catalog.json"
    dump_catalog(sample_documents, catalog_path)

    assert "Протоколы" in catalog_path.read_text(encoding="utf-8")
    assert load_catalog(catalog_path) == tuple(sample_documents)


def test_load_catalog_keyword_string(tmp_path: Path) -> None:
    """Test that keywords may be given as a space-separated string."""
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text(
        json.dumps([{"title": "Глава 4: API", "url": "chapters/04-api.html", "keywords": "Retrofit OkHttp"}]),
        encoding="utf-8",
    )

    (doc,) = load_catalog(catalog_path)
    assert doc.keywords == ("retrofit", "okhttp")
    assert doc.chapter == ""


def test_load_catalog_mixed_case_keywords(tmp_path: Path) -> None:
    """Test that mixed-case keywords in a catalog file are found by a lowercase query."""
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text(
        json.dumps(
            [
                {"title": "Generics", "url": "chapters/09-generics.html", "chapter": "Глава 9", "keywords": ["Where"]},
                {"title": "Concurrency", "url": "chapters/10-concurrency.html", "keywords": ["Async", "MainActor"]},
            ]
        ),
        encoding="utf-8",
    )

    documents = load_catalog(catalog_path)

    assert documents[1].keywords == ("async", "mainactor")
    assert [doc.title for doc in search(documents, "mainactor")] == ["Concurrency"]
    assert [doc.title for doc in search(documents, "WHERE")] == ["Generics"]


def test_load_catalog_invalid_json(tmp_path: Path) -> None:
    """Test that invalid JSON raises an error."""
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text("[{", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid JSON"):
        load_catalog(catalog_path)


def test_load_catalog_not_an_array(tmp_path: Path) -> None:
    """Test that a JSON object at top level is rejected."""
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text('{"title": "x"}', encoding="utf-8")

    with pytest.raises(ValueError, match="JSON array"):
        load_catalog(catalog_path)


@pytest.mark.parametrize(
    "entry",
    [
        {"url": "a.html"},
        {"title": "A", "url": 3},
        {"title": "A", "url": "a.html", "chapter": 1},
        {"title": "A", "url": "a.html", "keywords": [1, 2]},
        {"title": "A", "url": "a.html", "keywords": {"a": "b"}},
    ],
)
def test_document_from_dict_invalid(entry: dict) -> None:
    """Test that malformed entries are rejected."""
    with pytest.raises(ValueError):
        document_from_dict(entry)
