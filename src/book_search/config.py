"""Startup configuration for the search panel."""

from dataclasses import dataclass
from pathlib import Path

from book_search.catalog import get_catalog, load_catalog
from book_search.models import Document
from book_search.search import MIN_QUERY_LENGTH

CHAPTERS_SEGMENT = "/chapters/"


def resolve_base_path(pathname: str) -> str:
    """Return the prefix that makes catalog URLs relative to the current page.

    Args:
        pathname: Path of the page hosting the search panel.

    Returns:
        ``"../"`` for pages inside the chapters directory, else ``""``.
    """
    return "../" if CHAPTERS_SEGMENT in pathname else ""


@dataclass(frozen=True)
class SearchConfig:
    """Immutable settings handed to the presentation adapter at startup."""

    documents: tuple[Document, ...]
    base_path: str = ""
    min_query_length: int = MIN_QUERY_LENGTH
    keyword_preview: int = 5
    open_tag: str = "<mark>"
    close_tag: str = "</mark>"


def build_config(catalog: str = "swift", catalog_path: Path | None = None, pathname: str = "") -> SearchConfig:
    """Build the search configuration for a page.

    Args:
        catalog: Name of a built-in catalog, used when catalog_path is None.
        catalog_path: Optional JSON catalog file overriding the built-in one.
        pathname: Path of the page hosting the search panel.

    Returns:
        SearchConfig instance.
    """
    documents = load_catalog(catalog_path) if catalog_path is not None else get_catalog(catalog)
    return SearchConfig(documents=documents, base_path=resolve_base_path(pathname))
