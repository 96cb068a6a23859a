"""Case-insensitive substring search over a static chapter list."""

import logging
import re
from collections.abc import Iterable

from book_search.models import Document, SearchOutcome, SearchState

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


def normalise_query(query: str) -> str:
    """Trim and lowercase a raw query.

    Args:
        query: Raw user query string.

    Returns:
        Query ready for comparison.
    """
    return query.strip().lower()


def is_query_too_short(query: str, min_length: int = MIN_QUERY_LENGTH) -> bool:
    """Return True when the trimmed query is below the minimum length."""
    return len(query.strip()) < min_length


def matches(document: Document, normalised_query: str) -> bool:
    """Check whether a document's title or any keyword contains the query.

    Args:
        document: Document to test.
        normalised_query: Query already trimmed and lowercased.

    Returns:
        True if the document matches.
    """
    if normalised_query in document.title.lower():
        return True
    return any(normalised_query in keyword.lower() for keyword in document.keywords)


def search(documents: Iterable[Document], query: str, min_length: int = MIN_QUERY_LENGTH) -> list[Document]:
    """Filter documents by query, keeping their original order.

    Args:
        documents: Documents to search.
        query: Raw user query string.
        min_length: Minimum trimmed query length before anything matches.

    Returns:
        Matching documents in input order; empty for short queries.
    """
    if is_query_too_short(query, min_length):
        return []

    normalised_query = normalise_query(query)
    results = [doc for doc in documents if matches(doc, normalised_query)]
    logger.debug("Query %r matched %d documents", normalised_query, len(results))
    return results


def run_search(documents: Iterable[Document], query: str, min_length: int = MIN_QUERY_LENGTH) -> SearchOutcome:
    """Run a query and report which panel state it leads to.

    Args:
        documents: Documents to search.
        query: Raw user query string.
        min_length: Minimum trimmed query length.

    Returns:
        SearchOutcome with the normalised query, state and results.
    """
    normalised_query = normalise_query(query)
    if is_query_too_short(query, min_length):
        return SearchOutcome(query=normalised_query, state=SearchState.PROMPT)

    results = tuple(search(documents, query, min_length))
    state = SearchState.RESULTS if results else SearchState.EMPTY
    return SearchOutcome(query=normalised_query, state=state, results=results)


def _literal_pattern(query: str) -> re.Pattern[str]:
    # User input is matched literally, never as a regular expression
    return re.compile(re.escape(query), re.IGNORECASE)


def match_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Find the spans of every case-insensitive occurrence of query in text.

    Args:
        text: Text to scan.
        query: Literal text to find.

    Returns:
        Non-overlapping (start, end) spans in text order.
    """
    if not query:
        return []
    return [match.span() for match in _literal_pattern(query).finditer(text)]


def highlight(text: str, query: str, open_tag: str = "<mark>", close_tag: str = "</mark>") -> str:
    """Wrap every case-insensitive occurrence of query in text with markers.

    The matched text keeps its original casing.

    Args:
        text: Display text, usually a document title.
        query: Literal text to mark.
        open_tag: Marker inserted before each occurrence.
        close_tag: Marker inserted after each occurrence.

    Returns:
        Marked-up text, or text unchanged when query is empty.
    """
    if not query:
        return text
    return _literal_pattern(query).sub(lambda match: f"{open_tag}{match.group(0)}{close_tag}", text)
