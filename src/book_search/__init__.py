"""Chapter search for the tutorial book sites."""

from book_search.models import Document, SearchOutcome, SearchState
from book_search.search import highlight, run_search, search

__all__ = ["Document", "SearchOutcome", "SearchState", "highlight", "run_search", "search"]
