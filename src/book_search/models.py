"""Data models for the chapter search index."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Document:
    """Represents a chapter page available to search."""

    title: str
    url: str
    chapter: str
    keywords: tuple[str, ...] = ()


@dataclass
class ChapterMetadata:
    """Metadata extracted from RST chapter sources."""

    title: str
    chapter: str | None = None
    keywords: list[str] = field(default_factory=list)


class SearchState(Enum):
    """What the search panel should show for a query."""

    PROMPT = "prompt"
    EMPTY = "empty"
    RESULTS = "results"


@dataclass(frozen=True)
class SearchOutcome:
    """Represents the result of running a query against a catalog."""

    query: str
    state: SearchState
    results: tuple[Document, ...] = ()
