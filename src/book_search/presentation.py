"""Search panel state and markup, independent of any UI runtime."""

import logging
from typing import Protocol

from book_search.config import SearchConfig
from book_search.models import Document, SearchState
from book_search.search import highlight, run_search

logger = logging.getLogger(__name__)

OPEN_SHORTCUT_KEY = "k"

PROMPT_MARKUP = """<div class="search-empty">
    <p>Введите запрос для поиска</p>
    <p class="search-hint">Поиск по названиям глав и ключевым словам</p>
</div>"""

SHORT_QUERY_MARKUP = """<div class="search-empty">
    <p>Введите запрос для поиска</p>
    <p class="search-hint">Минимум {min_length} символа</p>
</div>"""

NO_RESULTS_MARKUP = """<div class="search-empty">
    <p>Ничего не найдено</p>
    <p class="search-hint">Попробуйте другой запрос</p>
</div>"""

RESULT_MARKUP = """<a href="{href}" class="search-result-item">
    <span class="search-result-chapter">{chapter}</span>
    <span class="search-result-title">{title}</span>
    <span class="search-result-keywords">{keywords}</span>
</a>"""


class SearchListener(Protocol):
    """Events a UI layer forwards to the search panel."""

    def on_query_changed(self, query: str) -> None: ...

    def on_dismiss(self) -> None: ...


class SearchPanel:
    """Holds the open/closed state, rendered markup and keyboard focus of the panel.

    Focus is ``None`` while the query input has it, otherwise the index of
    the focused result item.
    """

    def __init__(self, config: SearchConfig) -> None:
        """Initialise a closed panel.

        Args:
            config: Search configuration built at startup.
        """
        self.config = config
        self.is_open = False
        self.query = ""
        self.state = SearchState.PROMPT
        self.results: tuple[Document, ...] = ()
        self.focus: int | None = None
        self.markup = PROMPT_MARKUP

    def open(self) -> None:
        """Open the panel with focus on the query input."""
        self.is_open = True
        self.focus = None
        logger.debug("Search panel opened")

    def on_query_changed(self, query: str) -> None:
        """Run the query and re-render the results.

        Args:
            query: Current content of the query input.
        """
        self.query = query
        outcome = run_search(self.config.documents, query, self.config.min_query_length)
        self.state = outcome.state
        self.results = outcome.results
        self.focus = None

        if outcome.state is SearchState.PROMPT:
            self.markup = SHORT_QUERY_MARKUP.format(min_length=self.config.min_query_length)
        elif outcome.state is SearchState.EMPTY:
            self.markup = NO_RESULTS_MARKUP
        else:
            self.markup = "\n".join(self.render_result(doc, outcome.query) for doc in outcome.results)

    def on_dismiss(self) -> None:
        """Close the panel and reset it to its initial prompt."""
        self.is_open = False
        self.query = ""
        self.state = SearchState.PROMPT
        self.results = ()
        self.focus = None
        self.markup = PROMPT_MARKUP
        logger.debug("Search panel dismissed")

    def render_result(self, doc: Document, query: str) -> str:
        """Render one result item.

        Args:
            doc: Matching document.
            query: Normalised query used for highlighting.

        Returns:
            Markup for the result link.
        """
        return RESULT_MARKUP.format(
            href=f"{self.config.base_path}{doc.url}",
            chapter=doc.chapter,
            title=highlight(doc.title, query, self.config.open_tag, self.config.close_tag),
            keywords=", ".join(doc.keywords[: self.config.keyword_preview]),
        )

    def handle_key(self, key: str, meta: bool = False, ctrl: bool = False) -> bool:
        """Apply a keyboard event to the panel.

        Args:
            key: Key name, e.g. ``"k"``, ``"Escape"``, ``"ArrowDown"``.
            meta: Whether the Cmd key was held.
            ctrl: Whether the Ctrl key was held.

        Returns:
            True if the panel consumed the event.
        """
        if (meta or ctrl) and key == OPEN_SHORTCUT_KEY:
            self.open()
            return True
        if key == "Escape":
            self.on_dismiss()
            return True
        if not self.is_open:
            return False

        if key == "ArrowDown":
            if self.focus is None:
                if self.results:
                    self.focus = 0
            elif self.focus < len(self.results) - 1:
                self.focus += 1
            return True
        if key == "ArrowUp":
            if self.focus is not None:
                self.focus = self.focus - 1 if self.focus > 0 else None
            return True
        return False

    @property
    def focused_result(self) -> Document | None:
        """Return the document whose result item has focus, if any."""
        if self.focus is None:
            return None
        return self.results[self.focus]
