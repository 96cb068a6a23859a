"""Parser for RST chapter sources of the book sites."""

import re
from pathlib import Path

import docutils.frontend  # type: ignore[import-untyped]
import docutils.nodes  # type: ignore[import-untyped]
import docutils.parsers.rst  # type: ignore[import-untyped]
import docutils.utils  # type: ignore[import-untyped]

from book_search.models import ChapterMetadata, Document


class ChapterMetadataVisitor(docutils.nodes.GenericNodeVisitor):  # type: ignore[misc]
    """Visitor to extract the title and metadata fields from an RST chapter."""

    def __init__(self, document: docutils.nodes.document) -> None:
        """Initialise metadata visitor.

        Args:
            document: Docutils document tree.
        """
        super().__init__(document)
        self.title: str | None = None
        self.fields: dict[str, str] = {}

    def visit_title(self, node: docutils.nodes.title) -> None:
        """Visit title node (first section header).

        Args:
            node: Title node.
        """
        if self.title is None:
            self.title = node.astext()

    def visit_field(self, node: docutils.nodes.field) -> None:
        """Collect ``:name: value`` fields, keeping the first of each name.

        Args:
            node: Field node.

        Raises:
            docutils.nodes.SkipNode: Always raised, field bodies hold no titles.
        """
        name = node[0].astext().strip().lower()
        self.fields.setdefault(name, node[1].astext().strip())
        raise docutils.nodes.SkipNode

    def default_visit(self, node: docutils.nodes.Node) -> None:
        """Default visit handler (no-op)."""

    def default_departure(self, node: docutils.nodes.Node) -> None:
        """Default departure handler (no-op)."""


class ChapterParser:
    """Parses RST chapter files into searchable documents."""

    CHAPTERS_URL_PREFIX = "chapters"

    def parse_file(self, file_path: Path, base_path: Path) -> Document | None:
        """Parse an RST chapter file.

        Args:
            file_path: Path to the RST file.
            base_path: Base path of the chapter sources directory.

        Returns:
            Document instance or None if parsing fails.
        """
        try:
            source = file_path.read_text(encoding="utf-8")
            doctree = self._parse_rst(source, file_path)
            relative_path = file_path.relative_to(base_path)
            metadata = self._extract_metadata(doctree, file_path)

            return Document(
                title=metadata.title,
                url=self._compute_url(relative_path),
                chapter=metadata.chapter or self._extract_group(relative_path),
                keywords=tuple(metadata.keywords),
            )
        except Exception:
            return None

    def _parse_rst(self, source: str, file_path: Path) -> docutils.nodes.document:
        """Parse RST source into docutils document tree.

        Args:
            source: RST source text.
            file_path: Path to the file (for error reporting).

        Returns:
            Docutils document tree.
        """
        parser = docutils.parsers.rst.Parser()
        settings = docutils.frontend.get_default_settings(docutils.parsers.rst.Parser)
        settings.report_level = 5  # Suppress warnings
        document = docutils.utils.new_document(str(file_path), settings)
        parser.parse(source, document)
        return document

    def _extract_metadata(self, doctree: docutils.nodes.document, file_path: Path) -> ChapterMetadata:
        """Extract title, chapter label and keywords from the document tree.

        Args:
            doctree: Docutils document tree.
            file_path: Path to the file for fallback title extraction.

        Returns:
            ChapterMetadata instance.
        """
        visitor = ChapterMetadataVisitor(doctree)
        doctree.walk(visitor)

        title = visitor.title
        if not title:
            # Fallback to filename if no title found
            title = file_path.stem.replace("-", " ").replace("_", " ").title()

        return ChapterMetadata(
            title=title,
            chapter=visitor.fields.get("chapter") or None,
            keywords=self._split_keywords(visitor.fields.get("keywords", "")),
        )

    @staticmethod
    def _split_keywords(raw: str) -> list[str]:
        """Split a comma-separated keyword field into lowercase keywords.

        Args:
            raw: Field value such as ``"protocol, Extension, delegate"``.

        Returns:
            Non-empty keywords in field order.
        """
        keywords = (re.sub(r"\s+", " ", part).strip().lower() for part in raw.split(","))
        return [kw for kw in keywords if kw]

    def _extract_group(self, relative_path: Path) -> str:
        """Extract the grouping label from the path.

        Args:
            relative_path: Path relative to the chapter sources directory.

        Returns:
            First directory component or 'root'.
        """
        parts = relative_path.parts
        return parts[0] if len(parts) > 1 else "root"

    def _compute_url(self, relative_path: Path) -> str:
        """Compute the relative chapter page URL.

        Args:
            relative_path: Path relative to the chapter sources directory.

        Returns:
            URL such as ``chapters/06-protocols.html``.
        """
        path_str = re.sub(r"\.(rst|rest)$", ".html", relative_path.as_posix())
        return f"{self.CHAPTERS_URL_PREFIX}/{path_str}"
