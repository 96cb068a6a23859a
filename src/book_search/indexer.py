"""Builds chapter catalogs from a directory of RST chapter sources."""

import logging
from pathlib import Path

from book_search.catalog import dump_catalog
from book_search.models import Document
from book_search.parser import ChapterParser

logger = logging.getLogger(__name__)


class ChapterIndexer:
    """Indexes RST chapter sources into a static document list."""

    SOURCE_PATTERNS = ("*.rst", "*.rest")

    def __init__(self) -> None:
        """Initialise indexer with a chapter parser."""
        self.parser = ChapterParser()

    def index_from_path(self, docs_path: Path) -> list[Document]:
        """Index every chapter source under a local path.

        Files are visited in sorted path order, which becomes the display
        order of the catalog.

        Args:
            docs_path: Path to the chapter sources directory.

        Returns:
            Parsed documents.

        Raises:
            ValueError: If the chapter sources path does not exist.
        """
        if not docs_path.exists():
            msg = f"Chapter sources path does not exist: {docs_path}"
            raise ValueError(msg)

        source_files = sorted(path for pattern in self.SOURCE_PATTERNS for path in docs_path.rglob(pattern))
        logger.info("Found %d RST files to index", len(source_files))

        documents = []
        for file_path in source_files:
            document = self.parser.parse_file(file_path, docs_path)
            if document:
                documents.append(document)
                logger.debug("Indexed: %s", document.url)
            else:
                logger.warning("Failed to parse: %s", file_path)

        logger.info("Successfully indexed %d documents", len(documents))
        return documents

    def build_catalog(self, docs_path: Path, output_path: Path) -> int:
        """Index chapter sources and write them as a JSON catalog.

        Args:
            docs_path: Path to the chapter sources directory.
            output_path: Destination catalog file.

        Returns:
            Number of documents written.
        """
        documents = self.index_from_path(docs_path)
        dump_catalog(documents, output_path)
        return len(documents)
