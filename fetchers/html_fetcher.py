"""HTML fetcher reading JSDoc-generated pages from the build directory."""

import logging
from typing import Any, Dict

from models import Document
from .base_fetcher import BaseFetcher, FetcherError

logger = logging.getLogger('jsdoc_markdown.fetcher.html')


class HtmlFetcher(BaseFetcher):
    """Fetches documentation pages by reading JSDoc HTML output files."""

    def __init__(self, config: Dict[str, Any], logger=None):
        """
        Initialize HTML fetcher with configuration.

        Args:
            config: Configuration dictionary
            logger: Logger instance (optional)
        """
        super().__init__(config, logger or logging.getLogger('jsdoc_markdown.fetcher.html'))
        self.encoding = config.get('build', {}).get('encoding', 'utf-8')

    def fetch_document(self, document: Document) -> Document:
        """Read a document's source HTML."""
        source = document.source_path
        self.logger.debug(f"Reading '{document.key}' from {source}")

        try:
            document.html = source.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise FetcherError(f"HTML source not found for '{document.key}': {source}", source) from e
        except (OSError, UnicodeDecodeError) as e:
            raise FetcherError(f"Failed to read HTML source for '{document.key}': {e}", source) from e

        document.conversion_metadata['conversion_status'] = 'fetched'
        document.conversion_metadata['html_length'] = len(document.html)
        self.logger.info(f"Loaded '{document.key}' ({len(document.html)} chars)")
        return document
