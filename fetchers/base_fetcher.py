"""Abstract base fetcher interface and common functionality."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from models import Document


class FetcherError(Exception):
    """Base exception for fetcher-related errors."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class BaseFetcher(ABC):
    """Abstract base class for documentation source fetchers."""

    def __init__(self, config: Dict[str, Any], logger=None):
        """
        Initialize base fetcher with configuration and logger.

        Args:
            config: Configuration dictionary
            logger: Logger instance (optional, uses module logger if not provided)
        """
        self.config = config
        self.logger = logger or logging.getLogger('jsdoc_markdown.fetcher')

    @abstractmethod
    def fetch_document(self, document: Document) -> Document:
        """
        Load the HTML for a single document.

        Args:
            document: Document whose source should be read

        Returns:
            The same Document with ``html`` populated

        Raises:
            FetcherError: If the source cannot be read
        """
        pass

    def fetch_documents(self, documents: List[Document]) -> List[Document]:
        """Load every document in order, stopping at the first failure."""
        return [self.fetch_document(document) for document in documents]
