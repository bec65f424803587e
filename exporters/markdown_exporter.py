"""Markdown exporter writing rewritten documents to their repository paths."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from logger import ProgressTracker
from models import Document, DocumentTree


class ExportError(Exception):
    """Raised when a Markdown document cannot be written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class MarkdownExporter:
    """
    Writes the Markdown held in a DocumentTree to each document's output path.

    This exporter:
    1. Looks up every document's text in the tree by its key
    2. Creates missing parent directories
    3. Writes UTF-8 Markdown, overwriting existing files
    4. Stops at the first write failure
    """

    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None, dry_run: bool = False):
        """
        Initialize the markdown exporter.

        Args:
            config: Configuration dictionary with build settings
            logger: Logger instance
            dry_run: When True, report what would be written without touching disk
        """
        self.config = config
        self.logger = logger or logging.getLogger('jsdoc_markdown.exporters.markdown_exporter')
        self.dry_run = dry_run
        self.encoding = config.get('build', {}).get('encoding', 'utf-8')

        self.stats = {
            'documents_written': 0,
            'bytes_written': 0,
            'files': []
        }

    def export_tree(self, tree: DocumentTree, documents: List[Document]) -> Dict[str, Any]:
        """
        Export every document's Markdown from the tree.

        Args:
            tree: DocumentTree with rewritten Markdown
            documents: Documents describing where each leaf is written

        Returns:
            Statistics dictionary with export results

        Raises:
            ExportError: If a document is missing from the tree or cannot be written
        """
        action = "Previewing" if self.dry_run else "Writing"
        self.logger.info(f"{action} {len(documents)} markdown documents")

        with ProgressTracker(total_items=len(documents), item_type='documents') as tracker:
            for document in documents:
                markdown = tree.get(document.key_path) if document.key_path in tree else None
                if not isinstance(markdown, str):
                    tracker.increment(document.key, success=False)
                    raise ExportError(f"No markdown produced for '{document.key}'", document.output_path)

                document.markdown = markdown
                try:
                    self.export_document(document)
                except ExportError:
                    tracker.increment(document.key, success=False)
                    raise
                tracker.increment(document.key)

        return self.stats.copy()

    def export_document(self, document: Document) -> Path:
        """Write a single document's Markdown to its output path."""
        output_path = document.output_path
        content = document.markdown or ''
        size = len(content.encode(self.encoding))

        if self.dry_run:
            self.logger.info(f"[dry-run] Would write '{document.key}' to {output_path} ({size} bytes)")
            document.conversion_metadata['conversion_status'] = 'previewed'
            return output_path

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding=self.encoding)
        except OSError as e:
            document.conversion_metadata['conversion_status'] = 'failed'
            raise ExportError(f"Failed to write '{document.key}' to {output_path}: {e}", output_path) from e

        document.conversion_metadata['conversion_status'] = 'exported'
        self.stats['documents_written'] += 1
        self.stats['bytes_written'] += size
        self.stats['files'].append(str(output_path))

        self.logger.info(f"Wrote '{document.key}' to {output_path} ({size} bytes)")
        return output_path


__all__ = ['ExportError', 'MarkdownExporter']
