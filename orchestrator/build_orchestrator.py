"""
Build orchestrator for coordinating the documentation build pipeline.

This module sequences all build phases:
Fetch → Convert → Rewrite → Export → Report. Every phase runs to completion
before the next one starts, and any read or write failure aborts the build.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from converters import RULE_NAMES, MarkdownConverter, apply_rules_to_tree
from exporters import MarkdownExporter
from fetchers import HtmlFetcher
from logger import log_section
from models import Document, DocumentTree, RepositorySettings
from orchestrator.build_report import BuildReport

logger = logging.getLogger('jsdoc_markdown.orchestrator')


class BuildOrchestrator:
    """Central coordinator sequencing the build phases: Fetch → Convert → Rewrite → Export → Report."""

    def __init__(self, config: Dict[str, Any], logger: Optional[logging.Logger] = None):
        """
        Initialize build orchestrator.

        Args:
            config: Configuration dictionary (see config_loader.DEFAULT_CONFIG)
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger('jsdoc_markdown.orchestrator')

        build = config.get('build', {})
        self.root = Path(build.get('root', '.'))
        self.dry_run = bool(build.get('dry_run', False))
        self.settings = RepositorySettings.from_config(config)

        self.fetcher = HtmlFetcher(config, self.logger)
        self.converter = MarkdownConverter(logger=self.logger)
        self.exporter = MarkdownExporter(config, self.logger, dry_run=self.dry_run)

        self.phase_stats: Dict[str, Any] = {}

    def create_documents(self) -> List[Document]:
        """Create the Document objects listed in the configuration manifest."""
        return [Document.from_config(entry, self.root) for entry in self.config.get('documents', [])]

    def run(self) -> Dict[str, Any]:
        """
        Run the complete build.

        Returns:
            Build report dictionary

        Raises:
            FetcherError: If an HTML source cannot be read
            ExportError: If a Markdown file cannot be written
        """
        start_time = time.time()
        documents = self.create_documents()

        log_section("Fetch")
        self.fetcher.fetch_documents(documents)
        self.phase_stats['fetch'] = {'documents': len(documents)}

        log_section("Convert")
        tree = self.build_tree(documents)
        self.phase_stats['convert'] = {'documents': len(tree)}

        log_section("Rewrite")
        applied_rules: Dict[str, List[str]] = {}
        tree = apply_rules_to_tree(tree, self.settings, applied_rules)
        for document in documents:
            applied = applied_rules.get(document.key, [])
            document.conversion_metadata['rules_applied'] = applied
            document.conversion_metadata['rules_unmatched'] = [
                name for name in RULE_NAMES if name not in applied
            ]
        self.phase_stats['rewrite'] = {'documents': len(applied_rules)}

        log_section("Export")
        self.phase_stats['export'] = self.exporter.export_tree(tree, documents)

        duration = time.time() - start_time
        return BuildReport(self.logger).generate_report(
            documents, self.phase_stats, duration, self.settings, dry_run=self.dry_run
        )

    def build_tree(self, documents: List[Document]) -> DocumentTree:
        """Convert every fetched document and assemble the results into a DocumentTree."""
        tree = DocumentTree()
        for document in documents:
            if not self.converter.convert_document(document):
                raise ValueError(f"Document '{document.key}' has not been fetched")
            tree.set(document.key_path, document.markdown)
        return tree
