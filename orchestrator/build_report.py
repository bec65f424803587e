"""
Build report generator for summarizing a documentation build.

The report lists, per document, which rewrite rules changed the text and
which found nothing to rewrite. A rule that stops matching usually means the
upstream JSDoc output changed shape.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from models import Document, RepositorySettings

logger = logging.getLogger(__name__)


class BuildReport:
    """Generates build reports from documents and phase statistics."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize build report generator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def generate_report(
        self,
        documents: List[Document],
        phase_stats: Dict[str, Any],
        build_duration: float,
        settings: RepositorySettings,
        dry_run: bool = False
    ) -> Dict[str, Any]:
        """
        Generate the build report.

        Args:
            documents: Documents processed by the build
            phase_stats: Statistics from all phases
            build_duration: Total build duration in seconds
            settings: Repository constants used for link rewriting
            dry_run: Whether files were actually written

        Returns:
            Build report dictionary
        """
        document_entries = [self._build_document_entry(document) for document in documents]

        report = {
            'summary': {
                'documents': len(documents),
                'written': phase_stats.get('export', {}).get('documents_written', 0),
                'bytes_written': phase_stats.get('export', {}).get('bytes_written', 0),
                'dry_run': dry_run,
                'duration': build_duration,
                'duration_formatted': self._format_duration(build_duration)
            },
            'repository': settings.to_dict(),
            'documents': document_entries,
            'unmatched_rules': self._rules_unmatched_everywhere(document_entries),
            'phases': phase_stats,
            'timestamp': datetime.now().isoformat()
        }

        self.logger.info(
            f"Report generated: {report['summary']['documents']} documents, "
            f"{report['summary']['written']} written"
        )
        for entry in document_entries:
            if entry['rules_unmatched']:
                self.logger.debug(
                    f"'{entry['key']}' had no match for: {', '.join(entry['rules_unmatched'])}"
                )

        return report

    def _build_document_entry(self, document: Document) -> Dict[str, Any]:
        metadata = document.conversion_metadata
        return {
            'key': document.key,
            'source': str(document.source_path),
            'output': str(document.output_path),
            'status': metadata.get('conversion_status', 'pending'),
            'html_length': metadata.get('html_length', 0),
            'markdown_length': len(document.markdown or ''),
            'rules_applied': list(metadata.get('rules_applied', [])),
            'rules_unmatched': list(metadata.get('rules_unmatched', []))
        }

    @staticmethod
    def _rules_unmatched_everywhere(entries: List[Dict[str, Any]]) -> List[str]:
        """Rules that changed no document at all."""
        if not entries:
            return []
        unmatched = list(entries[0]['rules_unmatched'])
        for entry in entries[1:]:
            unmatched = [name for name in unmatched if name in entry['rules_unmatched']]
        return unmatched

    @staticmethod
    def _format_duration(seconds: float) -> str:
        """Format duration in human-readable format."""
        if seconds < 1:
            return f"{seconds * 1000:.0f}ms"
        return f"{seconds:.1f}s"

    def format_console_report(self, report: Dict[str, Any]) -> str:
        """
        Format report for console display.

        Args:
            report: Build report dictionary

        Returns:
            Formatted console string
        """
        sections = []

        sections.append("=" * 60)
        sections.append("BUILD REPORT (DRY RUN)" if report['summary'].get('dry_run') else "BUILD REPORT")
        sections.append("=" * 60)
        sections.append("")

        summary = report.get('summary', {})
        sections.append("Summary:")
        sections.append(f"  Documents:   {summary.get('documents', 0)}")
        sections.append(f"  Written:     {summary.get('written', 0)}")
        sections.append(f"  Bytes:       {summary.get('bytes_written', 0)}")
        sections.append(f"  Duration:    {summary.get('duration_formatted', '0ms')}")
        sections.append("")

        sections.append("Documents:")
        sections.append("-" * 60)
        for entry in report.get('documents', []):
            sections.append(f"  {entry['key']}: {entry['source']} -> {entry['output']} [{entry['status']}]")
            sections.append(f"    Rules applied: {len(entry['rules_applied'])}")

        unmatched = report.get('unmatched_rules', [])
        if unmatched:
            sections.append("")
            sections.append("Rules that matched nothing:")
            for name in unmatched:
                sections.append(f"  - {name}")

        sections.append("=" * 60)
        return "\n".join(sections)


__all__ = ['BuildReport']
