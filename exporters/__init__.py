"""Markdown export package for the JSDoc documentation build.

Package Structure:
- link_rewriter: Rewrites generated source and module links to repository URLs
- markdown_exporter: Writes each document of a DocumentTree to its output path

Configuration Referenced:
- repository.base_url / modules_path / top_namespace: link targets
- documents[].output: destination of each document
- build.encoding: encoding used for written files
"""

from .link_rewriter import LinkRewriter, format_source_code_urls, replace_module_links
from .markdown_exporter import ExportError, MarkdownExporter

__all__ = [
    'ExportError',
    'LinkRewriter',
    'MarkdownExporter',
    'format_source_code_urls',
    'replace_module_links'
]
