"""Converters package for JSDoc HTML to repository Markdown conversion.

Conversion happens in two steps:
1. HTML to Markdown using markdownify with GFM options (MarkdownConverter)
2. The ordered text rule chain (code fences, header/footer removal,
   link rewriting, escaping) applied to every document in a DocumentTree
"""

import logging

from .markdown_converter import MarkdownConverter, convert_document
from .text_rules import (
    RULE_NAMES,
    apply_rule_chain,
    apply_rules_to_tree,
    build_rule_chain
)

logger = logging.getLogger('jsdoc_markdown.converters')

__all__ = [
    'MarkdownConverter',
    'RULE_NAMES',
    'apply_rule_chain',
    'apply_rules_to_tree',
    'build_rule_chain',
    'convert_document'
]
