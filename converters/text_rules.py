"""
Ordered text rules that turn converted JSDoc Markdown into repository Markdown.

Every rule is a plain ``str -> str`` function. Rules that find nothing to
rewrite return their input unchanged; none of them raise on unexpected
input. ``build_rule_chain`` binds the repository settings and fixes the
order in which rules run, since later rules depend on the output of
earlier ones (module links are rewritten only after the index footer has
been replaced, for example).
"""

import logging
import re
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from exporters.link_rewriter import LinkRewriter
from models import DocumentTree, KeyPath, RepositorySettings, dotted

logger = logging.getLogger('jsdoc_markdown.converters.text_rules')

CODE_LANGUAGE = 'js'
HEADER_MARKER = 'JSDoc'
FOOTER_MARKER = 'Documentation generated by [JSDoc '

INDENTED_BLOCK_PATTERN = re.compile(r'^((?:(?: {4}|\t).*(?:\n|\Z))+)', re.MULTILINE)
INDENT_PATTERN = re.compile(r'^(?: {4}|\t)', re.MULTILINE)
HEADER_PATTERN = re.compile(r'^.*' + re.escape(HEADER_MARKER) + r'.*\n\n')
FOOTER_PATTERN = re.compile(re.escape(FOOTER_MARKER) + r'[\s\S]*')
INDEX_FOOTER_PATTERN = re.compile(r'\[Home\]\(index\.html')
RETURN_BRACKET_PATTERN = re.compile(r'→ \{')
OPTIONAL_TAG_PATTERN = re.compile(r'<optional>')
TABLE_LINE_BREAK_PATTERN = re.compile(r' \n^ \|', re.MULTILINE)
ASTERISK_BULLET_PATTERN = re.compile(r'\* {3}\*')

Rule = Callable[[str], str]


def format_code_blocks(text: str) -> str:
    """Fence runs of 4-space or tab indented lines as ``js`` code blocks."""
    def fence(match):
        body = INDENT_PATTERN.sub('', match.group(1))
        if not body.endswith('\n'):
            body += '\n'
        return f'```{CODE_LANGUAGE}\n{body}```'

    return INDENTED_BLOCK_PATTERN.sub(fence, text)


def remove_jsdoc_header(text: str) -> str:
    """Remove the JSDoc title banner when it opens the text."""
    return HEADER_PATTERN.sub('', text, count=1)


def remove_jsdoc_footer(text: str) -> str:
    """Remove the 'generated by JSDoc' footer and trim the result."""
    return FOOTER_PATTERN.sub('', text, count=1).strip()


def replace_index_footer(text: str, base_url: str) -> str:
    """Point the Home link at the repository README behind a separator."""
    return INDEX_FOOTER_PATTERN.sub(lambda _: f'<hr>[Home]({base_url}README.md', text)


def fix_return_brackets(text: str) -> str:
    """Escape the brace that opens a return type after an arrow."""
    return RETURN_BRACKET_PATTERN.sub(lambda _: '→ \\{', text)


def fix_optional_tags(text: str) -> str:
    """Escape ``<optional>`` attribute markers in parameter tables."""
    return OPTIONAL_TAG_PATTERN.sub(lambda _: '\\<optional>', text)


def fix_table_line_breaks(text: str) -> str:
    """Rejoin table rows split across lines by the conversion."""
    return TABLE_LINE_BREAK_PATTERN.sub('|', text)


def fix_asterisk_bullets(text: str) -> str:
    """Escape an asterisk directly following a bullet marker."""
    return ASTERISK_BULLET_PATTERN.sub(lambda _: '*   \\*', text)


def build_rule_chain(settings: Optional[RepositorySettings] = None) -> List[Tuple[str, Rule]]:
    """
    Build the ordered list of named rules for a repository.

    Args:
        settings: Repository constants used by the link rules

    Returns:
        List of ``(name, rule)`` pairs in application order
    """
    settings = settings or RepositorySettings()
    link_rewriter = LinkRewriter(settings)

    return [
        ('format_code_blocks', format_code_blocks),
        ('remove_jsdoc_header', remove_jsdoc_header),
        ('remove_jsdoc_footer', remove_jsdoc_footer),
        ('format_source_code_urls', link_rewriter.rewrite_source_urls),
        ('replace_index_footer', partial(replace_index_footer, base_url=settings.base_url)),
        ('replace_module_links', link_rewriter.rewrite_module_links),
        ('fix_return_brackets', fix_return_brackets),
        ('fix_optional_tags', fix_optional_tags),
        ('fix_table_line_breaks', fix_table_line_breaks),
        ('fix_asterisk_bullets', fix_asterisk_bullets),
    ]


def apply_rule_chain(
    text: str,
    settings: Optional[RepositorySettings] = None,
    applied: Optional[List[str]] = None
) -> str:
    """
    Run every rule once, in order, over a piece of text.

    Args:
        text: Converted Markdown
        settings: Repository constants
        applied: Optional list that receives the names of rules that changed the text

    Returns:
        Rewritten Markdown
    """
    for name, rule in build_rule_chain(settings):
        rewritten = rule(text)
        if rewritten != text and applied is not None:
            applied.append(name)
        text = rewritten
    return text


def apply_rules_to_tree(
    tree: DocumentTree,
    settings: Optional[RepositorySettings] = None,
    applied_rules: Optional[Dict[str, List[str]]] = None
) -> DocumentTree:
    """
    Apply the full rule chain to every leaf of a document tree.

    Args:
        tree: Tree of converted Markdown documents
        settings: Repository constants
        applied_rules: Optional dict receiving, per dotted document key,
            the names of rules that changed that document

    Returns:
        New DocumentTree holding the rewritten Markdown
    """
    settings = settings or RepositorySettings()

    def rewrite(key_path: KeyPath, text: str) -> str:
        applied: List[str] = []
        result = apply_rule_chain(text, settings, applied)
        if applied_rules is not None:
            applied_rules[dotted(key_path)] = applied

        unmatched = [name for name in RULE_NAMES if name not in applied]
        logger.debug(f"Applied {len(applied)} rules to '{dotted(key_path)}': {', '.join(applied) or 'none'}")
        if unmatched:
            logger.debug(f"Rules with no match in '{dotted(key_path)}': {', '.join(unmatched)}")
        return result

    return tree.map_leaves(rewrite)


RULE_NAMES = [name for name, _ in build_rule_chain()]


__all__ = [
    'RULE_NAMES',
    'apply_rule_chain',
    'apply_rules_to_tree',
    'build_rule_chain',
    'fix_asterisk_bullets',
    'fix_optional_tags',
    'fix_return_brackets',
    'fix_table_line_breaks',
    'format_code_blocks',
    'remove_jsdoc_footer',
    'remove_jsdoc_header',
    'replace_index_footer'
]
