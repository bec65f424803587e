"""Markdown converter turning JSDoc HTML pages into GitHub-flavoured Markdown."""

import logging
import re

from markdownify import ATX, MarkdownConverter as MarkdownifyConverter

from models import Document

logger = logging.getLogger('jsdoc_markdown.converters.markdown_converter')

CODE_INDENT = '    '
BULLET = '*  '  # markdownify appends one space, giving the "*   " list marker


class MarkdownConverter(MarkdownifyConverter):
    """
    HTML to Markdown converter for JSDoc output.

    This class extends markdownify.MarkdownConverter with GFM support
    (pipe tables, strikethrough, task-list checkboxes) and produces the
    Markdown shape the text rules are written against:
    - ``<pre>`` blocks become 4-space indented code
    - the page ``<title>`` becomes the leading paragraph
    - definition lists are rendered as plain blocks
    - unordered list items use a ``*   `` marker
    """

    def __init__(self, logger: logging.Logger = None, **kwargs):
        """Initialize markdown converter with a logger and markdownify option overrides."""
        markdownify_options = {
            'heading_style': ATX,
            'bullets': (BULLET,),
            'escape_asterisks': False,
            'escape_underscores': False,
            'table_infer_header': True,
            'bs4_options': 'lxml',
        }

        markdownify_options.update(kwargs)

        super().__init__(**markdownify_options)

        self.logger = logger or logging.getLogger('jsdoc_markdown.converters.markdown_converter')

    def convert_document(self, document: Document) -> bool:
        """
        Convert a Document's HTML into Markdown, storing the result on it.

        Args:
            document: Document with ``html`` loaded

        Returns:
            bool: True if conversion succeeded, False if the document has no HTML
        """
        if document.html is None:
            self.logger.error(f"Document '{document.key}' has no HTML to convert")
            document.conversion_metadata['conversion_status'] = 'failed'
            return False

        self.logger.info(f"Converting '{document.key}' to markdown")

        document.markdown = self.html_to_markdown(document.html)
        document.conversion_metadata.update({
            'conversion_status': 'converted',
            'html_length': len(document.html),
            'markdown_length': len(document.markdown)
        })

        self.logger.debug(
            f"Converted '{document.key}': {len(document.html)} HTML chars -> "
            f"{len(document.markdown)} markdown chars"
        )
        return True

    def html_to_markdown(self, html_content: str) -> str:
        """Convert an HTML string to Markdown."""
        markdown = self.convert(html_content)
        return self._final_cleanup(markdown)

    def _final_cleanup(self, markdown: str) -> str:
        """Collapse runs of blank lines left by whitespace between tags."""
        return re.sub(r'\n{3,}', '\n\n', markdown)

    def convert_pre(self, el, text, parent_tags=None, **kwargs):
        """Render preformatted blocks as indented code, blank lines included."""
        code = el.get_text().strip('\n')
        if not code:
            return ''
        indented = '\n'.join(CODE_INDENT + line for line in code.split('\n'))
        return f'\n\n{indented}\n\n'

    def convert_title(self, el, text, parent_tags=None, **kwargs):
        """Keep the page title as its own paragraph."""
        text = (text or '').strip()
        return f'\n\n{text}\n\n' if text else ''

    def convert_dt(self, el, text, parent_tags=None, **kwargs):
        """Render definition terms as plain paragraphs."""
        text = (text or '').strip()
        if parent_tags and '_inline' in parent_tags:
            return f' {text} '
        return f'\n\n{text}\n\n' if text else ''

    convert_dd = convert_dt

    def convert_input(self, el, text, parent_tags=None, **kwargs):
        """Render task-list checkboxes."""
        if el.get('type', '').lower() != 'checkbox':
            return ''
        return '[x] ' if el.has_attr('checked') else '[ ] '


def convert_document(document: Document) -> bool:
    """Convenience wrapper converting a single Document with a fresh converter."""
    converter = MarkdownConverter(logger=logger)
    return converter.convert_document(document)


__all__ = ['MarkdownConverter', 'convert_document']
