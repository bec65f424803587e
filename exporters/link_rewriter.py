"""Link rewriter for pointing JSDoc-generated links at the hosted repository."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Union

from models import RepositorySettings

# Per-line source anchors, e.g. "libs_extract_index.js.html#line42"
SOURCE_ANCHOR_PATTERN = re.compile(r'([\w]*\.js\.html#line)', re.ASCII)

# Bare generated source pages, e.g. "index.js.html"
SOURCE_FILE_PATTERN = re.compile(r'([\w]*\.js\.html)', re.ASCII)

# Markdown link targets pointing at generated pages, including the "](" prefix
MODULE_LINK_PATTERN = re.compile(
    r"(\]\([\w\-._~:/?#\[\]@!$&'()*\\+,;=`]*\.html)"
)

LINK_PREFIX = ']('
API_PAGE = '/docs/API.md'
GLOBAL_PAGE = 'docs/global.md'


@dataclass(frozen=True)
class Literal:
    """Text between delimiter matches, emitted verbatim."""
    text: str


@dataclass(frozen=True)
class MatchedLink:
    """A delimiter match that gets rewritten."""
    target: str


Token = Union[Literal, MatchedLink]


def tokenize(text: str, pattern: Pattern) -> List[Token]:
    """
    Split text into literal segments and matched delimiter segments.

    Args:
        text: Text to split
        pattern: Compiled pattern whose first group is the delimiter

    Returns:
        Tokens in source order; concatenating every token's text yields ``text``
    """
    tokens: List[Token] = []
    position = 0

    for match in pattern.finditer(text):
        if match.start() > position:
            tokens.append(Literal(text[position:match.start()]))
        tokens.append(MatchedLink(match.group(1)))
        position = match.end()

    if position < len(text):
        tokens.append(Literal(text[position:]))

    return tokens


def reassemble(tokens: List[Token], rewrite: Callable[[str], str]) -> str:
    """Join tokens back into text, passing every matched link through ``rewrite``."""
    parts = []
    for token in tokens:
        if isinstance(token, MatchedLink):
            parts.append(rewrite(token.target))
        else:
            parts.append(token.text)
    return ''.join(parts)


class LinkRewriter:
    """
    Rewrites JSDoc source-file links and module page links to repository URLs.

    This rewriter:
    1. Turns per-line source anchors into ``<base_url>path/file.js#L<n>``
    2. Turns bare generated source pages into ``<base_url>path/file.js``
    3. Sends module page links to ``<modules_path><name>/docs/API.md``
    4. Sends the top namespace page to ``docs/global.md``
    5. Sends every other generated page to ``<modules_path><name>/docs/global.md``
    """

    def __init__(self, settings: Optional[RepositorySettings] = None, logger: Optional[logging.Logger] = None):
        """
        Initialize the link rewriter.

        Args:
            settings: Repository constants (defaults to the built-in repository)
            logger: Logger instance
        """
        self.settings = settings or RepositorySettings()
        self.logger = logger or logging.getLogger('jsdoc_markdown.exporters.link_rewriter')

    def rewrite_source_urls(self, text: str) -> str:
        """Replace generated source-file links with links into the repository."""
        base_url = self.settings.base_url

        def rewrite_anchor(target: str) -> str:
            return base_url + (
                target.replace('_', '/')
                .replace('line', 'L')
                .replace('.js.html', '.js')
            )

        def rewrite_file(target: str) -> str:
            return base_url + target.replace('_', '/').replace('.js.html', '.js')

        text = reassemble(tokenize(text, SOURCE_ANCHOR_PATTERN), rewrite_anchor)
        return reassemble(tokenize(text, SOURCE_FILE_PATTERN), rewrite_file)

    def rewrite_module_links(self, text: str) -> str:
        """Replace links to generated namespace and module pages."""
        return reassemble(tokenize(text, MODULE_LINK_PATTERN), self._rewrite_module_link)

    def _rewrite_module_link(self, delimiter: str) -> str:
        target = delimiter[len(LINK_PREFIX):] if delimiter.startswith(LINK_PREFIX) else delimiter
        rewritten = LINK_PREFIX + self.resolve_page(target)
        self.logger.debug(f"Rewrote link '{target}' -> '{rewritten[len(LINK_PREFIX):]}'")
        return rewritten

    def resolve_page(self, target: str) -> str:
        """
        Map a generated page target to its URL in the repository.

        Args:
            target: Link target ending in ``.html`` (without the ``](`` prefix)

        Returns:
            Absolute URL of the matching Markdown page
        """
        settings = self.settings
        module_marker = settings.top_namespace + '.module_'
        namespace_page = settings.top_namespace + '.html'

        if module_marker in target:
            name = target.replace(module_marker, '', 1).replace('.html', '')
            return settings.base_url + settings.modules_path + name + API_PAGE

        if namespace_page in target:
            return settings.base_url + target.replace(namespace_page, GLOBAL_PAGE, 1)

        # Any other generated page is treated as a namespace under the modules library
        name = target.replace(settings.top_namespace + '.', '', 1).replace('.html', '')
        return settings.base_url + settings.modules_path + name + '/' + GLOBAL_PAGE


def format_source_code_urls(text: str, settings: Optional[RepositorySettings] = None) -> str:
    """Replace source code urls with repository links."""
    return LinkRewriter(settings).rewrite_source_urls(text)


def replace_module_links(text: str, settings: Optional[RepositorySettings] = None) -> str:
    """Replace links to module and namespace HTML pages."""
    return LinkRewriter(settings).rewrite_module_links(text)


__all__ = [
    'LinkRewriter',
    'Literal',
    'MatchedLink',
    'format_source_code_urls',
    'reassemble',
    'replace_module_links',
    'tokenize'
]
