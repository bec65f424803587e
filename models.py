"""Data models for the JSDoc HTML to Markdown documentation build."""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union

logger = logging.getLogger('jsdoc_markdown')

DEFAULT_BASE_URL = 'https://github.com/jpcx/deep-props/blob/master/'
DEFAULT_MODULES_PATH = 'libs/'
DEFAULT_TOP_NAMESPACE = 'deep-props'

KeyPath = Tuple[str, ...]


def to_key_path(key: Union[str, KeyPath]) -> KeyPath:
    """Normalize a dotted document name ("extract.API") into a key path."""
    if isinstance(key, str):
        parts = tuple(key.split('.'))
    else:
        parts = tuple(key)

    if not parts or any(not part for part in parts):
        raise ValueError(f"Invalid document key: {key!r}")

    return parts


def dotted(key_path: KeyPath) -> str:
    """Render a key path the way document names are written in configuration."""
    return '.'.join(key_path)


@dataclass(frozen=True)
class RepositorySettings:
    """Constants describing the hosted repository the Markdown is written for."""

    base_url: str = DEFAULT_BASE_URL
    modules_path: str = DEFAULT_MODULES_PATH
    top_namespace: str = DEFAULT_TOP_NAMESPACE

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'RepositorySettings':
        """Build settings from the ``repository`` section of a configuration dict."""
        repository = config.get('repository', {}) or {}
        return cls(
            base_url=repository.get('base_url', DEFAULT_BASE_URL),
            modules_path=repository.get('modules_path', DEFAULT_MODULES_PATH),
            top_namespace=repository.get('top_namespace', DEFAULT_TOP_NAMESPACE)
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            'base_url': self.base_url,
            'modules_path': self.modules_path,
            'top_namespace': self.top_namespace
        }


@dataclass
class Document:
    """A single documentation page moving through the build."""

    key: str  # dotted logical name, e.g. "extract.API"
    source_path: Path
    output_path: Path
    html: Optional[str] = None
    markdown: Optional[str] = None
    conversion_metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize paths and initialize default metadata if empty."""
        self.source_path = Path(self.source_path)
        self.output_path = Path(self.output_path)
        to_key_path(self.key)

        if not self.conversion_metadata:
            self.conversion_metadata = {
                'conversion_status': 'pending',
                'html_length': 0,
                'markdown_length': 0,
                'rules_applied': [],
                'rules_unmatched': []
            }

    @property
    def key_path(self) -> KeyPath:
        return to_key_path(self.key)

    @classmethod
    def from_config(cls, entry: Dict[str, Any], root: Union[str, Path] = '.') -> 'Document':
        """Create a document from one ``documents`` configuration entry."""
        root = Path(root)
        return cls(
            key=entry['key'],
            source_path=root / entry['source'],
            output_path=root / entry['output']
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize document to dictionary."""
        return {
            'key': self.key,
            'source_path': str(self.source_path),
            'output_path': str(self.output_path),
            'conversion_metadata': self.conversion_metadata
        }


class DocumentTree:
    """
    Insertion-ordered nested mapping of document names to Markdown text.

    Leaves are strings, internal nodes are sub-mappings. Every leaf is
    addressed by a unique key path such as ``("extract", "API")``.
    Transformations never mutate a tree in place; ``map_leaves`` returns a
    new tree so a rewritten tree is never shared with its source.
    """

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = {}
        for key, value in (entries or {}).items():
            self._entries[key] = self._copy_node(value, (key,))

    @staticmethod
    def _copy_node(value: Any, key_path: KeyPath) -> Any:
        if isinstance(value, str):
            return value
        if isinstance(value, dict):
            return {
                key: DocumentTree._copy_node(child, key_path + (key,))
                for key, child in value.items()
            }
        raise TypeError(
            f"Document tree entry {dotted(key_path)!r} must be text or a mapping, "
            f"got {type(value).__name__}"
        )

    def set(self, key: Union[str, KeyPath], text: str) -> None:
        """Store text at a key path, creating intermediate mappings as needed."""
        if not isinstance(text, str):
            raise TypeError(f"Document text must be a string, got {type(text).__name__}")

        key_path = to_key_path(key)
        node = self._entries
        for depth, part in enumerate(key_path[:-1]):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise ValueError(
                    f"Cannot nest {dotted(key_path)!r} under text leaf "
                    f"{dotted(key_path[:depth + 1])!r}"
                )
            node = child

        if isinstance(node.get(key_path[-1]), dict):
            raise ValueError(f"Cannot replace mapping {dotted(key_path)!r} with text")
        node[key_path[-1]] = text

    def get(self, key: Union[str, KeyPath]) -> Any:
        """Return the text or sub-mapping stored at a key path."""
        key_path = to_key_path(key)
        node: Any = self._entries
        for part in key_path:
            if not isinstance(node, dict) or part not in node:
                raise KeyError(dotted(key_path))
            node = node[part]
        return copy.deepcopy(node)

    def __contains__(self, key: Union[str, KeyPath]) -> bool:
        try:
            self.get(key)
        except (KeyError, ValueError):
            return False
        return True

    def leaves(self) -> Iterator[Tuple[KeyPath, str]]:
        """Yield ``(key_path, text)`` for every leaf, depth first in insertion order."""
        def walk(node: Dict[str, Any], prefix: KeyPath) -> Iterator[Tuple[KeyPath, str]]:
            for key, value in node.items():
                if isinstance(value, str):
                    yield prefix + (key,), value
                else:
                    yield from walk(value, prefix + (key,))

        yield from walk(self._entries, ())

    def map_leaves(self, fn: Callable[[KeyPath, str], str]) -> 'DocumentTree':
        """
        Apply ``fn`` to every text leaf exactly once and return a new tree.

        Args:
            fn: Callable receiving the leaf's key path and text, returning new text

        Returns:
            New DocumentTree with the same shape and rewritten leaves
        """
        def walk(node: Dict[str, Any], prefix: KeyPath) -> Dict[str, Any]:
            result = {}
            for key, value in node.items():
                if isinstance(value, str):
                    result[key] = fn(prefix + (key,), value)
                else:
                    result[key] = walk(value, prefix + (key,))
            return result

        tree = DocumentTree()
        tree._entries = walk(self._entries, ())
        return tree

    def __len__(self) -> int:
        """Number of text leaves."""
        return sum(1 for _ in self.leaves())

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DocumentTree):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"DocumentTree({[dotted(path) for path, _ in self.leaves()]})"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tree to a plain nested dictionary."""
        return copy.deepcopy(self._entries)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DocumentTree':
        """Deserialize from a plain nested dictionary."""
        return cls(data)


__all__ = [
    'DEFAULT_BASE_URL',
    'DEFAULT_MODULES_PATH',
    'DEFAULT_TOP_NAMESPACE',
    'Document',
    'DocumentTree',
    'KeyPath',
    'RepositorySettings',
    'dotted',
    'to_key_path'
]
