"""Build configuration: built-in defaults, an optional YAML file, and CLI overrides."""

import copy
import os
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import yaml

from models import DEFAULT_BASE_URL, DEFAULT_MODULES_PATH, DEFAULT_TOP_NAMESPACE, to_key_path

DEFAULT_CONFIG_PATH = 'docs_build.yaml'

DEFAULT_DOCUMENTS: List[Dict[str, str]] = [
    {
        'key': 'global',
        'source': 'build/jsdoc/deep-props.html',
        'output': 'docs/global.md'
    },
    {
        'key': 'extract.API',
        'source': 'build/jsdoc/module-extract.html',
        'output': 'libs/extract/docs/API.md'
    },
    {
        'key': 'extract.global',
        'source': 'build/jsdoc/deep-props.extract.html',
        'output': 'libs/extract/docs/global.md'
    },
]

DEFAULT_CONFIG: Dict[str, Any] = {
    'repository': {
        'base_url': DEFAULT_BASE_URL,
        'modules_path': DEFAULT_MODULES_PATH,
        'top_namespace': DEFAULT_TOP_NAMESPACE
    },
    'documents': DEFAULT_DOCUMENTS,
    'build': {
        'root': '.',
        'encoding': 'utf-8',
        'dry_run': False
    },
    'logging': {
        'level': None,
        'file': None
    }
}

LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class ConfigLoader:
    """Loads, merges and validates the build configuration."""

    @classmethod
    def load(cls, config_path: Optional[str] = None, required: bool = False) -> Dict[str, Any]:
        """
        Layer an optional YAML file over the built-in configuration.

        Args:
            config_path: YAML file to read (defaults to docs_build.yaml)
            required: Raise if the file is missing instead of using the defaults

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If a required file doesn't exist
            ValueError: If the file does not hold a mapping
            yaml.YAMLError: If the file is not valid YAML
        """
        defaults = copy.deepcopy(DEFAULT_CONFIG)
        path = config_path or DEFAULT_CONFIG_PATH

        if not os.path.isfile(path):
            if required:
                raise FileNotFoundError(f"Configuration file not found: {path}")
            return defaults

        with open(path, 'r', encoding='utf-8') as f:
            overrides = yaml.safe_load(f)

        if overrides is None:
            return defaults
        if not isinstance(overrides, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")

        return cls._deep_merge(defaults, overrides)

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> None:
        """
        Check repository constants, the document manifest, and build and logging settings.

        Raises:
            ValueError: On the first invalid value found
        """
        cls._validate_repository(config.get('repository') or {})
        cls._validate_documents(config.get('documents'))

        encoding = get_nested(config, 'build.encoding', 'utf-8')
        if not isinstance(encoding, str) or not encoding:
            raise ValueError("build.encoding must be a non-empty string")

        level = get_nested(config, 'logging.level')
        if level is not None and str(level).upper() not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(sorted(LOG_LEVELS))}")

    @classmethod
    def _validate_repository(cls, repository: Dict[str, Any]) -> None:
        for name in ('base_url', 'modules_path', 'top_namespace'):
            value = repository.get(name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"Missing required configuration: repository.{name}")

        base_url = urlparse(repository['base_url'])
        if base_url.scheme not in ('http', 'https') or not base_url.netloc:
            raise ValueError(f"repository.base_url must be an http(s) URL with a host: {repository['base_url']}")
        if not repository['base_url'].endswith('/'):
            raise ValueError(f"repository.base_url must end with '/': {repository['base_url']}")

        modules_path = repository['modules_path']
        if modules_path.startswith('/') or not modules_path.endswith('/'):
            raise ValueError(
                f"repository.modules_path must be a relative path ending with '/': {modules_path}"
            )

    @classmethod
    def _validate_documents(cls, documents: Any) -> None:
        if not isinstance(documents, list) or not documents:
            raise ValueError("documents must be a non-empty list")

        key_paths = []
        for index, entry in enumerate(documents):
            if not isinstance(entry, dict):
                raise ValueError(f"documents[{index}] must be a mapping")

            for field in ('key', 'source', 'output'):
                value = entry.get(field)
                if not isinstance(value, str) or not value.strip():
                    raise ValueError(f"documents[{index}].{field} is required")
                if field != 'key' and PurePosixPath(value).is_absolute():
                    raise ValueError(f"documents[{index}].{field} must be a relative path: {value}")

            try:
                key_paths.append(to_key_path(entry['key']))
            except ValueError:
                raise ValueError(f"documents[{index}].key is not a valid dotted name: {entry['key']}")

        # Keys address leaves of one tree, so no key may equal or nest inside another
        for index, key_path in enumerate(key_paths):
            for other in key_paths[index + 1:]:
                shorter, longer = sorted((key_path, other), key=len)
                if longer[:len(shorter)] == shorter:
                    raise ValueError(
                        f"Document keys '{'.'.join(key_path)}' and '{'.'.join(other)}' overlap"
                    )

    @classmethod
    def merge_with_args(cls, config: Dict[str, Any], args) -> Dict[str, Any]:
        """
        Apply CLI arguments on top of the loaded configuration.

        Args:
            config: Loaded configuration (left unmodified)
            args: Parsed arguments with ``root``, ``dry_run`` and ``verbose``

        Returns:
            New configuration dictionary
        """
        merged = copy.deepcopy(config)
        build = merged.setdefault('build', {})
        logging_section = merged.setdefault('logging', {})

        if getattr(args, 'root', None):
            build['root'] = args.root

        if getattr(args, 'dry_run', None) is not None:
            build['dry_run'] = args.dry_run

        verbose = getattr(args, 'verbose', 0)
        if verbose:
            logging_section['level'] = 'DEBUG' if verbose >= 2 else 'INFO'

        return merged

    @classmethod
    def _deep_merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge ``override`` into a copy of ``base``; lists are replaced."""
        merged = copy.deepcopy(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = cls._deep_merge(merged[key], value)
            else:
                merged[key] = copy.deepcopy(value)
        return merged


def get_nested(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Read a value by dotted path, e.g. ``get_nested(config, "build.encoding")``."""
    node: Any = config
    for key in path.split('.'):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


__all__ = ['ConfigLoader', 'DEFAULT_CONFIG', 'DEFAULT_CONFIG_PATH', 'DEFAULT_DOCUMENTS', 'get_nested']
