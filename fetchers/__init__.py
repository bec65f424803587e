"""Fetchers package for reading JSDoc HTML sources."""

from .base_fetcher import BaseFetcher, FetcherError
from .html_fetcher import HtmlFetcher

__all__ = [
    'BaseFetcher',
    'FetcherError',
    'HtmlFetcher'
]
