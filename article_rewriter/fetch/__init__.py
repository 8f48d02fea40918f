"""
Content fetching and extraction.

This package retrieves article pages through CORS proxies and converts
them to plain text for the rewrite stage.
"""

from .extractor import extract_text, truncate_text
from .fetcher import ContentFetcher, ProxyProvider, first_success

__all__ = ["ContentFetcher", "ProxyProvider", "first_success", "extract_text", "truncate_text"]
