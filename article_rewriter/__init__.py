"""
Article Rewriter - fetch an article through CORS proxies and rewrite it with an LLM.

The package exposes a single HTTP endpoint (Flask) that fetches a page,
strips it to plain text and asks a generative-text API for a rewritten
Hinglish article in a chosen style.

Example:
    $ article-rewriter serve --port 8000
    $ article-rewriter rewrite -u https://example.com/notice -t job -s blog
"""

__all__ = ["__version__", "create_app", "RewriteService", "build_service"]
__version__ = "0.1.0"

from .app import create_app
from .runner import RewriteService, build_service
