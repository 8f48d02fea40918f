"""
Request pipeline for the article rewriter.

One request runs three sequential steps:
1. Fetch the page through the proxy list
2. Extract and cap the plain text
3. Rewrite it with the configured generation backend

Nothing is shared between requests apart from immutable configuration.
"""

from __future__ import annotations

import logging

import httpx

from .config import AppConfig, get_api_key
from .core.errors import FetchExhaustedError, InputError
from .core.types import RewriteRequest, RewriteResult
from .fetch.fetcher import ContentFetcher
from .llm.client import RewriteClient
from .llm.providers.factory import create_backend
from .logging_utils import log_event


logger = logging.getLogger(__name__)


class RewriteService:
    """Fetch-then-rewrite pipeline behind the HTTP handler and the CLI."""

    def __init__(self, fetcher: ContentFetcher, client: RewriteClient):
        self.fetcher = fetcher
        self.client = client

    def run(self, request: RewriteRequest) -> RewriteResult:
        """Rewrite the article at ``request.url``.

        Raises:
            InputError: The URL is missing or blank
            FetchExhaustedError: No proxy produced usable content
            ConfigurationError: The backend has no API key
            UpstreamAPIError: The backend call failed
        """
        if not request.url or not request.url.strip():
            raise InputError("URL is required")

        article = self.fetcher.fetch_article(request.url)
        if article is None:
            raise FetchExhaustedError()

        content = self.client.rewrite(
            article.text,
            request.type,
            request.style,
            request.custom_instructions,
        )
        result = RewriteResult(
            content=content,
            original_length=len(article.text),
            rewritten_length=len(content),
        )
        log_event(
            logger,
            "Rewrite complete",
            target_url=request.url,
            article_type=request.type,
            original_length=result.original_length,
            rewritten_length=result.rewritten_length,
        )
        return result


def build_service(
    cfg: AppConfig,
    llm_logger: logging.Logger | None = None,
    transport: httpx.BaseTransport | None = None,
) -> RewriteService:
    """Wire a service from config.

    The API key is resolved once here (inline value first, then the
    environment) and injected into the backend.
    """
    fetcher = ContentFetcher(cfg.fetch, transport=transport)
    backend = create_backend(
        cfg.provider,
        get_api_key(cfg.provider),
        log_cfg=cfg.logging,
        llm_logger=llm_logger,
        transport=transport,
    )
    return RewriteService(fetcher, RewriteClient(backend, cfg.prompt))
