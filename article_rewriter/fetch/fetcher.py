"""
Article fetching through third-party CORS proxies.

Proxies are described by data (``ProxyProvider``) and tried strictly one at a
time in list order. Each attempt has one overall deadline of
``timeout_seconds`` that covers the whole body, not just each read. The first
proxy that returns usable text wins; failures are logged and otherwise
discarded. There are no retries beyond the list.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import time
from typing import Callable, Iterable, TypeVar
from urllib.parse import quote

import httpx

from ..config import FetchConfig, ProxyConfig
from ..core.types import ExtractedArticle, FetchRequest, ProxyAttempt
from ..logging_utils import log_event
from .extractor import extract_text, truncate_text


T = TypeVar("T")
R = TypeVar("R")

RESPONSE_FORMATS = ("json", "raw")

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyProvider:
    """A CORS proxy endpoint.

    Attributes:
        name: Label used in logs
        url_template: Proxy URL with a ``{url}`` placeholder
        response_format: "json" for an envelope with the page under ``json_field``,
            "raw" when the response body is the page itself
        json_field: Envelope field name for "json" proxies
    """
    name: str
    url_template: str
    response_format: str = "raw"
    json_field: str = "contents"

    def __post_init__(self) -> None:
        if self.response_format not in RESPONSE_FORMATS:
            raise ValueError(f"Unsupported proxy response format: {self.response_format}")
        if "{url}" not in self.url_template:
            raise ValueError(f"Proxy template for {self.name} has no {{url}} placeholder")

    @classmethod
    def from_config(cls, cfg: ProxyConfig) -> ProxyProvider:
        return cls(
            name=cfg.name,
            url_template=cfg.url_template,
            response_format=cfg.response_format,
            json_field=cfg.json_field,
        )

    def build_url(self, target: str) -> str:
        return self.url_template.replace("{url}", quote(target, safe=_URI_COMPONENT_SAFE))

    def read_text(self, body: bytes, encoding: str = "utf-8") -> str | None:
        """Pull the page text out of a successful proxy response body.

        Raises ValueError (including JSON and Unicode decode errors) when a
        "json" body cannot be parsed.
        """
        if self.response_format == "raw":
            return body.decode(encoding, errors="replace")
        data = json.loads(body)
        if not isinstance(data, dict):
            return None
        value = data.get(self.json_field)
        return value if isinstance(value, str) else None


def first_success(items: Iterable[T], attempt: Callable[[T], R | None]) -> R | None:
    """Return the first non-None result of ``attempt`` over ``items``, in order."""
    for item in items:
        result = attempt(item)
        if result is not None:
            return result
    return None


class ContentFetcher:
    """Fetches article pages via an ordered list of CORS proxies."""

    def __init__(
        self,
        cfg: FetchConfig,
        providers: list[ProxyProvider] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.cfg = cfg
        if providers is None:
            providers = [ProxyProvider.from_config(proxy) for proxy in cfg.proxies]
        self.providers = providers
        self._transport = transport

    def fetch(self, url: str) -> str | None:
        """Return raw page text from the first usable proxy, or None if all fail."""
        request = FetchRequest(url=url)
        attempt = first_success(
            self.providers,
            lambda provider: _usable(self._attempt(provider, request)),
        )
        if attempt is None:
            log_event(
                logger,
                "All proxies failed",
                level=logging.WARNING,
                target_url=url,
                proxies=[p.name for p in self.providers],
            )
            return None
        log_event(logger, "Proxy fetch succeeded", proxy=attempt.proxy, target_url=url, chars=len(attempt.text))
        return attempt.text

    def fetch_article(self, url: str) -> ExtractedArticle | None:
        """Fetch ``url`` and return its extracted text, capped at ``max_chars``."""
        raw = self.fetch(url)
        if raw is None:
            return None
        text = extract_text(raw)
        if not text:
            log_event(logger, "Extracted text is empty", level=logging.WARNING, target_url=url)
            return None
        article = truncate_text(text, self.cfg.max_chars)
        if article.truncated:
            logger.debug("Truncated article from %d to %d chars", len(text), self.cfg.max_chars)
        return article

    def _attempt(self, provider: ProxyProvider, request: FetchRequest) -> ProxyAttempt:
        proxy_url = provider.build_url(request.url)
        deadline = time.monotonic() + self.cfg.timeout_seconds
        status_code: int | None = None
        try:
            with httpx.Client(
                timeout=self.cfg.timeout_seconds,
                headers={"User-Agent": self.cfg.user_agent},
                follow_redirects=True,
                trust_env=self.cfg.trust_env,
                transport=self._transport,
            ) as client:
                with client.stream("GET", proxy_url) as resp:
                    status_code = resp.status_code
                    if not resp.is_success:
                        return self._failed(provider, request, f"HTTP {resp.status_code}", resp.status_code)
                    body = _read_before(resp, deadline)
            if body is None:
                return self._failed(
                    provider,
                    request,
                    f"Deadline of {self.cfg.timeout_seconds}s exceeded",
                    resp.status_code,
                )
            text = provider.read_text(body, resp.charset_encoding or "utf-8")
        except httpx.HTTPError as exc:
            return self._failed(provider, request, f"{type(exc).__name__}: {exc}")
        except (ValueError, LookupError) as exc:
            return self._failed(provider, request, f"{type(exc).__name__}: {exc}", status_code)

        if not text or len(text) < self.cfg.min_length:
            return self._failed(
                provider,
                request,
                f"Response too short ({len(text or '')} chars)",
                resp.status_code,
            )
        return ProxyAttempt(proxy=provider.name, status_code=resp.status_code, text=text)

    def _failed(
        self,
        provider: ProxyProvider,
        request: FetchRequest,
        error: str,
        status_code: int | None = None,
    ) -> ProxyAttempt:
        log_event(
            logger,
            "Proxy failed",
            level=logging.INFO,
            proxy=provider.name,
            target_url=request.url,
            status_code=status_code,
            error=error,
        )
        return ProxyAttempt(proxy=provider.name, status_code=status_code, error=error)


def _usable(attempt: ProxyAttempt) -> ProxyAttempt | None:
    return attempt if attempt.ok else None


def _read_before(resp: httpx.Response, deadline: float) -> bytes | None:
    """Read the body, or return None once the monotonic ``deadline`` passes."""
    chunks: list[bytes] = []
    for chunk in resp.iter_bytes():
        chunks.append(chunk)
        if time.monotonic() > deadline:
            return None
    return b"".join(chunks)
