"""
Core data types for the article rewriter.

This module defines the transient values passed between pipeline stages:
- FetchRequest: Target URL handed to the fetcher
- ProxyAttempt: Outcome of one proxy call, used only for logging
- ExtractedArticle: Plain text extracted from the fetched page
- RewriteRequest: Parsed body of an incoming rewrite request
- RewriteResult: Generated article plus response metadata
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


ARTICLE_TYPES = ("job", "admit_card", "result", "answer_key", "syllabus", "other")
STYLES = ("conversational", "professional", "youtube", "blog")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class FetchRequest:
    """Target of a fetch. The URL is attempted as-is, with no scheme or host checks."""
    url: str


@dataclass
class ProxyAttempt:
    """Result of a single proxy call.

    Attempts are logged and then discarded; callers only ever see the
    aggregate outcome of the whole proxy list.

    Attributes:
        proxy: Name of the proxy that was tried
        status_code: HTTP status code, or None if the request failed before a response
        text: Usable raw text, or None on failure
        error: Failure reason, None on success
    """
    proxy: str
    status_code: int | None = None
    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


@dataclass
class ExtractedArticle:
    """Plain text extracted from a fetched page.

    Attributes:
        text: Extracted text, never longer than the configured ceiling
        truncated: True when the ceiling cut the text
        source: Name of the proxy that served the page
    """
    text: str
    truncated: bool = False
    source: str | None = None


@dataclass
class RewriteRequest:
    """Incoming rewrite request.

    Attributes:
        url: Article URL, required and non-blank
        type: Article type key (see ARTICLE_TYPES); unknown keys get a generic label
        style: Writing style key (see STYLES); unknown or missing keys use the default style
        custom_prompt: Free-form extra instructions
        custom_format: Free-form output format instructions
    """
    url: str
    type: str | None = None
    style: str | None = None
    custom_prompt: str | None = None
    custom_format: str | None = None

    @property
    def custom_instructions(self) -> str | None:
        return self.custom_prompt or self.custom_format or None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> RewriteRequest:
        return cls(
            url=_clean(payload.get("url")) or "",
            type=_clean(payload.get("type")),
            style=_clean(payload.get("style")),
            custom_prompt=_clean(payload.get("customPrompt")),
            custom_format=_clean(payload.get("customFormat")),
        )


@dataclass
class RewriteResult:
    """Generated article returned to the caller.

    Attributes:
        content: Generated text, never empty
        original_length: Length of the extracted source text
        rewritten_length: Length of the generated text
        timestamp: ISO 8601 UTC time the rewrite finished
    """
    content: str
    original_length: int
    rewritten_length: int
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "content": self.content,
            "originalLength": self.original_length,
            "rewrittenLength": self.rewritten_length,
            "timestamp": self.timestamp,
        }


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
