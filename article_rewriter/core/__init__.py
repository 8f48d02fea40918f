"""
Core types and errors shared by every pipeline stage.
"""

from .errors import (
    ConfigurationError,
    FetchExhaustedError,
    InputError,
    MethodError,
    RewriterError,
    UpstreamAPIError,
)
from .types import (
    ARTICLE_TYPES,
    STYLES,
    ExtractedArticle,
    FetchRequest,
    ProxyAttempt,
    RewriteRequest,
    RewriteResult,
)

__all__ = [
    "ARTICLE_TYPES",
    "STYLES",
    "ExtractedArticle",
    "FetchRequest",
    "ProxyAttempt",
    "RewriteRequest",
    "RewriteResult",
    "RewriterError",
    "InputError",
    "MethodError",
    "FetchExhaustedError",
    "ConfigurationError",
    "UpstreamAPIError",
]
