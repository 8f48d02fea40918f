"""Prompt templates, rewrite client and generation backends."""

from .client import RewriteClient
from .prompts import STYLE_INSTRUCTIONS, TYPE_LABELS, available_templates, build_rewrite_prompt
from .providers import (
    GenerationBackend,
    GeminiBackend,
    OpenAICompatibleBackend,
    available_backends,
    create_backend,
)

__all__ = [
    "RewriteClient",
    "TYPE_LABELS",
    "STYLE_INSTRUCTIONS",
    "available_templates",
    "build_rewrite_prompt",
    "GenerationBackend",
    "GeminiBackend",
    "OpenAICompatibleBackend",
    "available_backends",
    "create_backend",
]
