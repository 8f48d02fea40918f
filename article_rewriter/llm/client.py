"""Prompt assembly plus one call to the configured generation backend."""

from __future__ import annotations

import logging

from ..config import PromptConfig
from .prompts import build_rewrite_prompt
from .providers.base import GenerationBackend


logger = logging.getLogger(__name__)


class RewriteClient:
    """Rewrites article text in the house tone via a generation backend.

    The backend carries its own credential; a missing key surfaces as a
    ``ConfigurationError`` from ``rewrite`` before any request is sent.
    """

    def __init__(self, backend: GenerationBackend, prompt_cfg: PromptConfig | None = None):
        self.backend = backend
        self.prompt_cfg = prompt_cfg or PromptConfig()

    def build_prompt(
        self,
        content: str,
        article_type: str | None = None,
        style: str | None = None,
        custom_instructions: str | None = None,
    ) -> str:
        return build_rewrite_prompt(content, article_type, style, custom_instructions, self.prompt_cfg)

    def rewrite(
        self,
        content: str,
        article_type: str | None = None,
        style: str | None = None,
        custom_instructions: str | None = None,
    ) -> str:
        """Return the backend's rewritten text verbatim."""
        prompt = self.build_prompt(content, article_type, style, custom_instructions)
        logger.debug(
            "Rewriting %d chars (type=%s, style=%s, template=%s)",
            len(content),
            article_type,
            style,
            self.prompt_cfg.template,
        )
        return self.backend.generate(prompt)
