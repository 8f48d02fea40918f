"""OpenAI-compatible chat completions backend."""

from __future__ import annotations

from typing import Any

from ...core.errors import UpstreamAPIError
from .base import GenerationBackend


class OpenAICompatibleBackend(GenerationBackend):
    """Calls ``{base_url}/chat/completions`` with a single user message."""

    label = "OpenAI"

    def generate(self, prompt: str) -> str:
        api_key = self._require_key()
        payload = {
            "model": self.cfg.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.cfg.temperature,
            "top_p": self.cfg.top_p,
            "max_tokens": self.cfg.max_output_tokens,
        }
        url = f"{self.cfg.base_url.rstrip('/')}/chat/completions"
        try:
            data = self._post(url, payload, headers={"Authorization": f"Bearer {api_key}"})
        except UpstreamAPIError as exc:
            self._log_llm_response("llm_rewrite_response", "provider_error", exc.message, prompt)
            raise

        content = _extract_message(data)
        if not content:
            self._log_llm_response("llm_rewrite_response", "invalid_response", str(data), prompt)
            raise UpstreamAPIError("Invalid response from OpenAI API")
        self._log_llm_response("llm_rewrite_response", "ok", content, prompt)
        return content


def _extract_message(data: dict[str, Any]) -> str:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""
