"""Google Gemini generation backend."""

from __future__ import annotations

from typing import Any

from ...core.errors import UpstreamAPIError
from .base import GenerationBackend


class GeminiBackend(GenerationBackend):
    """Calls ``models/{model}:generateContent`` on the Generative Language API."""

    label = "Gemini"

    def generate(self, prompt: str) -> str:
        api_key = self._require_key()
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.cfg.temperature,
                "topP": self.cfg.top_p,
                "maxOutputTokens": self.cfg.max_output_tokens,
            },
        }
        url = f"{self.cfg.base_url}/v1beta/models/{self.cfg.model}:generateContent"
        try:
            data = self._post(url, payload, params={"key": api_key})
        except UpstreamAPIError as exc:
            self._log_llm_response("llm_rewrite_response", "provider_error", exc.message, prompt)
            raise

        content = _extract_text(data)
        if not content:
            self._log_llm_response("llm_rewrite_response", "invalid_response", str(data), prompt)
            raise UpstreamAPIError("Invalid response from Gemini API")
        self._log_llm_response("llm_rewrite_response", "ok", content, prompt)
        return content


def _extract_text(data: dict[str, Any]) -> str:
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""

    non_thought_chunks: list[str] = []
    all_chunks: list[str] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text")
        if text is None:
            continue
        chunk = str(text)
        if not chunk:
            continue
        all_chunks.append(chunk)
        if not bool(part.get("thought")):
            non_thought_chunks.append(chunk)

    if non_thought_chunks:
        return "".join(non_thought_chunks)
    return "".join(all_chunks)
