"""Abstract interface and shared HTTP plumbing for generation backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig
from ...core.errors import ConfigurationError, UpstreamAPIError
from ...logging_utils import log_event, redact_text, truncate_text


class GenerationBackend(ABC):
    """A generative-text API that turns one prompt into one completion.

    Subclasses implement ``generate``; the constructor never touches the
    network and never fails on a missing key, so a misconfigured backend
    still lets the service answer requests with a configuration error.
    """

    label = "LLM"

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig | None = None,
        llm_logger: logging.Logger | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg or LoggingConfig()
        self.llm_logger = llm_logger
        self._transport = transport

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return generated text for ``prompt``.

        Raises:
            ConfigurationError: No API key was supplied
            UpstreamAPIError: The API failed or returned an unexpected shape
        """
        raise NotImplementedError

    def _require_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(f"{self.cfg.api_key_env} not configured")
        return self.api_key

    def _post(
        self,
        url: str,
        payload: dict[str, Any],
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            with httpx.Client(
                timeout=self.cfg.timeout_seconds,
                trust_env=self.cfg.trust_env,
                transport=self._transport,
            ) as client:
                resp = client.post(url, params=params, headers=headers, json=payload)
                if not resp.is_success:
                    raise UpstreamAPIError(self._error_message(resp), status_code=resp.status_code)
                data = resp.json()
        except httpx.HTTPError as exc:
            raise UpstreamAPIError(f"{self.label} API request failed: {type(exc).__name__}") from exc
        except ValueError as exc:
            raise UpstreamAPIError(f"Invalid response from {self.label} API") from exc

        if not isinstance(data, dict):
            raise UpstreamAPIError(f"Invalid response from {self.label} API")
        return data

    def _error_message(self, resp: httpx.Response) -> str:
        fallback = f"{self.label} API error"
        try:
            body = resp.json()
        except ValueError:
            return fallback
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        return fallback

    def _log_llm_response(self, event: str, status: str, content: str, prompt: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": event,
            "status": status,
            "backend": self.cfg.name,
            "model": self.cfg.model,
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        payload["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(self.llm_logger, "LLM response", **payload)
