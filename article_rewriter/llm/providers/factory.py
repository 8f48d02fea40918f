"""Backend factory and registry for swappable generation APIs."""

from __future__ import annotations

import logging

import httpx

from ...config import LoggingConfig, ProviderConfig
from .base import GenerationBackend
from .gemini import GeminiBackend
from .openai_compatible import OpenAICompatibleBackend


BackendBuilder = type[GenerationBackend]

_BACKEND_REGISTRY: dict[str, BackendBuilder] = {
    "gemini": GeminiBackend,
    "openai": OpenAICompatibleBackend,
    "openai_compatible": OpenAICompatibleBackend,
    "openai-compatible": OpenAICompatibleBackend,
}


def available_backends() -> list[str]:
    """Return the set of registered backend names."""
    return sorted(_BACKEND_REGISTRY.keys())


def create_backend(
    provider_cfg: ProviderConfig,
    api_key: str | None,
    log_cfg: LoggingConfig | None = None,
    llm_logger: logging.Logger | None = None,
    transport: httpx.BaseTransport | None = None,
) -> GenerationBackend:
    """Build a backend instance from runtime config."""
    name = provider_cfg.name.lower().strip()
    builder = _BACKEND_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_backends())
        raise ValueError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    return builder(provider_cfg, api_key, log_cfg, llm_logger, transport)
