"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProviderConfig: Generation backend settings
- FetchConfig: Proxy fetching settings and the ordered proxy list
- PromptConfig: Prompt template selection
- LoggingConfig: Logging behavior
- ServerConfig: HTTP server settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ProxyConfig:
    """A single CORS proxy in the fallback list.

    Attributes:
        name: Short label used in logs
        url_template: Proxy URL with a ``{url}`` placeholder for the encoded target
        response_format: "json" when the body is an envelope, "raw" when the body is the page
        json_field: Envelope field holding the page when response_format is "json"
    """

    name: str
    url_template: str
    response_format: str = "raw"
    json_field: str = "contents"


def _default_proxies() -> list[ProxyConfig]:
    return [
        ProxyConfig(
            name="allorigins",
            url_template="https://api.allorigins.win/get?url={url}",
            response_format="json",
        ),
        ProxyConfig(name="corsproxy", url_template="https://corsproxy.io/?{url}"),
        ProxyConfig(name="codetabs", url_template="https://api.codetabs.com/v1/proxy?quest={url}"),
    ]


@dataclass
class FetchConfig:
    """Configuration for proxy-based content fetching.

    Attributes:
        timeout_seconds: Per-proxy request timeout
        user_agent: HTTP User-Agent header string
        min_length: Responses shorter than this are treated as proxy error pages
        max_chars: Ceiling applied to extracted article text
        trust_env: Whether to respect system proxy settings
        proxies: Ordered proxy list, tried one at a time
    """

    timeout_seconds: float = 15.0
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    min_length: int = 100
    max_chars: int = 5000
    trust_env: bool = True
    proxies: list[ProxyConfig] = field(default_factory=_default_proxies)


@dataclass
class ProviderConfig:
    """Configuration for the generation backend.

    Attributes:
        name: Backend name ("gemini" or "openai")
        model: Model identifier
        api_key_env: Environment variable name containing the API key
        api_key: Optional inline API key (overrides env var)
        base_url: Base URL for the backend API
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Request timeout for the generation call
        temperature: Sampling temperature
        top_p: Nucleus-sampling threshold
        max_output_tokens: Maximum length of the generated text
    """

    name: str = "gemini"
    model: str = "gemini-pro"
    api_key_env: str = "GEMINI_API_KEY"
    api_key: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com"
    trust_env: bool = True
    timeout_seconds: float = 60.0
    temperature: float = 0.8
    top_p: float = 0.95
    max_output_tokens: int = 2500


@dataclass
class PromptConfig:
    """Configuration for prompt assembly.

    Attributes:
        template: Prompt template name ("rich" or "simple")
        max_content_chars: Optional clip applied to the article text inside the prompt
    """

    template: str = "rich"
    max_content_chars: int | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file (requires log_dir)
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        log_dir: Directory for log files, None disables file logging
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "rewriter.jsonl"
    log_dir: str | None = None
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls"
    llm_log_file: str = "llm.jsonl"


@dataclass
class ServerConfig:
    """Configuration for the HTTP server.

    Attributes:
        host: Bind address for ``serve``
        port: Bind port for ``serve``
        cors: Whether to attach permissive CORS headers and answer preflights
    """

    host: str = "127.0.0.1"
    port: int = 8000
    cors: bool = True


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    fetch = dict(data["fetch"])
    fetch["proxies"] = [ProxyConfig(**proxy) for proxy in fetch.get("proxies") or []]
    return AppConfig(
        provider=ProviderConfig(**data["provider"]),
        fetch=FetchConfig(**fetch),
        prompt=PromptConfig(**data["prompt"]),
        logging=LoggingConfig(**data["logging"]),
        server=ServerConfig(**data["server"]),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
