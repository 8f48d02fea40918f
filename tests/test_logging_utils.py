"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging

from article_rewriter.config import LoggingConfig
from article_rewriter.logging_utils import (
    JsonlFormatter,
    log_event,
    redact_text,
    setup_llm_logger,
    setup_logging,
    truncate_text,
)


def test_jsonl_formatter_includes_extra_fields():
    record = logging.LogRecord("article_rewriter.fetch", logging.INFO, __file__, 1, "Proxy failed", None, None)
    record.proxy = "corsproxy"
    record.status_code = 503

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "Proxy failed"
    assert payload["level"] == "INFO"
    assert payload["proxy"] == "corsproxy"
    assert payload["status_code"] == 503
    assert "lineno" not in payload


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(console=False, file=True, filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    log_event(logging.getLogger("article_rewriter.runner"), "Rewrite complete", original_length=42)
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["message"] == "Rewrite complete"
    assert record["original_length"] == 42


def test_setup_llm_logger_disabled_or_without_dir():
    assert setup_llm_logger(LoggingConfig(llm_log_enabled=False)) is None
    assert setup_llm_logger(LoggingConfig(llm_log_enabled=True, log_dir=None)) is None


def test_setup_llm_logger_uses_log_dir(tmp_path):
    cfg = LoggingConfig(llm_log_enabled=True, log_dir=str(tmp_path))
    logger = setup_llm_logger(cfg)

    assert logger is not None
    log_event(logger, "LLM response", status="ok")
    for handler in logger.handlers:
        handler.flush()
    assert json.loads((tmp_path / "llm.jsonl").read_text(encoding="utf-8"))["status"] == "ok"


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing", field=1)


def test_redaction_modes():
    text = "See https://example.com/job now"
    assert redact_text(text, "none") == text
    assert redact_text(text, "redact_content") == ""
    assert redact_text(text, "redact_urls") == "See [REDACTED_URL] now"


def test_truncate_text_marks_cut():
    assert truncate_text("abc", 5) == "abc"
    assert truncate_text("abcdef", 3) == "abc...(truncated)"
