"""Tests for prompt template rendering."""

from __future__ import annotations

import pytest

from article_rewriter.config import PromptConfig
from article_rewriter.llm.prompts import (
    STYLE_INSTRUCTIONS,
    available_templates,
    build_rewrite_prompt,
)


def test_known_type_uses_its_label():
    prompt = build_rewrite_prompt("Body", "job", None, None, PromptConfig())
    assert "**ARTICLE TYPE:** Latest Job / Recruitment Notification" in prompt


def test_unknown_type_falls_back_to_generic_label():
    rich = build_rewrite_prompt("Body", "other", None, None, PromptConfig())
    simple = build_rewrite_prompt("Body", "mystery", None, None, PromptConfig(template="simple"))

    assert "**ARTICLE TYPE:** Government Notification" in rich
    assert "Article Type: Notification" in simple


def test_style_instructions_and_default_style():
    youtube = build_rewrite_prompt("Body", "result", "youtube", None, PromptConfig())
    unknown = build_rewrite_prompt("Body", "result", "poetic", None, PromptConfig())
    missing = build_rewrite_prompt("Body", "result", None, None, PromptConfig())

    assert STYLE_INSTRUCTIONS["youtube"] in youtube
    assert STYLE_INSTRUCTIONS["conversational"] in unknown
    assert STYLE_INSTRUCTIONS["conversational"] in missing


def test_custom_instructions_block_only_when_given():
    with_custom = build_rewrite_prompt("Body", "job", None, "Add a FAQ", PromptConfig())
    without = build_rewrite_prompt("Body", "job", None, None, PromptConfig())

    assert "**CUSTOM INSTRUCTIONS:** Add a FAQ" in with_custom
    assert "CUSTOM INSTRUCTIONS" not in without


def test_content_passes_through_including_braces():
    content = "Fees {general: 100} & dates"
    prompt = build_rewrite_prompt(content, "job", None, None, PromptConfig())
    assert f"**ORIGINAL CONTENT:**\n{content}" in prompt


def test_simple_template_clips_content_and_numbers_custom_format():
    prompt = build_rewrite_prompt("a" * 4000, "syllabus", None, "Use tables", PromptConfig(template="simple"))

    assert "a" * 3000 in prompt
    assert "a" * 3001 not in prompt
    assert "7. Custom Format follow karein: Use tables" in prompt


def test_configured_clip_overrides_template_default():
    prompt = build_rewrite_prompt("b" * 100, "job", None, None, PromptConfig(max_content_chars=10))
    assert "b" * 10 in prompt
    assert "b" * 11 not in prompt


def test_unknown_template_is_rejected():
    assert available_templates() == ["rich", "simple"]
    with pytest.raises(ValueError, match="Unsupported prompt template"):
        build_rewrite_prompt("Body", "job", None, None, PromptConfig(template="fancy"))
