"""Prompt loading and rendering helpers for the rewrite backends."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from ..config import PromptConfig


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"

TYPE_LABELS: dict[str, str] = {
    "job": "Latest Job / Recruitment Notification",
    "admit_card": "Admit Card Release",
    "result": "Exam Result Declaration",
    "answer_key": "Answer Key Release",
    "syllabus": "Exam Syllabus & Pattern",
}

DEFAULT_STYLE = "conversational"

STYLE_INSTRUCTIONS: dict[str, str] = {
    "conversational": (
        'Bilkul conversational tone mein likhein jaise koi dost bata raha ho. '
        '"Doston", "Aap", "Suniye" jaise words use karein. Friendly aur warm tone ho.'
    ),
    "professional": (
        "Professional aur formal tone mein likhein, lekin boring na lage. "
        "Information clear aur structured ho."
    ),
    "youtube": (
        "Energetic YouTube style mein likhein - excitement ho, emojis zyada use karein, "
        '"Guys", "Finally", "Leaked" jaise words use karein. Thoda dramatic tone ho.'
    ),
    "blog": (
        "Detailed blog post style mein likhein - comprehensive information ho, har point "
        "cover karein, informative aur helpful tone ho."
    ),
}


@dataclass(frozen=True)
class PromptTemplate:
    """A prompt file plus the per-template bits that sit around it.

    Attributes:
        name: Template file stem under ``prompts/``
        fallback_label: Label used when the article type is unknown
        custom_prefix: Lead-in for the optional custom instructions line
        max_content_chars: Default clip for the article text, None for no clip
    """
    name: str
    fallback_label: str
    custom_prefix: str
    max_content_chars: int | None = None


TEMPLATES: dict[str, PromptTemplate] = {
    "rich": PromptTemplate(
        name="rich",
        fallback_label="Government Notification",
        custom_prefix="**CUSTOM INSTRUCTIONS:** ",
    ),
    "simple": PromptTemplate(
        name="simple",
        fallback_label="Notification",
        custom_prefix="7. Custom Format follow karein: ",
        max_content_chars=3000,
    ),
}


def available_templates() -> list[str]:
    return sorted(TEMPLATES.keys())


def get_template(name: str) -> PromptTemplate:
    template = TEMPLATES.get(name.lower().strip())
    if template is None:
        supported = ", ".join(available_templates())
        raise ValueError(f"Unsupported prompt template: {name}. Supported: {supported}")
    return template


def type_label(article_type: str | None, template: PromptTemplate) -> str:
    return TYPE_LABELS.get(article_type or "", template.fallback_label)


def style_instructions(style: str | None) -> str:
    return STYLE_INSTRUCTIONS.get(style or "", STYLE_INSTRUCTIONS[DEFAULT_STYLE])


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def build_rewrite_prompt(
    content: str,
    article_type: str | None,
    style: str | None,
    custom_instructions: str | None,
    cfg: PromptConfig,
) -> str:
    """Render the configured template for one article.

    The article text is passed through unchanged apart from the optional
    length clip.
    """
    template = get_template(cfg.template)
    limit = cfg.max_content_chars or template.max_content_chars
    trimmed = content[:limit] if limit else content
    custom_block = f"{template.custom_prefix}{custom_instructions}" if custom_instructions else ""

    return _load_template(template.name).format(
        content=trimmed,
        type_label=type_label(article_type, template),
        style_instructions=style_instructions(style),
        custom_block=custom_block,
    )
