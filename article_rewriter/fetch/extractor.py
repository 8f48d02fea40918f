"""
Best-effort HTML to plain text conversion.

This is a deliberately simple regex transform, not an HTML parser. Only five
entities are decoded; anything else (``&#39;``, ``&hellip;`` ...) is left as-is.
"""

from __future__ import annotations

import re

from ..core.types import ExtractedArticle


_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")

_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def extract_text(html: str) -> str:
    """Strip markup from ``html`` and return readable text.

    Script and style blocks are removed before other tags so their bodies
    never leak into the output. Tags become spaces to keep words from
    adjacent elements apart.
    """
    text = _SCRIPT_RE.sub(" ", html)
    text = _STYLE_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    text = _WS_RE.sub(" ", text)
    return text.strip()


def truncate_text(text: str, max_chars: int) -> ExtractedArticle:
    if len(text) <= max_chars:
        return ExtractedArticle(text=text)
    return ExtractedArticle(text=text[:max_chars], truncated=True)
