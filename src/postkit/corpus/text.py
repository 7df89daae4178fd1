"""Markdown/HTML prose → plain text, for previews and word counts."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Comment

from postkit.corpus.models import Article

# ![alt](src) and [text](href), keep the visible text
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")

# Reference-style links: [text][ref]
_REF_LINK_RE = re.compile(r"\[([^\]]+)\]\[[^\]]*\]")

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE)
_QUOTE_RE = re.compile(r"^\s*>\s?", re.MULTILINE)
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+", re.MULTILINE)
_EMPHASIS_RE = re.compile(r"(\*\*|\*)(\S(?:.*?\S)?)\1")
_UNDERSCORE_EMPHASIS_RE = re.compile(r"(?<!\w)(__|_)(\S(?:.*?\S)?)\1(?!\w)")  # not snake_case
_INLINE_CODE_RE = re.compile(r"`([^`]*)`")
_LIQUID_RE = re.compile(r"\{%.*?%\}|\{\{.*?\}\}", re.DOTALL)

_WHITESPACE_RE = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """Convert Markdown/HTML prose to a single run of plain text.

    Drops HTML tags, comments and Liquid tags; reduces links and images to
    their text; removes heading, quote, list and emphasis markers.
    """
    if not text or not text.strip():
        return ""

    text = _LIQUID_RE.sub(" ", text)

    if "<" in text:
        soup = BeautifulSoup(text, "lxml")
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()
        for tag in soup.find_all(["script", "style"]):
            tag.decompose()
        text = soup.get_text(" ")

    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _REF_LINK_RE.sub(r"\1", text)
    text = _HEADING_RE.sub("", text)
    text = _QUOTE_RE.sub("", text)
    text = _LIST_MARKER_RE.sub("", text)
    text = _INLINE_CODE_RE.sub(r"\1", text)
    text = _EMPHASIS_RE.sub(r"\2", text)
    text = _UNDERSCORE_EMPHASIS_RE.sub(r"\2", text)

    return _WHITESPACE_RE.sub(" ", text).strip()


def word_count(article: Article) -> int:
    """Count words in the article's prose; code samples are not counted."""
    prose = "\n\n".join(b.text for b in article.blocks if b.kind == "prose")
    return len(strip_markup(prose).split())


def preview(text: str, limit: int = 160) -> str:
    """One-line plain-text teaser, cut on a word boundary."""
    plain = strip_markup(text)
    if len(plain) <= limit:
        return plain
    cut = plain[:limit].rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"
