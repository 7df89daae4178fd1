"""Pydantic models for corpus data."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


class Block(BaseModel):
    """A prose paragraph or a code sample from an article body."""

    kind: Literal["prose", "code"]
    text: str
    language: str | None = None  # highlight hint, code blocks only


class Article(BaseModel):
    """A single blog article."""

    identifier: str
    slug: str
    publication_date: date
    title: str
    layout: str = "post"
    metadata: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
    excerpt_separator: str | None = None
    source_path: Path | None = None

    @property
    def blocks(self) -> list[Block]:
        from postkit.corpus.body import parse_blocks

        return parse_blocks(self.body, self.excerpt_separator)

    @property
    def code_languages(self) -> list[str]:
        return [b.language for b in self.blocks if b.kind == "code" and b.language]


class CorpusStats(BaseModel):
    """Summary statistics for the corpus."""

    total_articles: int = 0
    total_words: int = 0
    avg_words: float = 0.0
    min_words: int = 0
    max_words: int = 0
    layouts: dict[str, int] = Field(default_factory=dict)
    languages: dict[str, int] = Field(default_factory=dict)
    date_range: tuple[str, str] | None = None
    with_separator: int = 0
    duplicate_titles: dict[str, list[str]] = Field(default_factory=dict)
