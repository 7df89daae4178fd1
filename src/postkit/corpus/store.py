"""Filesystem-backed content store: one Markdown document per article."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Mapping

from postkit.config import Settings
from postkit.corpus.body import count_separators, excerpt
from postkit.corpus.frontmatter import (
    make_identifier,
    parse_header,
    parse_identifier,
    render_document,
    slugify,
    split_document,
)
from postkit.corpus.models import Article
from postkit.errors import DocumentError, NotFound

logger = logging.getLogger(__name__)


class ContentStore:
    """Read-only view over a directory of article documents.

    Nothing is cached: every call reads the documents from disk again.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.root = settings.content_dir

    # ── Lookup ────────────────────────────────────────────────

    def list_articles(self) -> list[Article]:
        """All readable articles ordered by publication date, then identifier.

        Malformed documents are logged and skipped.
        """
        articles: list[Article] = []
        for identifier, path in self._documents().items():
            try:
                articles.append(self._load(identifier, path))
            except DocumentError as e:
                logger.warning("Skipping %s", e)
        articles.sort(key=lambda a: (a.publication_date, a.identifier))
        return articles

    def get_article(self, identifier: str) -> Article:
        """Load one article by exact identifier.

        Raises:
            NotFound: no document carries this identifier.
            DocumentError: the document exists but is malformed.
        """
        path = self._documents().get(identifier)
        if path is None:
            raise NotFound(identifier)
        return self._load(identifier, path)

    def excerpt(self, article: Article) -> str:
        """Teaser text of an article, per its own or the configured separator."""
        return excerpt(article.body, self.separator_for(article))

    def separator_for(self, article: Article) -> str | None:
        return self._separator(article.metadata)

    def _separator(self, metadata: Mapping[str, Any]) -> str | None:
        separator = metadata.get("excerpt_separator", self.settings.excerpt_separator)
        return str(separator) if separator else None

    # ── Validation ────────────────────────────────────────────

    def check(self) -> list[DocumentError]:
        """Scan every document and collect the problems found."""
        problems: list[DocumentError] = []
        seen: dict[str, Path] = {}

        for path in self._candidate_paths():
            identifier = path.stem
            if identifier in seen:
                problems.append(
                    DocumentError(f"duplicate identifier, also in {seen[identifier].name}", path)
                )
                continue
            seen[identifier] = path

            try:
                article = self._load(identifier, path)
            except DocumentError as e:
                problems.append(e)
                continue

            n = count_separators(article.body, self.separator_for(article))
            if n > 1:
                problems.append(
                    DocumentError(f"excerpt separator occurs {n} times, expected at most once", path)
                )
        return problems

    # ── Authoring ─────────────────────────────────────────────

    def create_article(
        self,
        title: str,
        *,
        published: date | None = None,
        layout: str | None = None,
        body: str = "",
        slug: str | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> Article:
        """Write a new document and return it as loaded from disk.

        Raises:
            DocumentError: a document with the same identifier already exists.
            ValueError: the slug is not a lower-case ASCII slug.
        """
        published = published or date.today()
        if slug is None:
            slug = slugify(title)
        elif slugify(slug) != slug:
            raise ValueError(f"slug {slug!r} must be lower-case words joined by '-'")
        identifier = make_identifier(published, slug)

        existing = self._documents().get(identifier)
        if existing is not None:
            raise DocumentError("article already exists", existing)

        metadata: dict[str, Any] = {
            "layout": layout or self.settings.default_layout,
            "title": title,
        }
        if extra:
            metadata.update(extra)

        self.settings.ensure_content_dir()
        path = self.root / f"{identifier}{self.settings.extensions[0]}"
        text = render_document(metadata, body, self.settings.front_matter_delimiter)
        path.write_text(text, encoding="utf-8")
        logger.info("Created %s", path)
        return self._load(identifier, path)

    # ── Internals ─────────────────────────────────────────────

    def _candidate_paths(self) -> list[Path]:
        if not self.root.is_dir():
            return []

        # Extension order decides which file wins an identifier clash
        rank = {ext: i for i, ext in enumerate(self.settings.extensions)}
        paths: list[Path] = []
        for path in self.root.iterdir():
            if not path.is_file() or path.suffix not in rank:
                continue
            try:
                parse_identifier(path.stem)
            except ValueError:
                logger.debug("Ignoring %s: not a dated post", path.name)
                continue
            paths.append(path)
        return sorted(paths, key=lambda p: (p.stem, rank[p.suffix]))

    def _documents(self) -> dict[str, Path]:
        documents: dict[str, Path] = {}
        for path in self._candidate_paths():
            if path.stem in documents:
                logger.warning(
                    "Duplicate identifier %s: using %s, ignoring %s",
                    path.stem, documents[path.stem].name, path.name,
                )
                continue
            documents[path.stem] = path
        return documents

    def _load(self, identifier: str, path: Path) -> Article:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentError(f"not valid UTF-8: {e}", path) from e
        except OSError as e:
            raise DocumentError(f"cannot read: {e}", path) from e

        header_text, body = split_document(
            text, self.settings.front_matter_delimiter, path=path
        )
        metadata = parse_header(header_text, path=path)

        title = metadata.get("title")
        if title is None or str(title).strip() == "":
            raise DocumentError("front matter has no title", path)
        if isinstance(title, bool):
            # YAML 1.1 reads unquoted yes/no/on/off as booleans
            raise DocumentError(f"title parsed as boolean {title}, quote it", path)

        published, slug = parse_identifier(identifier)
        return Article(
            identifier=identifier,
            slug=slug,
            publication_date=published,
            title=str(title),
            layout=str(metadata.get("layout") or self.settings.default_layout),
            metadata=metadata,
            body=body,
            excerpt_separator=self._separator(metadata),
            source_path=path,
        )
