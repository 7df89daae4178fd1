"""Front matter envelope: split, parse and serialize article headers."""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from postkit.errors import DocumentError

# Jekyll post naming: 2019-03-14-some-slug
_IDENTIFIER_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


@lru_cache(maxsize=8)
def _envelope_re(delimiter: str) -> re.Pattern[str]:
    d = re.escape(delimiter)
    return re.compile(
        rf"\A{d}[ \t]*\r?\n(?P<header>.*?)^{d}[ \t]*(?:\r?\n|\Z)",
        re.MULTILINE | re.DOTALL,
    )


def split_document(
    text: str,
    delimiter: str = "---",
    *,
    path: Path | None = None,
) -> tuple[str, str]:
    """Split a document into its header text and its body.

    The header must open on the very first line and close on the next line
    holding only the delimiter. Everything after the closing line is the
    body, returned verbatim.

    Raises:
        DocumentError: if the header is missing or never closed.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    match = _envelope_re(delimiter).match(text)
    if match is not None:
        return match.group("header"), text[match.end():]

    first_line = text.split("\n", 1)[0].rstrip()
    if first_line != delimiter:
        raise DocumentError("missing front matter header", path)
    raise DocumentError("unterminated front matter header", path)


def parse_header(header_text: str, *, path: Path | None = None) -> dict[str, Any]:
    """Parse header text as a YAML mapping. An empty header is ``{}``."""
    try:
        data = yaml.safe_load(header_text)
    except yaml.YAMLError as e:
        raise DocumentError(f"invalid front matter: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentError(
            f"front matter must be a mapping, got {type(data).__name__}", path
        )
    return data


def dump_header(metadata: Mapping[str, Any], delimiter: str = "---") -> str:
    """Serialize metadata as a delimited header block, keys in given order."""
    dumped = ""
    if metadata:
        dumped = yaml.safe_dump(
            dict(metadata),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    return f"{delimiter}\n{dumped}{delimiter}\n"


def render_document(
    metadata: Mapping[str, Any],
    body: str,
    delimiter: str = "---",
) -> str:
    return dump_header(metadata, delimiter) + body


def parse_identifier(identifier: str) -> tuple[date, str]:
    """Decode ``YYYY-MM-DD-slug`` into its publication date and slug.

    Raises:
        ValueError: if the identifier has no date prefix, the date does not
            exist, or the slug is empty.
    """
    match = _IDENTIFIER_RE.match(identifier)
    if match is None:
        raise ValueError(f"identifier {identifier!r} is not YYYY-MM-DD-slug")
    year, month, day, slug = match.groups()
    return date(int(year), int(month), int(day)), slug


def make_identifier(published: date, slug: str) -> str:
    return f"{published.isoformat()}-{slug}"


def slugify(title: str) -> str:
    """Lower-case ASCII slug for a title: ``"Vue & Laravel!"`` -> ``vue-laravel``."""
    ascii_title = (
        unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_SLUG_RE.sub("-", ascii_title.lower()).strip("-")
    if not slug:
        raise ValueError(f"cannot derive a slug from title {title!r}")
    return slug
