"""Article body handling: excerpt rule and prose/code segmentation."""

from __future__ import annotations

import re

from postkit.corpus.models import Block

# ```php   or   ~~~ javascript
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

# {% highlight php %} ... {% endhighlight %}
_LIQUID_OPEN_RE = re.compile(r"^\s*\{%-?\s*highlight\s+(?P<lang>[\w+#.-]+)[^%]*-?%\}\s*$")
_LIQUID_CLOSE_RE = re.compile(r"^\s*\{%-?\s*endhighlight\s*-?%\}\s*$")


def excerpt(body: str, separator: str | None) -> str:
    """Return the teaser: text before the first separator, or the whole body."""
    if not separator:
        return body
    idx = body.find(separator)
    if idx < 0:
        return body
    return body[:idx]


def count_separators(body: str, separator: str | None) -> int:
    if not separator:
        return 0
    return body.count(separator)


def parse_blocks(body: str, separator: str | None = None) -> list[Block]:
    """Split a body into prose paragraphs and code blocks, in order.

    Paragraphs end at blank lines. Code is either a Markdown fence (``` or
    ~~~, closed by the same character at least as long) or a Liquid
    highlight tag pair; an unterminated block runs to the end of the body.
    A line holding only the separator is dropped.
    """
    blocks: list[Block] = []
    paragraph: list[str] = []
    code: list[str] = []
    language: str | None = None
    closer: re.Pattern[str] | None = None

    def flush_paragraph() -> None:
        if paragraph:
            blocks.append(Block(kind="prose", text="\n".join(paragraph)))
            paragraph.clear()

    for line in body.splitlines():
        if closer is not None:
            if closer.match(line):
                blocks.append(Block(kind="code", text="\n".join(code), language=language))
                code.clear()
                closer = None
            else:
                code.append(line)
            continue

        fence = _FENCE_OPEN_RE.match(line)
        if fence and not (fence.group("fence")[0] == "`" and "`" in fence.group("info")):
            flush_paragraph()
            marker = fence.group("fence")
            closer = re.compile(rf"^ {{0,3}}{re.escape(marker[0])}{{{len(marker)},}}[ \t]*$")
            language = _language_from_info(fence.group("info"))
            continue

        liquid = _LIQUID_OPEN_RE.match(line)
        if liquid:
            flush_paragraph()
            closer = _LIQUID_CLOSE_RE
            language = liquid.group("lang")
            continue

        if not line.strip() or (separator and line.strip() == separator):
            flush_paragraph()
            continue

        paragraph.append(line)

    if closer is not None:
        blocks.append(Block(kind="code", text="\n".join(code), language=language))
    flush_paragraph()
    return blocks


def _language_from_info(info: str) -> str | None:
    words = info.strip().lstrip("{").lstrip(".").split()
    if not words:
        return None
    return words[0].rstrip("}") or None
