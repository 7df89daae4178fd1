"""Corpus statistics utilities."""

from __future__ import annotations

from collections import Counter

from rich.console import Console
from rich.table import Table

from postkit.corpus.models import Article, CorpusStats
from postkit.corpus.store import ContentStore
from postkit.corpus.text import word_count


def find_duplicate_titles(articles: list[Article]) -> dict[str, list[str]]:
    """Titles carried by more than one identifier, mapped to those identifiers.

    Such documents stay distinct articles; this only reports them.
    """
    by_title: dict[str, list[str]] = {}
    for a in articles:
        by_title.setdefault(a.title.strip(), []).append(a.identifier)
    return {title: ids for title, ids in by_title.items() if len(ids) > 1}


def compute_stats(store: ContentStore) -> CorpusStats:
    """Compute summary statistics for the corpus."""
    articles = store.list_articles()

    if not articles:
        return CorpusStats()

    word_counts = [word_count(a) for a in articles]
    layouts = Counter(a.layout for a in articles)
    languages = Counter(lang for a in articles for lang in a.code_languages)
    with_separator = sum(
        1 for a in articles
        if store.separator_for(a) and store.separator_for(a) in a.body
    )

    # list_articles() is date-ordered
    date_range = (
        articles[0].publication_date.isoformat(),
        articles[-1].publication_date.isoformat(),
    )

    return CorpusStats(
        total_articles=len(articles),
        total_words=sum(word_counts),
        avg_words=sum(word_counts) / len(word_counts),
        min_words=min(word_counts),
        max_words=max(word_counts),
        layouts=dict(layouts.most_common()),
        languages=dict(languages.most_common()),
        date_range=date_range,
        with_separator=with_separator,
        duplicate_titles=find_duplicate_titles(articles),
    )


def print_stats(stats: CorpusStats, console: Console | None = None) -> None:
    """Pretty-print corpus statistics."""
    console = console or Console()

    table = Table(title="Corpus Statistics", show_header=False, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    table.add_row("Total articles", str(stats.total_articles))
    table.add_row("Total words", f"{stats.total_words:,}")
    table.add_row("Avg words/article", f"{stats.avg_words:.0f}")
    table.add_row("Min words", str(stats.min_words))
    table.add_row("Max words", str(stats.max_words))

    if stats.date_range:
        table.add_row("Date range", f"{stats.date_range[0]} → {stats.date_range[1]}")

    table.add_row("With excerpt separator", str(stats.with_separator))
    table.add_row("Duplicate titles", str(len(stats.duplicate_titles)))

    console.print(table)

    if stats.layouts:
        layout_table = Table(title="Layouts", show_header=True, padding=(0, 2))
        layout_table.add_column("Layout")
        layout_table.add_column("Articles", justify="right")

        for layout, count in stats.layouts.items():
            layout_table.add_row(layout, str(count))

        console.print(layout_table)

    if stats.languages:
        lang_table = Table(title="Code languages (top 20)", show_header=True, padding=(0, 2))
        lang_table.add_column("Language")
        lang_table.add_column("Blocks", justify="right")

        for lang, count in list(stats.languages.items())[:20]:
            lang_table.add_row(lang, str(count))

        console.print(lang_table)
