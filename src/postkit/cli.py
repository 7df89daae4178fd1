"""Click CLI — list, show, stats, duplicates, check, new commands."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from postkit.config import Settings, get_settings
from postkit.errors import PostkitError
from postkit.logging_utils import setup_logging

console = Console()


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option(
    "--content-dir", "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the posts (default: _posts)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, content_dir: Path | None) -> None:
    """postkit — inspect and author a directory of blog posts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["overrides"] = {"content_dir": content_dir} if content_dir else {}
    setup_logging(verbose)


def _settings(ctx: click.Context) -> Settings:
    return get_settings(**ctx.obj.get("overrides", {}))


def _fail(error: PostkitError) -> None:
    console.print(f"[red]{escape(str(error))}[/red]", soft_wrap=True)
    raise SystemExit(1)


# ── Listing ───────────────────────────────────────────────────


@cli.command("list")
@click.option("--limit", "-n", type=int, default=None, help="Show only the N newest articles")
@click.option("--excerpts", "-e", is_flag=True, help="Show a teaser for each article")
@click.pass_context
def list_cmd(ctx: click.Context, limit: int | None, excerpts: bool) -> None:
    """List articles by publication date."""
    from postkit.corpus.store import ContentStore
    from postkit.corpus.text import preview

    settings = _settings(ctx)
    store = ContentStore(settings)
    articles = store.list_articles()

    if not articles:
        console.print("[yellow]No articles found.[/yellow]")
        return

    if limit is not None:
        articles = articles[-limit:] if limit > 0 else []

    table = Table(title=f"Articles ({len(articles)})")
    table.add_column("Date")
    table.add_column("Identifier")
    table.add_column("Title")
    if excerpts:
        table.add_column("Excerpt")

    for a in articles:
        row = [a.publication_date.isoformat(), escape(a.identifier), escape(a.title)]
        if excerpts:
            row.append(escape(preview(store.excerpt(a), settings.preview_chars)))
        table.add_row(*row)

    console.print(table)


@cli.command()
@click.argument("identifier")
@click.option("--excerpt", "excerpt_only", is_flag=True, help="Show only the teaser")
@click.pass_context
def show(ctx: click.Context, identifier: str, excerpt_only: bool) -> None:
    """Show a specific article by identifier (YYYY-MM-DD-slug)."""
    from postkit.corpus.store import ContentStore

    store = ContentStore(_settings(ctx))
    try:
        article = store.get_article(identifier)
    except PostkitError as e:
        _fail(e)
        return

    console.print(f"[bold]{escape(article.title)}[/bold]")
    console.print(
        f"[dim]ID: {escape(article.identifier)} | "
        f"Published: {article.publication_date.isoformat()} | "
        f"Layout: {escape(article.layout)}[/dim]"
    )
    console.print()
    text = store.excerpt(article) if excerpt_only else article.body
    console.print(text, markup=False, highlight=False)


# ── Corpus ────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show corpus statistics."""
    from postkit.corpus.stats import compute_stats, print_stats
    from postkit.corpus.store import ContentStore

    s = compute_stats(ContentStore(_settings(ctx)))
    if s.total_articles == 0:
        console.print("[yellow]Corpus is empty.[/yellow]")
        return
    print_stats(s, console)


@cli.command()
@click.pass_context
def duplicates(ctx: click.Context) -> None:
    """List titles shared by more than one article."""
    from postkit.corpus.stats import find_duplicate_titles
    from postkit.corpus.store import ContentStore

    dups = find_duplicate_titles(ContentStore(_settings(ctx)).list_articles())
    if not dups:
        console.print("[green]No duplicate titles.[/green]")
        return

    table = Table(title=f"Duplicate titles ({len(dups)})")
    table.add_column("Title")
    table.add_column("Identifiers")
    for title, ids in dups.items():
        table.add_row(escape(title), escape("\n".join(ids)))
    console.print(table)


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate every document; exit 1 if any is malformed."""
    from postkit.corpus.store import ContentStore

    problems = ContentStore(_settings(ctx)).check()
    if not problems:
        console.print("[green]All documents OK.[/green]")
        return

    for problem in problems:
        console.print(f"[red]✗[/red] {escape(str(problem))}", soft_wrap=True)
    console.print(f"[red]{len(problems)} problem(s) found.[/red]")
    raise SystemExit(1)


# ── Authoring ─────────────────────────────────────────────────


@cli.command()
@click.argument("title")
@click.option(
    "--date", "published",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Publication date (default: today)",
)
@click.option("--layout", type=str, default=None, help="Layout tag (default: post)")
@click.option("--slug", type=str, default=None, help="Slug (default: derived from title)")
@click.pass_context
def new(
    ctx: click.Context,
    title: str,
    published: datetime | None,
    layout: str | None,
    slug: str | None,
) -> None:
    """Create a new article document."""
    from postkit.corpus.store import ContentStore

    store = ContentStore(_settings(ctx))
    try:
        article = store.create_article(
            title,
            published=published.date() if published else None,
            layout=layout,
            slug=slug,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--slug" if slug else "TITLE") from e
    except PostkitError as e:
        _fail(e)
        return

    console.print(f"[green]Created {escape(str(article.source_path))}[/green]", soft_wrap=True)
