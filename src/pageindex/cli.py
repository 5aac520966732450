"""Command line interface for pageindex."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from pageindex.config import AppConfig
from pageindex.errors import ConfigError
from pageindex.index.builder import build_document
from pageindex.index.indexer import run_indexing
from pageindex.ingestion.html_loader import extract_fields
from pageindex.utils.text import word_frequencies


console = Console()
app = typer.Typer(help="pageindex - publish a local web page snapshot to a search index")

_DEFAULTS = AppConfig()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@app.command()
def index(
    corpus_dir: Path = typer.Option(
        _DEFAULTS.corpus_dir, "--corpus-dir", envvar="PAGEINDEX_CORPUS_DIR", help="Root of the page snapshot"
    ),
    url_map: str = typer.Option(
        _DEFAULTS.url_map_file,
        "--url-map",
        envvar="PAGEINDEX_URL_MAP",
        help="JSON url map, relative to the corpus root",
    ),
    index_url: str = typer.Option(
        _DEFAULTS.index_url, "--index-url", envvar="PAGEINDEX_INDEX_URL", help="Search backend base URL"
    ),
    index_name: str = typer.Option(
        _DEFAULTS.index_name, "--index-name", envvar="PAGEINDEX_INDEX_NAME", help="Target index"
    ),
    run_index: bool = typer.Option(
        _DEFAULTS.run_index,
        "--run-index/--skip-index",
        envvar="PAGEINDEX_RUN_INDEX",
        help="Set to false to skip indexing entirely",
    ),
    throttle_ms: int = typer.Option(
        int(_DEFAULTS.throttle_seconds * 1000), "--throttle-ms", help="Delay between writes in milliseconds"
    ),
    workers: int = typer.Option(_DEFAULTS.workers, "--workers", help="Pages processed in parallel"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Walk the corpus and publish one document per page."""
    _setup_logging(verbose)
    config = AppConfig(
        run_index=run_index,
        corpus_dir=corpus_dir,
        url_map_file=url_map,
        index_url=index_url,
        index_name=index_name,
        throttle_seconds=max(throttle_ms, 0) / 1000,
        workers=workers,
    )

    if config.run_index:
        console.print(f"Indexing [bold]{config.corpus_dir}[/bold] into {config.index_url}/{config.index_name}...")
    try:
        stats = run_indexing(config)
    except ConfigError as exc:
        console.print(f"[red]Could not load url map:[/red] {exc}")
        raise typer.Exit(code=1)

    if stats is None:
        console.print("[yellow]Indexing disabled, nothing to do.[/yellow]")
        return

    console.print(
        f"Published: {stats.published}, skipped: {stats.skipped}, failed: {stats.failed}"
    )


@app.command()
def inspect(
    page: Path = typer.Argument(..., help="HTML file to extract", exists=True, dir_okay=False),
    top_k: int = typer.Option(20, help="Number of tokens to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the tokens a page would be indexed with, without publishing."""
    _setup_logging(verbose)
    result = extract_fields(page)
    if not result.ok:
        console.print(f"[yellow]Page would be skipped: {result.skip_reason.value}[/yellow]")
        return

    document = build_document(result.fields, {}, page.parent.name, page.name)
    console.print(f"Title: {' '.join(document.title)}")
    console.print(f"Tokens: {len(document.tokens)}")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Token")
    table.add_column("Count")
    for token, count in word_frequencies(document.tokens).most_common(top_k):
        table.add_row(token, str(count))

    console.print(table)
