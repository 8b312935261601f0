"""Command line interface for docnav."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from docnav.config import AppConfig
from docnav.errors import DocumentNotFoundError, IndexBuildError
from docnav.index.indexer import DocumentIndexer
from docnav.index.search import Searcher, SearchResult


console = Console()
app = typer.Typer(help="docnav - keyword and relationship search for markdown docs")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_indexer(docs: Optional[Path]) -> DocumentIndexer:
    config = AppConfig(docs_path=docs)
    resolved = config.resolve_docs_path(Path.cwd())
    indexer = DocumentIndexer(resolved, config)
    try:
        indexer.build_index()
    except IndexBuildError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    return indexer


def _results_table(results: List[SearchResult], *, with_excerpt: bool) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Document")
    table.add_column("Category")
    table.add_column("Tags")
    if with_excerpt:
        table.add_column("Snippet")

    for result in results:
        row = [
            f"{result.relevance:.4f}",
            f"{result.title}\n[dim]{result.path}[/dim]",
            result.category,
            ", ".join(result.tags),
        ]
        if with_excerpt:
            row.append((result.excerpt or "").replace("\n", " ")[:180])
        table.add_row(*row)
    return table


DocsOption = typer.Option(None, "--docs", help="Documentation root (defaults to $DOCS_PATH)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


@app.command()
def build(docs: Path = DocsOption, verbose: bool = VerboseOption) -> None:
    """Build the index once and report what was loaded."""
    _setup_logging(verbose)
    config = AppConfig(docs_path=docs)
    resolved = config.resolve_docs_path(Path.cwd())
    indexer = DocumentIndexer(resolved, config)

    console.print(f"Indexing [bold]{resolved}[/bold]...")
    try:
        stats = indexer.build_index()
    except IndexBuildError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(
        f"Loaded: {stats.loaded}, failed: {stats.failed}, "
        f"categories: {len(indexer.get_categories())}, tags: {len(indexer.get_tags())}"
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    category: Optional[str] = typer.Option(None, help="Only documents in this category"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Required tag (repeatable)"),
    limit: int = typer.Option(10, help="Number of results to display"),
    docs: Path = DocsOption,
    verbose: bool = VerboseOption,
) -> None:
    """Execute a relevance search."""
    _setup_logging(verbose)
    if not query.strip():
        raise typer.BadParameter("Query must not be empty")

    indexer = _load_indexer(docs)
    results = Searcher(indexer).search(query, category=category, tags=tag or None, limit=limit)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    console.print(_results_table(results, with_excerpt=True))


@app.command()
def show(
    path: str = typer.Argument(..., help="Document path relative to the docs root"),
    docs: Path = DocsOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print a document with its metadata."""
    _setup_logging(verbose)
    indexer = _load_indexer(docs)
    document = indexer.get_document(path)
    if document is None:
        console.print(f"[red]Document not found: {path}[/red]")
        raise typer.Exit(code=1)

    meta = document.metadata
    console.print(f"[bold]{meta.title}[/bold] ({document.path})")
    console.print(f"Category: {meta.category}")
    console.print(f"Tags: {', '.join(meta.tags) or '-'}")
    if meta.related:
        console.print(f"Related: {', '.join(meta.related)}")
    if meta.summary:
        console.print(f"[italic]{meta.summary}[/italic]")
    console.print()
    console.print(document.content, markup=False, highlight=False)


@app.command()
def related(
    path: str = typer.Argument(..., help="Document path relative to the docs root"),
    limit: int = typer.Option(10, help="Number of related documents"),
    docs: Path = DocsOption,
    verbose: bool = VerboseOption,
) -> None:
    """List documents related to PATH."""
    _setup_logging(verbose)
    indexer = _load_indexer(docs)
    try:
        results = Searcher(indexer).related(path, limit=limit)
    except DocumentNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[yellow]No related documents.[/yellow]")
        return
    console.print(_results_table(results, with_excerpt=False))


@app.command()
def categories(docs: Path = DocsOption, verbose: bool = VerboseOption) -> None:
    """List all categories."""
    _setup_logging(verbose)
    for name in _load_indexer(docs).get_categories():
        console.print(name)


@app.command()
def tags(docs: Path = DocsOption, verbose: bool = VerboseOption) -> None:
    """List all tags."""
    _setup_logging(verbose)
    for name in _load_indexer(docs).get_tags():
        console.print(name)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    docs: Path = DocsOption,
) -> None:
    """Start the web API."""
    import uvicorn

    from docnav.web.app import app as web_app, configure

    config = AppConfig(docs_path=docs)
    resolved = config.resolve_docs_path(Path.cwd())
    if not resolved.is_dir():
        console.print("[yellow]Warning: documentation directory not found, searches will fail.[/yellow]")
    configure(resolved)

    console.print(f"Starting web interface on http://{host}:{port} (docs: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


@app.command()
def serve(docs: Path = DocsOption, verbose: bool = VerboseOption) -> None:
    """Run the MCP tool server on stdio."""
    from docnav.server.mcp_server import run_stdio

    config = AppConfig(docs_path=docs)
    run_stdio(config.resolve_docs_path(Path.cwd()), verbose=verbose)
