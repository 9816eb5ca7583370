"""Command line interface for FileFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from filefinder.config import AppConfig
from filefinder.index.indexer import Indexer
from filefinder.index.search import SearchFilter, Searcher
from filefinder.index.stats import collect_stats
from filefinder.index.storage import SQLiteRecordStore, StoreError
from filefinder.utils.text import format_size
from filefinder.web.app import app as web_app


console = Console()
app = typer.Typer(help="FileFinder - index a directory tree and search it by name or content")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _ensure_db_parent(db_path: Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _resolve_db(db: Optional[Path]) -> Path:
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    return config.resolve_db_path(Path.cwd())


def _require_db(db: Optional[Path]) -> Path:
    resolved_db = _resolve_db(db)
    if not resolved_db.exists():
        raise typer.BadParameter(f"Database not found: {resolved_db}")
    return resolved_db


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


@app.command()
def index(
    root: Path = typer.Argument(..., help="Directory to index.", resolve_path=True),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Index every regular file under a directory."""
    _setup_logging(verbose)
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    resolved_db = config.resolve_db_path(Path.cwd())
    _ensure_db_parent(resolved_db)

    console.print(f"Indexing [bold]{root}[/bold] into [bold]{resolved_db}[/bold]...")
    try:
        with SQLiteRecordStore(resolved_db) as store:
            indexer = Indexer(store, progress_every=config.progress_every)
            with console.status("Indexing...") as status:
                stats = indexer.index(
                    root, progress=lambda count: status.update(f"Indexed {count} files")
                )
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    except StoreError as exc:
        _fail(exc)

    console.print(f"Indexed: {stats.indexed}, skipped: {stats.failed}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    content: bool = typer.Option(False, "--content", "-a", help="Search file contents too"),
    case_sensitive: bool = typer.Option(False, "--case-sensitive", "-c", help="Match case"),
    ext: List[str] = typer.Option([], "--ext", "-e", help="Restrict to extension (repeatable)"),
    min_size: int = typer.Option(0, help="Minimum file size in bytes"),
    max_size: Optional[int] = typer.Option(None, help="Maximum file size in bytes"),
    limit: int = typer.Option(AppConfig().default_limit, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search indexed files by name, or by content with --content."""
    _setup_logging(verbose)
    resolved_db = _require_db(db)

    search_filter = SearchFilter(
        query=query,
        search_content=content,
        case_sensitive=case_sensitive,
        extensions=frozenset(ext),
        min_size=min_size,
        max_size=max_size,
        limit=limit,
    )
    try:
        with SQLiteRecordStore(resolved_db) as store:
            results = Searcher(store).search(search_filter)
    except StoreError as exc:
        _fail(exc)

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Path")
    table.add_column("Size")
    if content:
        table.add_column("Preview")

    for result in results:
        row = [f"{result.score:.1f}", result.path, format_size(result.size)]
        if content:
            row.append(result.matched_content or "")
        table.add_row(*row)

    console.print(table)


@app.command()
def stats(
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show record counts and total indexed size."""
    _setup_logging(verbose)
    resolved_db = _require_db(db)
    try:
        with SQLiteRecordStore(resolved_db) as store:
            summary = collect_stats(store)
    except StoreError as exc:
        _fail(exc)

    console.print(f"Total files: [bold]{summary.total_files}[/bold]")
    console.print(f"Total size: [bold]{summary.total_size}[/bold]")

    if summary.extensions:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Extension")
        table.add_column("Files")
        for extension, count in summary.extensions.items():
            table.add_row(extension, str(count))
        console.print(table)


@app.command()
def vacuum(
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Flush pending writes and compact the database."""
    _setup_logging(verbose)
    resolved_db = _require_db(db)
    try:
        with SQLiteRecordStore(resolved_db) as store:
            store.vacuum()
    except StoreError as exc:
        _fail(exc)
    console.print("[green]Database optimized.[/green]")


@app.command()
def clear(
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Remove every record from the database."""
    _setup_logging(verbose)
    resolved_db = _resolve_db(db)
    if not resolved_db.exists():
        console.print("[yellow]Database not found, nothing to clear.[/yellow]")
        return

    if not yes:
        typer.confirm(f"Remove all records from {resolved_db}?", abort=True)

    try:
        with SQLiteRecordStore(resolved_db) as store:
            removed = store.clear()
    except StoreError as exc:
        _fail(exc)
    console.print(f"Removed {removed} records.")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
) -> None:
    """Start the web interface."""
    import uvicorn

    resolved_db = _resolve_db(db)
    web_app.state.db_path = resolved_db
    if not resolved_db.exists():
        console.print("[yellow]Warning: database not found, searches might fail.[/yellow]")

    console.print(
        f"Starting web interface on http://{host}:{port} (database: {resolved_db})"
    )
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
