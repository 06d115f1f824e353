"""Zep CLI — entry-point for the crawl job and its individual stages.

Usage:
    python cli/main.py --help

Commands:
    crawl     → full batch run (catalog → extract → discover → index)
    catalog   → parse and list the catalog
    extract   → fetch one URL and print what the extractor sees
    discover  → run the discovery pass over the catalog
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from zep.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from dataclasses import asdict
from typing import Optional

import typer

from zep.catalog import load_catalog
from zep.config import settings

app = typer.Typer(
    name="zep",
    help="Zep site index crawler.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", help="Directory holding the index, memory and vote files."
    ),
) -> None:
    """Configure logging and the data directory for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if data_dir is not None:
        settings.data_dir = data_dir


# ---------------------------------------------------------------------------
# Batch run
# ---------------------------------------------------------------------------
@app.command("crawl")
def crawl(
    catalog: Optional[str] = typer.Option(None, help="Catalog file path or URL."),
    limit: Optional[int] = typer.Option(None, help="Maximum discovered candidates."),
    delay: Optional[float] = typer.Option(None, help="Seconds to wait between fetches."),
    index_mode: Optional[str] = typer.Option(
        None, "--index-mode", help="Index contents: delta | full."
    ),
) -> None:
    """Crawl the catalog, discover new sites and rewrite the index."""
    from zep.orchestrator import INDEX_MODES, run_crawl

    if index_mode is not None and index_mode not in INDEX_MODES:
        typer.echo(f"[crawl] Unknown index mode {index_mode!r}. Use: delta | full")
        raise typer.Exit(1)
    if delay is not None:
        settings.politeness_delay = delay

    settings.ensure_data_dir()
    state = run_crawl(catalog_source=catalog, discovery_limit=limit, index_mode=index_mode)
    typer.echo(f"[crawl] Done: {state.summary()}")
    typer.echo(f"[crawl] Index written to {settings.index_path}")


# ---------------------------------------------------------------------------
# Individual stages
# ---------------------------------------------------------------------------
@app.command("catalog")
def catalog_cmd(
    catalog: Optional[str] = typer.Option(None, help="Catalog file path or URL."),
) -> None:
    """Parse the catalog and list its entries."""
    entries = load_catalog(catalog)
    if not entries:
        typer.echo("[catalog] No entries found.")
        return
    for entry in entries:
        typer.echo(f"  {entry.name}  {entry.url}")
    typer.echo(f"[catalog] {len(entries)} entries")


@app.command("extract")
def extract(
    url: str = typer.Option(..., help="URL to fetch and extract."),
) -> None:
    """Fetch a URL and print the extracted page as JSON."""
    from zep.scraper import extract_page

    typer.echo(f"[extract] Fetching {url!r} …")
    page = extract_page(url)
    if page is None:
        typer.echo(f"[extract] Could not fetch {url!r}.")
        raise typer.Exit(1)

    payload = asdict(page)
    payload["page_type"] = page.page_type.value
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("discover")
def discover_cmd(
    catalog: Optional[str] = typer.Option(None, help="Catalog file path or URL."),
    limit: Optional[int] = typer.Option(None, help="Maximum discovered candidates."),
) -> None:
    """Harvest candidate sites from the catalog pages without touching any files."""
    from zep.discovery import discover

    entries = load_catalog(catalog)
    candidates = discover(entries, limit)
    if not candidates:
        typer.echo("[discover] No candidates found.")
        return
    for candidate in candidates:
        typer.echo(f"  {candidate.name}  {candidate.url}")
    typer.echo(f"[discover] {len(candidates)} candidates")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
