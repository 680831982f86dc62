"""OPDB scraper command line.

Usage:
    python -m src.scraper --help
    python -m src.scraper pirate -o data
"""

from dataclasses import replace
from typing import Optional

import typer

from src.config.settings import load_settings
from src.scraper.domain.types import EntityFamily
from src.scraper.scrape import run_scrape

app = typer.Typer(name="opdb-scraper", help="One Piece wiki scraper.", add_completion=False)


@app.command()
def scrape(
    category: Optional[EntityFamily] = typer.Argument(None, help="Entity family to scrape; all when omitted."),
    output_dir: str = typer.Option("data", "--output-dir", "-o", help="Directory for the JSON output."),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--lenient", help="Fail a category crawl on any page error; defaults to SCRAPER_STRICT_CRAWL."
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", help="Concurrent secondary fetches (0 = unbounded)."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bars."),
) -> None:
    """Scrape the selected entity family and write it as JSON."""
    settings = load_settings()
    settings = replace(
        settings,
        strict_crawl=settings.strict_crawl if strict is None else strict,
        show_progress=progress and settings.show_progress,
        secondary_concurrency=settings.secondary_concurrency if concurrency is None else concurrency,
    )
    families = None if category is None else [category]
    summary = run_scrape(families=families, output_dir=output_dir, settings=settings)
    for name, count in summary.outputs.items():
        typer.echo(f"{name}: {count}")
    if summary.failed_total:
        typer.echo(f"{summary.failed_total} scrape job(s) failed, see logs.", err=True)
        raise typer.Exit(code=1)
