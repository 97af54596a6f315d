"""
Command-line interface for sitefeed.

Uses Typer to render an RSS or Atom feed from a list of page files. Pages
are used in the order given, which must be most recent first; pass
``--reverse`` when the shell hands them over oldest first.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import AppConfig, load_config
from .core.renderable import create_page
from .errors import SiteFeedError
from .feed import render_atom, render_rss
from .site import Site

app = typer.Typer(add_completion=False)
console = Console()


def _build(
    pages: list[Path],
    config: Path | None,
    output: Path | None,
    log_level: str | None,
    reverse: bool,
) -> tuple[AppConfig, Site, list]:
    cfg = load_config(str(config) if config else None)
    if output is not None:
        cfg.site.destination = str(output)
    if log_level:
        cfg.logging.level = log_level
    site = Site.from_config(cfg)
    ordered = list(reversed(pages)) if reverse else list(pages)
    return cfg, site, [create_page(page) for page in ordered]


@app.command()
def rss(
    pages: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    reverse: bool = typer.Option(False, "--reverse", help="Treat the last page as the most recent."),
):
    """Render an RSS feed from page files, most recent first."""
    cfg, site, items = _build(pages, config, output, log_level, reverse)
    try:
        path = render_rss(site, cfg.feed, items)
    except SiteFeedError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Feed written: {path}")


@app.command()
def atom(
    pages: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    reverse: bool = typer.Option(False, "--reverse", help="Treat the last page as the most recent."),
):
    """Render an Atom feed from page files, most recent first."""
    cfg, site, items = _build(pages, config, output, log_level, reverse)
    try:
        path = render_atom(site, cfg.feed, items)
    except SiteFeedError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Feed written: {path}")


if __name__ == "__main__":
    app()
