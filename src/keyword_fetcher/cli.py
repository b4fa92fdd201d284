import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

import httpx
import typer  # type: ignore
from rich.console import Console  # type: ignore
from rich.table import Table  # type: ignore

from keyword_fetcher.config import Settings
from keyword_fetcher.engine import PRIMARY_SLOTS, OrchestrationEngine
from keyword_fetcher.meaningful import is_meaningful
from keyword_fetcher.providers import build_registry, get_fetcher
from keyword_fetcher.render import render_results_html
from keyword_fetcher.runner import Runner, RunSummary
from keyword_fetcher.store import (
    FileKeywordSource,
    FirebaseKeywordSource,
    FirebaseResultStore,
    KeywordSource,
    initialize_firebase,
)

app = typer.Typer(help="Fetch and store provider results for a list of keywords")
console = Console()


def _load_settings(*, require_firebase: bool = True) -> Settings:
    try:
        settings = Settings.from_env(require_firebase=require_firebase)
    except (RuntimeError, ValueError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(code=1) from e

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return settings


def _http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": settings.fetch_user_agent},
        timeout=settings.fetch_timeout_seconds,
        follow_redirects=True,
        http2=True,
    )


async def _run_keywords(
    settings: Settings, source: KeywordSource, store: FirebaseResultStore
) -> RunSummary:
    async with _http_client(settings) as http_client:
        engine = OrchestrationEngine(
            providers=build_registry(http_client, settings.fetch_provider_order),
            store=store,
            delay_seconds=settings.fetch_pacing_seconds,
        )
        return await Runner(source=source, engine=engine).run()


@app.command("run")
def run(
    keywords_file: Path | None = typer.Option(
        None,
        "--keywords-file",
        "-k",
        help="Read keywords from a local file instead of the database",
    ),
    pacing: float | None = typer.Option(
        None, "--pacing", help="Seconds to wait between provider calls"
    ),
) -> None:
    """Fetch results for every keyword and store them."""
    settings = _load_settings()
    if pacing is not None:
        settings = replace(settings, fetch_pacing_seconds=max(0.0, pacing))
    if keywords_file is not None and not keywords_file.is_file():
        console.print(f"[red]Error:[/red] Keywords file '{keywords_file}' not found.")
        raise typer.Exit(code=1)
    firebase_app = initialize_firebase(settings)

    source: KeywordSource
    if keywords_file is not None:
        source = FileKeywordSource(keywords_file)
    else:
        source = FirebaseKeywordSource(app=firebase_app)

    summary = asyncio.run(
        _run_keywords(settings, source, FirebaseResultStore(app=firebase_app))
    )

    if not summary.outcomes:
        console.print("[yellow]No keywords to process.[/yellow]")
        return

    table = Table(title=f"Processed {len(summary.outcomes)} keywords")
    table.add_column("Keyword", style="bold cyan")
    table.add_column("Saved", style="green")
    table.add_column("Attempted", style="white")

    for outcome in summary.outcomes:
        if outcome.store_failed:
            saved = "[red]store failed[/red]"
        elif outcome.has_data:
            saved = ", ".join(outcome.accepted)
        else:
            saved = "[yellow]no data[/yellow]"
        table.add_row(outcome.keyword.text, saved, ", ".join(outcome.attempted))

    console.print(table)
    if summary.store_failures:
        raise typer.Exit(code=1)


@app.command("providers")
def list_commands() -> None:
    """List providers in the order they are tried."""
    settings = _load_settings(require_firebase=False)

    table = Table(title="Providers")
    table.add_column("#", style="white")
    table.add_column("Name", style="cyan")
    table.add_column("Slot", style="green")

    for index, name in enumerate(settings.fetch_provider_order):
        slot = "primary" if index < PRIMARY_SLOTS else "fallback"
        table.add_row(str(index + 1), name, slot)

    console.print(table)


@app.command("fetch")
def fetch(
    provider_name: str = typer.Argument(
        ..., help="Name of the provider (e.g., reddit)"
    ),
    keyword: str = typer.Argument(..., help="Keyword to look up"),
) -> None:
    """Call a single provider and print its response without storing it."""
    settings = _load_settings(require_firebase=False)
    try:
        fetcher = get_fetcher(provider_name)
    except ValueError:
        console.print(f"[red]Error:[/red] Provider '{provider_name}' not found.")
        console.print(f"Available: {', '.join(settings.fetch_provider_order)}")
        raise typer.Exit(code=1) from None

    async def _fetch() -> object:
        async with _http_client(settings) as http_client:
            return await fetcher(http_client, keyword)

    with console.status(f"Fetching {provider_name} for '{keyword}'..."):
        data = asyncio.run(_fetch())

    if data is None:
        console.print(f"[red]{provider_name} failed for '{keyword}'.[/red]")
        raise typer.Exit(code=1)

    console.print_json(json.dumps(data))
    if is_meaningful(data):
        console.print("[green]Meaningful[/green]")
    else:
        console.print("[yellow]Not meaningful[/yellow]")


@app.command("render")
def render(
    output: Path = typer.Option(
        Path("keywordresult.html"), "--output", "-o", help="HTML file to write"
    ),
) -> None:
    """Render stored results to a static HTML fragment."""
    settings = _load_settings()
    store = FirebaseResultStore(app=initialize_firebase(settings))

    results = asyncio.run(store.load_all())
    output.write_text(render_results_html(results), encoding="utf-8")
    console.print(f"[green]Wrote {output}[/green] ({len(results)} keywords)")


if __name__ == "__main__":
    app()
