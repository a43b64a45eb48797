"""
Commandes CLI de consultation du catalogue (videos, series, parse, warm-thumbnails).
"""

import asyncio
from collections import Counter
from typing import Annotated, Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from src.adapters.cli.helpers import build_container, console, suppress_loguru
from src.adapters.parsing.regex_parser import RegexFilenameParser
from src.core.exceptions import ObjectStoreError
from src.services.thumbnails import ThumbnailState
from src.utils.helpers import format_timestamp


def videos(
    series_title: Annotated[
        Optional[str],
        typer.Option("--series", "-s", help="Filtrer sur un titre de serie"),
    ] = None,
) -> None:
    """
    Liste les videos du bucket, les plus recentes d'abord.

    Exemples:
      cloudvid videos
      cloudvid videos --series "My Show"
    """
    asyncio.run(_videos_async(series_title))


async def _videos_async(series_title: Optional[str]) -> None:
    catalog = build_container().catalog_service()
    with suppress_loguru():
        records = await catalog.videos(series_title)

    if not records:
        console.print("[yellow]Aucune video trouvee.[/yellow]")
        return

    table = Table(title=f"Videos ({len(records)})")
    table.add_column("Fichier", style="cyan")
    table.add_column("Serie")
    table.add_column("Ep.", justify="right")
    table.add_column("Modifie le")
    for record in records:
        episode = "" if record.episode_number is None else str(record.episode_number)
        table.add_row(
            record.filename,
            record.series_title,
            episode,
            format_timestamp(record.last_modified),
        )
    console.print(table)


def series() -> None:
    """Liste les series agregees, les plus recemment mises a jour d'abord."""
    asyncio.run(_series_async())


async def _series_async() -> None:
    catalog = build_container().catalog_service()
    with suppress_loguru():
        aggregates = await catalog.series()

    if not aggregates:
        console.print("[yellow]Aucune serie trouvee.[/yellow]")
        return

    table = Table(title=f"Series ({len(aggregates)})")
    table.add_column("Serie", style="cyan")
    table.add_column("Videos", justify="right")
    table.add_column("Derniere mise a jour")
    table.add_column("Description")
    for aggregate in aggregates:
        table.add_row(
            aggregate.series_title,
            str(aggregate.video_count),
            format_timestamp(aggregate.last_modified),
            aggregate.description,
        )
    console.print(table)


def parse(
    filename: Annotated[str, typer.Argument(help="Nom de fichier a analyser")],
) -> None:
    """Affiche le titre de serie et le numero d'episode deduits d'un nom de fichier."""
    parsed = RegexFilenameParser().parse(filename)
    console.print(f"Serie : [cyan]{parsed.series_title or '-'}[/cyan]")
    episode = "-" if parsed.episode_number is None else parsed.episode_number
    console.print(f"Episode : [cyan]{episode}[/cyan]")


def warm_thumbnails() -> None:
    """
    Resout la vignette de chaque video du bucket pour remplir le cache local.

    Les vignettes deja en cache ne sont pas regenerees.
    """
    asyncio.run(_warm_thumbnails_async())


async def _warm_thumbnails_async() -> None:
    container = build_container()
    catalog = container.catalog_service()
    thumbnails = container.thumbnail_service()

    try:
        found = await catalog.fetch_videos()
    except ObjectStoreError as e:
        console.print(f"[red]Listing du bucket impossible : {e}[/red]")
        raise typer.Exit(code=1)

    states: Counter[ThumbnailState] = Counter()
    with suppress_loguru(), Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Vignettes", total=len(found))
        for video in found:
            progress.update(task, description=video.filename)
            result = await thumbnails.resolve(video)
            states[result.state] += 1
            progress.advance(task)

    console.print(f"[bold]{len(found)}[/bold] video(s) traitee(s)")
    for state in ThumbnailState:
        if states[state]:
            console.print(f"  {state.value} : {states[state]}")
