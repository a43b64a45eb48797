"""Commandes CLI du catalogue (Typer + Rich)."""

from src.adapters.cli.catalog_commands import (
    parse,
    series,
    videos,
    warm_thumbnails,
)

__all__ = [
    "parse",
    "series",
    "videos",
    "warm_thumbnails",
]
