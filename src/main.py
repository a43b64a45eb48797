"""
Point d'entrée CLI de CloudVid.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated, Optional

import typer
from loguru import logger

from .adapters.cli import parse, series, videos, warm_thumbnails
from .config import APP_VERSION, Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="cloudvid",
    help="Catalogue et streaming de videos stockees sur S3 / R2",
)
container = Container()

# Commandes du catalogue
app.command()(videos)
app.command()(series)
app.command()(parse)
app.command(name="warm-thumbnails")(warm_thumbnails)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration CloudVid")
    typer.echo(f"Bucket : {config.bucket_name}")
    typer.echo(f"Endpoint : {config.endpoint_url or 'AWS par défaut'}")
    typer.echo(f"URL publique : {config.public_url or 'désactivée'}")
    typer.echo(f"Cache : {config.cache_dir}")
    typer.echo(f"Vignettes : {config.thumbnail_cache_dir}")
    typer.echo(f"Métadonnées : {config.metadata_file}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CloudVid v{APP_VERSION}")


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option(help="Adresse d'écoute")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port d'écoute")] = None,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web CloudVid."""
    import uvicorn

    config = get_config()
    host = host or config.host
    port = port or config.port
    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("src.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de CloudVid", version=APP_VERSION)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
