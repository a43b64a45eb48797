"""
Utilitaires partages pour les commandes CLI de CloudVid.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- build_container : container DI pret a l'emploi (repertoires du cache crees)
"""

from contextlib import contextmanager

from loguru import logger as loguru_logger
from rich.console import Console

from src.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("src")
    try:
        yield
    finally:
        loguru_logger.enable("src")


def build_container() -> Container:
    """Cree un container et s'assure que le cache local existe."""
    container = Container()
    container.config().ensure_directories()
    return container
