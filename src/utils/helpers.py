"""
Fonctions utilitaires partagees dans le projet CloudVid.

Ce module centralise les fonctions reutilisees a travers le codebase :
- strip_invisible_chars / clean_title : nettoyage des titres
- format_timestamp : format d'affichage des dates de l'API
- basename_from_key : nom de fichier depuis une cle distante
"""

import unicodedata
from datetime import datetime, timezone
from pathlib import PurePosixPath


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    (LRM, RLM, BOM, etc.) parfois présents dans les noms de fichiers.
    """
    result = []
    for char in text:
        category = unicodedata.category(char)
        if category in ("Cf", "Cc"):
            continue
        result.append(char)
    return "".join(result)


def clean_title(title: str) -> str:
    """Nettoie un titre : retire les caractères invisibles et les espaces superflus."""
    if not title:
        return title
    return strip_invisible_chars(title).strip()


def format_timestamp(value: datetime) -> str:
    """
    Formate une date au format "YYYY-MM-DD HH:MM:SS" en UTC.

    Une date naive est consideree comme deja exprimee en UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%d %H:%M:%S")


def basename_from_key(key: str) -> str:
    """Dernier segment d'une cle distante (ex: "videos/a/b.mp4" -> "b.mp4")."""
    return PurePosixPath(key).name
