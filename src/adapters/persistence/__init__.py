"""
Adaptateurs de persistance (documents JSON clé-valeur).
"""

from src.adapters.persistence.json_store import (
    JsonDocument,
    JsonMetadataStore,
    JsonSeriesMetadataStore,
)

__all__ = [
    "JsonDocument",
    "JsonMetadataStore",
    "JsonSeriesMetadataStore",
]
