"""
Adaptateurs de stockage objet.
"""

from src.adapters.storage.s3_object_store import S3ObjectStore

__all__ = ["S3ObjectStore"]
