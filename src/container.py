"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Les services sont des Singletons : le verrou d'ecriture des metadonnees et la
table des generations de vignettes en cours doivent etre partages par toutes
les requetes du processus.
"""

from dependency_injector import containers, providers

from .adapters.media.ffmpeg_extractor import FfmpegThumbnailExtractor
from .adapters.parsing.regex_parser import RegexFilenameParser
from .adapters.persistence.json_store import JsonMetadataStore, JsonSeriesMetadataStore
from .adapters.storage.s3_object_store import S3ObjectStore
from .config import Settings
from .services.catalog import CatalogService
from .services.metadata import MetadataService
from .services.streaming import StreamingService
from .services.thumbnails import ThumbnailService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        catalog = container.catalog_service()
        records = await catalog.videos()

    Dans les tests, les adaptateurs externes sont remplaces par override :
        container.object_store.override(providers.Object(fake_store))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    object_store = providers.Singleton(S3ObjectStore.from_settings, settings=config)
    filename_parser = providers.Singleton(RegexFilenameParser)
    metadata_store = providers.Singleton(
        JsonMetadataStore,
        path=config.provided.metadata_file,
    )
    series_metadata_store = providers.Singleton(
        JsonSeriesMetadataStore,
        path=config.provided.series_metadata_file,
    )
    thumbnail_extractor = providers.Singleton(
        FfmpegThumbnailExtractor,
        ffmpeg_path=config.provided.ffmpeg_path,
        timeout=config.provided.ffmpeg_timeout,
    )

    # Services
    metadata_service = providers.Singleton(
        MetadataService,
        store=metadata_store,
        parser=filename_parser,
    )
    thumbnail_service = providers.Singleton(
        ThumbnailService,
        object_store=object_store,
        extractor=thumbnail_extractor,
        cache_dir=config.provided.thumbnail_cache_dir,
        remote_prefix=config.provided.thumbnail_prefix,
        timestamp=config.provided.thumbnail_timestamp,
        size=config.provided.thumbnail_size,
        upload_generated=config.provided.upload_generated_thumbnails,
        temp_dir=config.provided.cache_dir,
        max_concurrent_generations=config.provided.thumbnail_workers,
    )
    catalog_service = providers.Singleton(
        CatalogService,
        object_store=object_store,
        metadata_service=metadata_service,
        thumbnail_service=thumbnail_service,
        series_store=series_metadata_store,
        thumbnail_prefix=config.provided.thumbnail_prefix,
        signed_url_expiry=config.provided.signed_url_expiry,
    )
    streaming_service = providers.Singleton(
        StreamingService,
        catalog=catalog_service,
        object_store=object_store,
        public_enabled=config.provided.public_enabled,
    )
