"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CLOUDVID_,
et peut optionnellement être fournie via un fichier .env.

Les identifiants du stockage objet sont optionnels : sans eux, boto3 utilise
sa chaîne d'authentification standard (variables AWS_*, profil, rôle).
"""

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def _read_version() -> str:
    """Version lue depuis pyproject.toml ("dev" si le fichier est absent)."""
    pyproject = _PROJECT_ROOT / "pyproject.toml"
    if not pyproject.exists():
        return "dev"
    with open(pyproject, "rb") as f:
        return tomllib.load(f)["project"]["version"]


# Source unique de la version (CLI, logs, templates)
APP_VERSION = _read_version()


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CLOUDVID_.
    Exemple : CLOUDVID_BUCKET_NAME=anime-videos

    Les chemins sont automatiquement étendus (~ -> répertoire home). Les chemins
    du cache de vignettes et des documents de métadonnées sont dérivés de
    cache_dir s'ils ne sont pas fournis.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOUDVID_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Cache local (vignettes + documents de métadonnées)
    cache_dir: Path = Field(default=Path("cache"))
    thumbnail_cache_dir: Optional[Path] = Field(default=None)
    metadata_file: Optional[Path] = Field(default=None)
    series_metadata_file: Optional[Path] = Field(default=None)

    # Stockage objet (S3 / Cloudflare R2)
    r2_account_id: Optional[str] = Field(default=None)
    s3_endpoint_url: Optional[str] = Field(default=None)
    s3_access_key_id: Optional[str] = Field(default=None)
    s3_secret_access_key: Optional[SecretStr] = Field(default=None)
    s3_region: str = Field(default="auto")
    bucket_name: str = Field(default="anime-videos")
    public_url: Optional[str] = Field(default=None)
    signed_url_expiry: int = Field(default=3600, ge=1)

    # Vignettes
    thumbnail_prefix: str = Field(default="thumbnails/")
    thumbnail_timestamp: float = Field(default=5.0, ge=0)
    thumbnail_size: str = Field(default="320x240", pattern=r"^\d+x\d+$")
    ffmpeg_path: str = Field(default="ffmpeg")
    ffmpeg_timeout: int = Field(default=60, ge=1)
    upload_generated_thumbnails: bool = Field(default=False)
    thumbnail_workers: int = Field(default=2, ge=1)

    # Streaming
    stream_chunk_size: int = Field(default=1024 * 1024, ge=1024)

    # Serveur web
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)

    # Contrôle de version de l'application cliente
    latest_app_version: str = Field(default="1.0.1")
    show_update_dialog: bool = Field(default=False)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cloudvid.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator(
        "cache_dir",
        "thumbnail_cache_dir",
        "metadata_file",
        "series_metadata_file",
        "log_file",
        mode="before",
    )
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None:
            return None
        return Path(v).expanduser()

    @field_validator("public_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalise l'URL publique (sans slash final, vide -> None)."""
        if not v:
            return None
        return str(v).rstrip("/")

    @field_validator("thumbnail_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Le préfixe des vignettes se termine toujours par un slash."""
        v = str(v).strip().strip("/")
        return f"{v}/" if v else ""

    @model_validator(mode="after")
    def derive_cache_paths(self) -> "Settings":
        """Dérive les chemins du cache depuis cache_dir."""
        if self.thumbnail_cache_dir is None:
            self.thumbnail_cache_dir = self.cache_dir / "thumbnails"
        if self.metadata_file is None:
            self.metadata_file = self.cache_dir / "metadata.json"
        if self.series_metadata_file is None:
            self.series_metadata_file = self.cache_dir / "series_metadata.json"
        return self

    @property
    def endpoint_url(self) -> Optional[str]:
        """Endpoint S3 : explicite, sinon dérivé du compte Cloudflare R2."""
        if self.s3_endpoint_url:
            return self.s3_endpoint_url
        if self.r2_account_id:
            return f"https://{self.r2_account_id}.r2.cloudflarestorage.com"
        return None

    @property
    def public_enabled(self) -> bool:
        """Vérifie si les vidéos sont servies via une URL publique (redirection)."""
        return self.public_url is not None

    def ensure_directories(self) -> None:
        """Crée les répertoires du cache local s'ils n'existent pas."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.thumbnail_cache_dir.mkdir(parents=True, exist_ok=True)
