"""
CloudVid - Catalogue et streaming de vidéos stockées sur S3 / Cloudflare R2.

Ce package liste les vidéos d'un bucket, complète leurs métadonnées depuis
les noms de fichiers, maintient un cache local de vignettes et sert les
vidéos par plages d'octets.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (cas d'utilisation, orchestration)
- adapters/ : Couche infrastructure (S3, JSON, ffmpeg, CLI)
- web/ : Application FastAPI
"""
