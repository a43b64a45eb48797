"""
Constantes globales pour CloudVid.

Ce module contient les constantes utilisees dans l'application:
- Extensions video servies depuis le bucket
- Types MIME des reponses
- References statiques des vignettes
"""

# Extensions video reconnues dans le bucket
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
})

# Type MIME des reponses de streaming
VIDEO_CONTENT_TYPE = "video/mp4"

# Extension et type MIME des vignettes (cache local et bucket)
THUMBNAIL_EXTENSION = ".png"
THUMBNAIL_CONTENT_TYPE = "image/png"

# Route statique du cache local de vignettes
THUMBNAIL_ROUTE = "/thumbnails"

# Vignette servie quand aucune image n'a pu etre obtenue
FALLBACK_THUMBNAIL_URL = "/default-thumbnail.png"

# Route interne de streaming (repli quand aucune URL directe n'est disponible)
VIDEO_ROUTE = "/video"
