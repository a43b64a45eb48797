"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- cli/ : Commandes ligne de commande (Typer)
- storage/ : Stockage objet S3 / R2 (boto3)
- persistence/ : Documents JSON clé-valeur
- parsing/ : Parsing de noms de fichiers
- media/ : Extraction de vignettes (ffmpeg)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
Cela permet de changer les implémentations sans affecter la logique métier.
"""
