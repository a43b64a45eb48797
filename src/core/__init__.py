"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), objets valeur
et exceptions. Cette couche n'a AUCUNE dépendance vers l'infrastructure
(boto3, ffmpeg, FastAPI).

Sous-packages :
- entities/ : Entités métier (VideoObject, VideoRecord, SeriesAggregate)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur (ParsedFilename, MetadataRecord, ByteRange)
"""
