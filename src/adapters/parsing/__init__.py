"""
Adaptateurs de parsing pour CloudVid.

Ce package contient les implementations concretes des interfaces de parsing:
- RegexFilenameParser: Extrait titre de serie et numero d'episode par regex
"""

from src.adapters.parsing.regex_parser import RegexFilenameParser

__all__ = ["RegexFilenameParser"]
