# epub_text/src/epub_text/core/zip/__init__.py
"""
Module ZIP - Lecture minimale d'archives ZIP.

Ce module fournit juste ce qu'il faut pour lire un conteneur EPUB:
répertoire central, en-têtes locaux, entrées stockées ou DEFLATE.
"""

from .archive import ZipArchive
from .central_directory import find_end_of_central_directory, read_entries
from .inflate import inflate

__all__ = [
    "ZipArchive",
    "find_end_of_central_directory",
    "inflate",
    "read_entries",
]
