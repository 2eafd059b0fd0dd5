# epub_text/src/epub_text/core/epub/__init__.py
"""
Module EPUB - Extraction du texte des fichiers EPUB.

Ce module fournit le point d'entrée `extract_text` et ses étapes:
lecture du conteneur et de l'OPF, ordre de lecture, réduction HTML.
"""

# Exports publics
from .extractor import extract_book, extract_text
from .html_text import plain_text
from .metadata import build_metadata
from .package_scanner import find_rootfile_path, scan_package_document
from .spine import resolve_content_paths

__all__ = [
    "build_metadata",
    "extract_book",
    "extract_text",
    "find_rootfile_path",
    "plain_text",
    "resolve_content_paths",
    "scan_package_document",
]
