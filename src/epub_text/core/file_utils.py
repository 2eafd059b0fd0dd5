# epub_text/src/epub_text/core/file_utils.py
"""
Logique pour les opérations sur le système de fichiers (trouver, copier, lire).
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List

from ..config import SUPPORTED_EXT

logger = logging.getLogger(__name__)


def find_epubs_in_folder(folder: str) -> List[str]:
    """Trouve tous les fichiers EPUB dans un dossier et ses sous-dossiers."""
    files = []
    for root, _, filenames in os.walk(folder):
        for f in filenames:
            if f.lower().endswith(SUPPORTED_EXT):
                files.append(os.path.join(root, f))
    files.sort()
    logger.info("Found %d epub(s) in folder %s", len(files), folder)
    return files


def read_file_bytes(path: str) -> bytes:
    """Lit un fichier entier en mémoire."""
    return Path(path).read_bytes()


def unique_destination(folder: Path, source_name: str) -> Path:
    """
    Génère un chemin libre dans `folder`, en évitant les collisions.

    `livre.epub` devient `livre-1.epub`, puis `livre-2.epub`, etc.
    """
    source = Path(source_name)
    base_name = source.stem if source.suffix else source.name
    extension = source.suffix.lstrip(".") or "epub"

    destination = folder / f"{base_name}.{extension}"
    counter = 1
    while destination.exists():
        destination = folder / f"{base_name}-{counter}.{extension}"
        counter += 1
    return destination


def store_epub_copy(source_path: str, library_dir: str) -> Path:
    """
    Copie un EPUB dans la bibliothèque sous un nom unique.

    Returns:
        Chemin de la copie
    """
    folder = Path(library_dir)
    folder.mkdir(parents=True, exist_ok=True)
    destination = unique_destination(folder, Path(source_path).name)
    shutil.copy2(source_path, destination)
    logger.info("Stored %s -> %s", source_path, destination)
    return destination
