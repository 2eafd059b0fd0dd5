# epub_text/src/epub_text/cli.py
"""
Logique pour le mode ligne de commande.

Utilise EpubImportService pour réutiliser la logique d'extraction.
"""

import logging
import os
from typing import List

from .core.errors import ExtractionError
from .core.file_utils import find_epubs_in_folder
from .core.import_service import EpubImportService
from .core.models import ImportReport

logger = logging.getLogger(__name__)


def expand_paths(paths: List[str]) -> List[str]:
    """Remplace chaque dossier par les EPUB qu'il contient."""
    files = []
    for path in paths:
        if os.path.isdir(path):
            files.extend(find_epubs_in_folder(path))
        else:
            files.append(path)
    return files


def cli_process_paths(
    paths: List[str], store: bool = False, library_dir: str | None = None
) -> List[ImportReport]:
    """
    Traite une liste de fichiers ou de dossiers en mode CLI.

    Args:
        paths: Fichiers EPUB ou dossiers à parcourir
        store: Si True, copie chaque fichier dans la bibliothèque
        library_dir: Bibliothèque cible (config par défaut)

    Returns:
        Un rapport par fichier, réussi ou non
    """
    service = EpubImportService(library_dir)
    reports = []

    for path in expand_paths(paths):
        report = ImportReport(path=path)
        try:
            if store:
                stored = service.import_epub(path)
                report.text = stored.extracted_text
                report.metadata = stored.metadata
                report.stored_path = stored.file_path
            else:
                book = service.extract_file(path)
                report.text = book.text
                report.metadata = book.metadata
        except (ExtractionError, OSError) as e:
            logger.warning("Failed to process %s: %s", path, e)
            report.error = str(e)
        reports.append(report)

    logger.info(f"CLI mode - processed {len(reports)} files")
    return reports


def print_import_summary(reports: List[ImportReport]):
    """Affiche un résumé des fichiers traités."""
    print("\n=== Résumé du traitement ===")
    print(f"Fichiers traités: {len(reports)}")

    failures = [r for r in reports if not r.succeeded]
    print(f"Échecs: {len(failures)}")

    for report in reports:
        print(f"\n{os.path.basename(report.path)}:")
        if not report.succeeded:
            print(f"  Erreur: {report.error}")
            continue

        meta = report.metadata
        if meta is not None:
            print(f"  Titre: {meta.title or 'Untitled'}")
            if meta.authors:
                print(f"  Auteurs: {', '.join(meta.authors)}")
            print(f"  Langue: {meta.language or '?'}")
            if meta.identifier:
                print(f"  ISBN: {meta.identifier}")
            print(f"  Mots: {meta.word_count}")
        if report.stored_path:
            print(f"  Copie: {report.stored_path}")


def print_texts(reports: List[ImportReport]):
    """Écrit le texte extrait de chaque fichier réussi."""
    for report in reports:
        if report.succeeded:
            print(report.text)
            print()
