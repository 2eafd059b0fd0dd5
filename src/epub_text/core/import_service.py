# epub_text/src/epub_text/core/import_service.py
"""
Service d'import EPUB.

Service réutilisable qui orchestre le workflow d'import: copie du fichier
dans la bibliothèque, extraction du texte et des métadonnées.

Le cœur d'extraction ne touche jamais au système de fichiers; toute la
lecture et la copie passent par ce service.
"""

import logging
from typing import List, Optional

from ..config import LIBRARY_DIR
from .epub import extract_book
from .errors import ExtractionError
from .file_utils import find_epubs_in_folder, read_file_bytes, store_epub_copy
from .models import ExtractedBook, StoredEpub

logger = logging.getLogger(__name__)


class EpubImportService:
    """
    Service d'import EPUB.

    Fournit les opérations de haut niveau:
    - Extraction du texte d'un fichier sans le copier
    - Import d'un fichier dans la bibliothèque
    - Import d'un dossier entier
    """

    def __init__(self, library_dir: Optional[str] = None):
        self.library_dir = library_dir or LIBRARY_DIR
        logger.debug("EpubImportService initialized (library: %s)", self.library_dir)

    def extract_file(self, epub_path: str) -> ExtractedBook:
        """
        Extrait le texte d'un fichier EPUB sans le copier.

        Raises:
            ExtractionError: l'EPUB n'a pas pu être lu
            OSError: le fichier n'a pas pu être ouvert
        """
        logger.info("Extracting EPUB: %s", epub_path)
        return extract_book(read_file_bytes(epub_path))

    def import_epub(self, source_path: str) -> StoredEpub:
        """
        Copie un EPUB dans la bibliothèque et extrait son texte.

        La copie est supprimée si la relecture ou l'extraction échoue.

        Args:
            source_path: Chemin du fichier à importer

        Returns:
            StoredEpub avec le nom, le chemin de la copie et le texte
        """
        destination = store_epub_copy(source_path, self.library_dir)
        try:
            book = extract_book(read_file_bytes(str(destination)))
        except (ExtractionError, OSError):
            logger.warning("Import failed, removing stored copy %s", destination)
            destination.unlink(missing_ok=True)
            raise

        logger.info(
            "Imported %s (%d words)", destination.name, book.metadata.word_count
        )
        return StoredEpub(
            file_name=destination.name,
            file_path=str(destination),
            extracted_text=book.text,
            metadata=book.metadata,
        )

    def import_folder(self, folder: str) -> List[StoredEpub]:
        """
        Importe tous les EPUB d'un dossier.

        Les fichiers illisibles sont journalisés et ignorés.
        """
        stored = []
        for path in find_epubs_in_folder(folder):
            try:
                stored.append(self.import_epub(path))
            except ExtractionError as e:
                logger.warning("Skipping %s: %s", path, e)
        logger.info("Imported %d file(s) from %s", len(stored), folder)
        return stored
