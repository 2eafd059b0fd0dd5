# epub_text/src/epub_text/core/epub/extractor.py
"""
Module d'extraction du texte EPUB.

Enchaîne la lecture de l'archive, du conteneur, du paquetage OPF et de la
spine, puis réduit chaque document de contenu en texte brut.
"""

import logging
from typing import List, Tuple

from ...config import CONTAINER_PATH, DOCUMENT_SEPARATOR
from ..errors import EmptyTextError, MissingContainerError, MissingOpfError
from ..models import ExtractedBook, PackageDocument
from ..zip import ZipArchive
from .html_text import decode_document, plain_text
from .metadata import build_metadata
from .package_scanner import find_rootfile_path, scan_package_document
from .spine import resolve_content_paths

logger = logging.getLogger(__name__)


def _read_package(archive: ZipArchive) -> Tuple[str, PackageDocument]:
    """Localise et lit le document OPF désigné par container.xml."""
    container_data = archive.read(CONTAINER_PATH)
    if container_data is None:
        raise MissingContainerError()

    opf_path = find_rootfile_path(container_data)
    opf_data = archive.read(opf_path)
    if opf_data is None:
        raise MissingOpfError(detail=opf_path)

    return opf_path, scan_package_document(opf_data)


def _collect_texts(archive: ZipArchive, paths: List[str]) -> Tuple[List[str], List[str]]:
    """
    Réduit chaque document en texte.

    Returns:
        (textes non vides, chemins effectivement lus)
    """
    texts: List[str] = []
    visited: List[str] = []
    for path in paths:
        data = archive.read(path)
        if data is None:
            logger.debug("Content document %s not in archive, skipped", path)
            continue
        visited.append(path)
        text = plain_text(decode_document(data))
        if text:
            texts.append(text)
    return texts, visited


def _extract(epub_bytes: bytes) -> Tuple[str, List[str], PackageDocument]:
    archive = ZipArchive(epub_bytes)
    opf_path, package = _read_package(archive)
    paths = resolve_content_paths(package, opf_path, archive.names)

    texts, visited = _collect_texts(archive, paths)
    result = DOCUMENT_SEPARATOR.join(texts).strip()
    if not result:
        raise EmptyTextError()

    logger.debug("Extracted %d characters from %d documents", len(result), len(visited))
    return result, visited, package


def extract_text(epub_bytes: bytes) -> str:
    """
    Extrait le texte lisible d'un EPUB.

    Args:
        epub_bytes: Contenu complet du fichier EPUB

    Returns:
        Texte de tous les documents, séparés par une ligne vide

    Raises:
        ExtractionError: sous-classe indiquant l'étape en échec
    """
    text, _, _ = _extract(epub_bytes)
    return text


def extract_book(epub_bytes: bytes) -> ExtractedBook:
    """
    Extrait le texte et les métadonnées d'un EPUB.

    Même chaîne que `extract_text`, complétée par la liste des documents
    lus et les métadonnées du livre.
    """
    text, visited, package = _extract(epub_bytes)
    return ExtractedBook(
        text=text,
        document_paths=visited,
        metadata=build_metadata(package, text),
    )
