# epub_text/src/epub_text/core/epub/metadata.py
"""
Module de métadonnées du livre.

Responsabilité unique: Construire les métadonnées d'un livre à partir du
paquetage OPF, avec des replis sur le texte extrait pour les champs
manquants (langue, ISBN).
"""

import logging
from typing import Iterable, List, Optional

from isbnlib import canonical, is_isbn10, is_isbn13
from langdetect import DetectorFactory, detect
from langdetect.lang_detect_exception import LangDetectException

from ...config import ISBN_RE, LANGUAGE_SAMPLE_CHARS
from ..models import BookMetadata, PackageDocument

logger = logging.getLogger(__name__)

# Résultats reproductibles d'un appel à l'autre
DetectorFactory.seed = 0


def count_words(text: str) -> int:
    """Nombre de mots séparés par des espaces."""
    return len(text.split())


def _first(values: Iterable[str]) -> Optional[str]:
    for value in values:
        if value and value.strip():
            return value.strip()
    return None


def _canonical_isbn(candidate: str) -> Optional[str]:
    """Retourne l'ISBN canonique trouvé dans `candidate`, ou None."""
    match = ISBN_RE.search(candidate)
    if not match:
        return None
    raw = match.group(0)
    if is_isbn10(raw) or is_isbn13(raw):
        return canonical(raw)
    return None


def isbn_from_identifiers(identifiers: List[str]) -> Optional[str]:
    """Premier identifiant DC qui est un ISBN valide."""
    for ident in identifiers:
        isbn = _canonical_isbn(ident)
        if isbn:
            return isbn
    return None


def find_isbn_in_text(text: str) -> Optional[str]:
    """
    Recherche un ISBN dans le texte extrait.

    Fallback utilisé quand l'ISBN n'est pas dans les métadonnées.
    """
    for match in ISBN_RE.finditer(text):
        raw = match.group(0)
        if is_isbn10(raw) or is_isbn13(raw):
            isbn = canonical(raw)
            logger.info("ISBN found in text: %s", isbn)
            return isbn
    return None


def detect_language_from_text(text: str) -> Optional[str]:
    """
    Détecte la langue du livre depuis son contenu textuel.

    Fallback utilisé quand la métadonnée DC language est absente.
    Analyse les `LANGUAGE_SAMPLE_CHARS` premiers caractères.

    Returns:
        Code de langue (ex: 'fr', 'en') ou None si échec
    """
    sample = text[:LANGUAGE_SAMPLE_CHARS]
    if not sample.strip():
        return None
    try:
        language = detect(sample)
    except LangDetectException:
        logger.info("Language detection failed.", exc_info=True)
        return None
    logger.info("Language detected from text: %s", language)
    return language


def build_metadata(package: PackageDocument, text: str) -> BookMetadata:
    """
    Construit les métadonnées d'un livre.

    Args:
        package: Document OPF analysé
        text: Texte extrait du livre

    Returns:
        BookMetadata avec titre, auteurs, langue, ISBN et nombre de mots
    """
    authors = [c.strip() for c in package.creators if c.strip()]

    metadata = BookMetadata(
        title=_first(package.titles),
        authors=authors or None,
        language=_first(package.languages),
        identifier=isbn_from_identifiers(package.identifiers),
        word_count=count_words(text),
    )

    # Logique de fallback pour les métadonnées manquantes
    if not metadata.language:
        metadata.language = detect_language_from_text(text)

    if not metadata.identifier:
        metadata.identifier = find_isbn_in_text(text)

    return metadata
