# epub_text/src/epub_text/core/zip/central_directory.py
"""
Module de lecture du répertoire central ZIP.

Responsabilité unique: Localiser l'enregistrement de fin de répertoire
central (EOCD) et énumérer les entrées de l'archive.
"""

import logging
from typing import List

from ...config import (
    CENTRAL_DIR_HEADER_SIZE,
    CENTRAL_DIR_SIGNATURE,
    EOCD_MIN_SIZE,
    EOCD_SEARCH_WINDOW,
    EOCD_SIGNATURE,
)
from ..errors import InvalidZipError
from ..models import ArchiveEntry
from .byte_reader import read_u16, read_u32

logger = logging.getLogger(__name__)


def find_end_of_central_directory(data: bytes) -> int:
    """
    Cherche la signature EOCD en remontant depuis la fin du tampon.

    La recherche est bornée par la taille maximale du commentaire
    d'archive. La première signature trouvée depuis la fin est retenue.

    Args:
        data: Contenu complet de l'archive

    Returns:
        Offset de l'enregistrement EOCD

    Raises:
        InvalidZipError: si aucune signature n'est trouvée
    """
    min_offset = max(0, len(data) - EOCD_SEARCH_WINDOW)
    offset = len(data) - EOCD_MIN_SIZE

    while offset >= min_offset:
        if read_u32(data, offset) == EOCD_SIGNATURE:
            return offset
        offset -= 1

    raise InvalidZipError(detail="end of central directory not found")


def _decode_name(raw: bytes) -> str:
    """Décode un nom d'entrée en UTF-8, avec repli en Latin-1."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def read_entries(data: bytes) -> List[ArchiveEntry]:
    """
    Énumère les entrées du répertoire central.

    Le parcours s'arrête sans erreur sur une signature inattendue afin de
    tolérer une légère corruption en fin de répertoire.

    Args:
        data: Contenu complet de l'archive

    Returns:
        Liste des entrées dans l'ordre du répertoire central

    Raises:
        InvalidZipError: si l'EOCD est introuvable, si une plage calculée
            dépasse le tampon ou si aucune entrée n'est trouvée
    """
    eocd_offset = find_end_of_central_directory(data)
    cd_size = read_u32(data, eocd_offset + 12)
    cd_offset = read_u32(data, eocd_offset + 16)

    end = cd_offset + cd_size
    if end > len(data):
        raise InvalidZipError(detail="central directory exceeds archive size")

    entries: List[ArchiveEntry] = []
    cursor = cd_offset

    while cursor + CENTRAL_DIR_HEADER_SIZE <= end:
        if read_u32(data, cursor) != CENTRAL_DIR_SIGNATURE:
            logger.debug("Central directory walk stopped at offset %d", cursor)
            break

        name_length = read_u16(data, cursor + 28)
        extra_length = read_u16(data, cursor + 30)
        comment_length = read_u16(data, cursor + 32)

        name_start = cursor + CENTRAL_DIR_HEADER_SIZE
        name_end = name_start + name_length
        if name_end > len(data):
            raise InvalidZipError(detail=f"entry name at offset {name_start} out of bounds")

        entries.append(
            ArchiveEntry(
                name=_decode_name(data[name_start:name_end]),
                compression_method=read_u16(data, cursor + 10),
                compressed_size=read_u32(data, cursor + 20),
                uncompressed_size=read_u32(data, cursor + 24),
                local_header_offset=read_u32(data, cursor + 42),
            )
        )

        cursor = name_end + extra_length + comment_length

    if not entries:
        raise InvalidZipError(detail="archive has no entries")

    logger.debug("Read %d central directory entries", len(entries))
    return entries
