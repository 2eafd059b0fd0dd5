# epub_text/src/epub_text/core/zip/archive.py
"""
Module d'archive ZIP en lecture seule.

Le répertoire central est lu dès la construction; le contenu d'une entrée
n'est extrait (et décompressé) qu'à la demande.
"""

import logging
from typing import List, Optional, Tuple

from ...config import LOCAL_HEADER_SIGNATURE, LOCAL_HEADER_SIZE, METHOD_DEFLATE, METHOD_STORED
from ..errors import InvalidZipError, UnsupportedCompressionError
from ..models import ArchiveEntry
from .byte_reader import read_u16, read_u32
from .central_directory import read_entries
from .inflate import inflate

logger = logging.getLogger(__name__)


class ZipArchive:
    """
    Archive ZIP chargée en mémoire.

    Attributes:
        data: Contenu complet de l'archive
        entries: Entrées dans l'ordre du répertoire central
    """

    def __init__(self, data: bytes):
        self.data = data
        self.entries: Tuple[ArchiveEntry, ...] = tuple(read_entries(data))

    @property
    def names(self) -> List[str]:
        """Noms des entrées, doublons compris."""
        return [entry.name for entry in self.entries]

    def find_entry(self, name: str) -> Optional[ArchiveEntry]:
        """Retourne la première entrée portant exactement ce nom."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def read(self, name: str) -> Optional[bytes]:
        """
        Extrait le contenu d'une entrée par son nom.

        Returns:
            Contenu décompressé, ou None si l'entrée n'existe pas
        """
        entry = self.find_entry(name)
        if entry is None:
            return None
        return self.extract(entry)

    def extract(self, entry: ArchiveEntry) -> bytes:
        """
        Extrait le contenu d'une entrée.

        Les longueurs du nom et du champ extra sont relues dans l'en-tête
        local, la taille compressée vient du répertoire central.

        Raises:
            InvalidZipError: en-tête local absent ou plage hors limites
            UnsupportedCompressionError: méthode autre que 0 ou 8
            DecompressionFailedError: flux DEFLATE invalide
        """
        offset = entry.local_header_offset
        if offset + LOCAL_HEADER_SIZE > len(self.data):
            raise InvalidZipError(detail=f"local header of {entry.name!r} out of bounds")

        if read_u32(self.data, offset) != LOCAL_HEADER_SIGNATURE:
            raise InvalidZipError(detail=f"bad local header signature for {entry.name!r}")

        name_length = read_u16(self.data, offset + 26)
        extra_length = read_u16(self.data, offset + 28)
        start = offset + LOCAL_HEADER_SIZE + name_length + extra_length
        end = start + entry.compressed_size
        if end > len(self.data):
            raise InvalidZipError(detail=f"payload of {entry.name!r} out of bounds")

        payload = self.data[start:end]
        if entry.compression_method == METHOD_STORED:
            return payload
        if entry.compression_method == METHOD_DEFLATE:
            logger.debug("Inflating %s (%d bytes)", entry.name, entry.compressed_size)
            return inflate(payload)

        raise UnsupportedCompressionError(
            detail=f"method {entry.compression_method} for {entry.name!r}"
        )
