# epub_text/src/epub_text/core/zip/inflate.py
"""Décompression DEFLATE brute des entrées ZIP (méthode 8)."""

import zlib

from ...config import INFLATE_CHUNK_SIZE
from ..errors import DecompressionFailedError


def inflate(compressed: bytes) -> bytes:
    """
    Décompresse un flux DEFLATE brut (sans en-tête zlib).

    Tout le flux est fourni en un seul bloc, la sortie est vidée par
    morceaux de `INFLATE_CHUNK_SIZE` jusqu'à la fin logique du flux.

    Raises:
        DecompressionFailedError: flux invalide ou tronqué
    """
    try:
        stream = zlib.decompressobj(-zlib.MAX_WBITS)
        chunks = []
        pending = compressed
        while not stream.eof:
            chunk = stream.decompress(pending, INFLATE_CHUNK_SIZE)
            if not chunk and not stream.eof and stream.unconsumed_tail == pending:
                # Aucune progression possible avant la fin du flux
                raise DecompressionFailedError(detail="deflate stream is truncated")
            pending = stream.unconsumed_tail
            chunks.append(chunk)
    except zlib.error as e:
        raise DecompressionFailedError(detail=str(e)) from e

    return b"".join(chunks)
