# epub_text/src/epub_text/core/zip/byte_reader.py
"""Lectures d'entiers little-endian bornées sur un tampon d'octets."""

import struct

from ..errors import InvalidZipError

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


def read_u16(data: bytes, offset: int) -> int:
    """Lit un entier non signé sur 2 octets à `offset`."""
    return _read(_U16, data, offset)


def read_u32(data: bytes, offset: int) -> int:
    """Lit un entier non signé sur 4 octets à `offset`."""
    return _read(_U32, data, offset)


def _read(fmt: struct.Struct, data: bytes, offset: int) -> int:
    # struct accepte les offsets négatifs, pas nous
    if offset < 0 or offset + fmt.size > len(data):
        raise InvalidZipError(detail=f"read of {fmt.size} bytes at offset {offset} out of bounds")
    return fmt.unpack_from(data, offset)[0]
