# tests/core/test_zip_archive.py
"""
Tests pour le module core.zip.
"""

import io
import struct
import warnings
import zipfile
import zlib

import pytest
from epub_text.core.errors import (
    DecompressionFailedError,
    InvalidZipError,
    UnsupportedCompressionError,
    ZipError,
)
from epub_text.core.models import ArchiveEntry
from epub_text.core.zip import ZipArchive, find_end_of_central_directory, inflate, read_entries
from epub_text.core.zip.byte_reader import read_u16, read_u32


class TestByteReader:
    """Tests pour les lectures little-endian."""

    def test_read_u16(self):
        assert read_u16(b"\x34\x12", 0) == 0x1234

    def test_read_u32_with_offset(self):
        assert read_u32(b"\x00PK\x05\x06", 1) == 0x06054B50

    def test_read_out_of_bounds_raises_invalid_zip(self):
        with pytest.raises(InvalidZipError):
            read_u32(b"\x00\x01\x02", 0)

    def test_negative_offset_raises_invalid_zip(self):
        with pytest.raises(InvalidZipError):
            read_u16(b"\x00\x01\x02", -1)


class TestCentralDirectory:
    """Tests pour read_entries."""

    def test_read_entries_in_directory_order(self, make_zip):
        data = make_zip({"b.txt": "bbb", "a.txt": "a", "dir/c.xhtml": "<p/>"})
        entries = read_entries(data)

        assert [e.name for e in entries] == ["b.txt", "a.txt", "dir/c.xhtml"]
        assert entries[0].uncompressed_size == 3
        assert entries[0].compression_method == 8

    def test_stored_entry_sizes(self, make_zip):
        data = make_zip({"a.txt": "hello"}, compression=zipfile.ZIP_STORED)
        (entry,) = read_entries(data)

        assert entry.compression_method == 0
        assert entry.compressed_size == entry.uncompressed_size == 5
        assert entry.local_header_offset == 0

    def test_eocd_found_with_archive_comment(self, make_zip):
        data = make_zip({"a.txt": "hello"})
        # Ajoute un commentaire: la longueur en fin d'EOCD doit suivre
        eocd = data.rfind(b"PK\x05\x06")
        comment = b"archive comment"
        patched = data[: eocd + 20] + struct.pack("<H", len(comment)) + comment

        assert find_end_of_central_directory(patched) == eocd
        assert [e.name for e in read_entries(patched)] == ["a.txt"]

    @staticmethod
    def _with_max_comment(data: bytes, trailing: bytes = b"") -> bytes:
        """EOCD suivi d'un commentaire de 65 535 octets."""
        eocd = data.rfind(b"PK\x05\x06")
        return data[: eocd + 20] + struct.pack("<H", 0xFFFF) + b"c" * 0xFFFF + trailing

    def test_eocd_found_at_search_window_limit(self, make_zip):
        data = make_zip({"a.txt": "hello"})
        patched = self._with_max_comment(data)

        assert find_end_of_central_directory(patched) == len(patched) - 65557
        assert [e.name for e in read_entries(patched)] == ["a.txt"]

    def test_eocd_beyond_search_window_raises_invalid_zip(self, make_zip):
        data = make_zip({"a.txt": "hello"})
        patched = self._with_max_comment(data, trailing=b"c")

        with pytest.raises(InvalidZipError):
            find_end_of_central_directory(patched)

    def test_corrupted_eocd_signature_raises_invalid_zip(self, make_zip):
        data = bytearray(make_zip({"a.txt": "hello"}))
        eocd = data.rfind(b"PK\x05\x06")
        data[eocd : eocd + 4] = b"XXXX"

        with pytest.raises(InvalidZipError):
            read_entries(bytes(data))

    def test_not_a_zip_raises_invalid_zip(self):
        with pytest.raises(InvalidZipError):
            read_entries(b"This is not an EPUB")

    def test_empty_buffer_raises_invalid_zip(self):
        with pytest.raises(InvalidZipError):
            read_entries(b"")

    def test_central_directory_out_of_bounds(self, make_zip):
        data = bytearray(make_zip({"a.txt": "hello"}))
        eocd = data.rfind(b"PK\x05\x06")
        data[eocd + 16 : eocd + 20] = struct.pack("<I", len(data) + 100)

        with pytest.raises(InvalidZipError):
            read_entries(bytes(data))

    def test_empty_archive_raises_invalid_zip(self, make_zip):
        with pytest.raises(InvalidZipError):
            read_entries(make_zip({}))

    def test_walk_stops_silently_on_bad_signature(self, make_zip):
        data = bytearray(make_zip({"a.txt": "a", "b.txt": "b"}))
        eocd = data.rfind(b"PK\x05\x06")
        cd_offset = read_u32(bytes(data), eocd + 16)
        # Corrompt la signature du second en-tête central
        second = data.find(b"PK\x01\x02", cd_offset + 4)
        data[second : second + 4] = b"\x00\x00\x00\x00"

        entries = read_entries(bytes(data))
        assert [e.name for e in entries] == ["a.txt"]

    def test_latin1_entry_name_fallback(self, make_zip):
        data = bytearray(make_zip({"café.txt": "x"}))
        # Réécrit le nom UTF-8 (2 octets pour é) en Latin-1 + padding ASCII
        utf8_name = "café.txt".encode("utf-8")
        latin1_name = b"caf\xe9_.txt"
        assert len(utf8_name) == len(latin1_name)
        data = bytes(data).replace(utf8_name, latin1_name)

        (entry,) = read_entries(data)
        assert entry.name == "café_.txt"


class TestInflate:
    """Tests pour inflate."""

    @staticmethod
    def _raw_deflate(payload: bytes) -> bytes:
        compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
        return compressor.compress(payload) + compressor.flush()

    def test_inflate_round_trip(self):
        payload = b"The quick brown fox. " * 100
        assert inflate(self._raw_deflate(payload)) == payload

    def test_inflate_output_larger_than_chunk(self):
        payload = bytes(range(256)) * 1024  # 256 KiB > 64 KiB
        assert inflate(self._raw_deflate(payload)) == payload

    def test_inflate_garbage_raises(self):
        with pytest.raises(DecompressionFailedError):
            inflate(b"\xff\xff\xff\xff not deflate")

    def test_inflate_truncated_stream_raises(self):
        compressed = self._raw_deflate(b"hello world " * 200)
        with pytest.raises(DecompressionFailedError):
            inflate(compressed[: len(compressed) // 2])


class TestZipArchive:
    """Tests pour ZipArchive."""

    def test_read_stored_and_deflated_are_identical(self, make_zip):
        content = "<p>Same logical bytes</p>" * 20
        stored = ZipArchive(make_zip({"a.xhtml": content}, compression=zipfile.ZIP_STORED))
        deflated = ZipArchive(make_zip({"a.xhtml": content}, compression=zipfile.ZIP_DEFLATED))

        assert stored.read("a.xhtml") == deflated.read("a.xhtml") == content.encode()

    def test_read_missing_entry_returns_none(self, make_zip):
        archive = ZipArchive(make_zip({"a.txt": "a"}))
        assert archive.read("missing.txt") is None
        assert archive.find_entry("missing.txt") is None

    def test_lookup_is_case_sensitive(self, make_zip):
        archive = ZipArchive(make_zip({"Chapter.xhtml": "x"}))
        assert archive.find_entry("chapter.xhtml") is None

    def test_duplicate_names_use_first_entry(self):
        buffer = io.BytesIO()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")  # zipfile signale le doublon
            with zipfile.ZipFile(buffer, "w") as zf:
                zf.writestr("dup.txt", "first")
                zf.writestr("dup.txt", "second")
        archive = ZipArchive(buffer.getvalue())

        assert archive.names == ["dup.txt", "dup.txt"]
        assert archive.read("dup.txt") == b"first"

    def test_local_extra_field_read_from_local_header(self, make_zip):
        data = bytearray(make_zip({"a.txt": "payload"}, compression=zipfile.ZIP_STORED))
        # Champ extra de 4 octets dans l'en-tête local seulement
        data[28:30] = struct.pack("<H", 4)
        data[35:35] = b"\xca\xfe\x00\x00"
        eocd = data.rfind(b"PK\x05\x06")
        cd_offset = read_u32(bytes(data), eocd + 16)
        data[eocd + 16 : eocd + 20] = struct.pack("<I", cd_offset + 4)

        archive = ZipArchive(bytes(data))
        assert archive.entries[0].local_header_offset == 0
        assert archive.read("a.txt") == b"payload"

    def test_bad_local_header_signature(self, make_zip):
        data = bytearray(make_zip({"a.txt": "a"}))
        data[0:4] = b"XXXX"
        archive = ZipArchive(bytes(data))

        with pytest.raises(InvalidZipError):
            archive.read("a.txt")

    def test_local_header_offset_out_of_bounds(self, make_zip):
        archive = ZipArchive(make_zip({"a.txt": "a"}))
        bogus = ArchiveEntry(
            name="a.txt",
            compression_method=0,
            compressed_size=1,
            uncompressed_size=1,
            local_header_offset=len(archive.data) + 10,
        )
        with pytest.raises(InvalidZipError):
            archive.extract(bogus)

    def test_payload_out_of_bounds(self, make_zip):
        archive = ZipArchive(make_zip({"a.txt": "a"}))
        entry = archive.entries[0]
        bogus = ArchiveEntry(
            name=entry.name,
            compression_method=0,
            compressed_size=len(archive.data) * 2,
            uncompressed_size=1,
            local_header_offset=entry.local_header_offset,
        )
        with pytest.raises(InvalidZipError):
            archive.extract(bogus)

    def test_unsupported_compression(self, make_zip):
        archive = ZipArchive(make_zip({"a.txt": "a"}, compression=zipfile.ZIP_BZIP2))

        with pytest.raises(UnsupportedCompressionError) as excinfo:
            archive.read("a.txt")
        assert isinstance(excinfo.value, ZipError)
        assert excinfo.value.kind == "unsupported_compression"
