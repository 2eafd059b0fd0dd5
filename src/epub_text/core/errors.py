# epub_text/src/epub_text/core/errors.py
"""
Erreurs de la chaîne d'extraction EPUB.

Chaque erreur est terminale pour l'appel d'extraction en cours et porte
un type (`kind`), l'étape qui l'a produite (`stage`) et un message lisible.
"""

from typing import Optional


class ExtractionError(Exception):
    """Erreur de base de l'extraction de texte EPUB."""

    kind = "extraction_error"
    stage = "extract"
    default_message = "The EPUB could not be read."

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


# --- Erreurs de l'archive ZIP ---


class ZipError(ExtractionError):
    """Erreur levée par la lecture de l'archive ZIP."""

    stage = "zip"


class InvalidZipError(ZipError):
    kind = "invalid_zip"
    default_message = "The EPUB archive appears to be invalid."


class UnsupportedCompressionError(ZipError):
    kind = "unsupported_compression"
    default_message = "The EPUB uses a compression method that is not supported yet."


class DecompressionFailedError(ZipError):
    kind = "decompression_failed"
    default_message = "The EPUB contents could not be decompressed."


# --- Erreurs de structure EPUB ---


class MissingContainerError(ExtractionError):
    kind = "missing_container"
    stage = "container"
    default_message = "The EPUB is missing META-INF/container.xml."


class MissingRootFileError(ExtractionError):
    kind = "missing_root_file"
    stage = "container"
    default_message = "The EPUB container did not specify a root file."


class MissingOpfError(ExtractionError):
    kind = "missing_opf"
    stage = "package"
    default_message = "The EPUB package file could not be read."


class MissingContentError(ExtractionError):
    kind = "missing_content"
    stage = "spine"
    default_message = "The EPUB did not contain readable HTML content."


class EmptyTextError(ExtractionError):
    kind = "empty_text"
    stage = "text"
    default_message = "The EPUB content could not be converted to text."
