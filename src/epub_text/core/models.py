# epub_text/src/epub_text/core/models.py
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class ArchiveEntry:
    """Entrée du répertoire central d'une archive ZIP."""

    name: str
    compression_method: int
    compressed_size: int
    uncompressed_size: int
    local_header_offset: int


@dataclass
class PackageDocument:
    """Contenu utile d'un document de paquetage OPF."""

    # id -> href, relatif au dossier de l'OPF
    manifest: Dict[str, str] = field(default_factory=dict)
    # idrefs dans l'ordre de lecture
    spine: List[str] = field(default_factory=list)

    # Métadonnées Dublin Core déclarées
    titles: List[str] = field(default_factory=list)
    creators: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    identifiers: List[str] = field(default_factory=list)


@dataclass
class BookMetadata:
    """Métadonnées d'un livre, déclarées ou déduites du texte."""

    title: str | None = None
    authors: List[str] | None = None
    language: str | None = None
    identifier: str | None = None
    word_count: int = 0


@dataclass
class ExtractedBook:
    """Résultat complet d'une extraction."""

    text: str
    document_paths: List[str] = field(default_factory=list)
    metadata: BookMetadata = field(default_factory=BookMetadata)


@dataclass
class StoredEpub:
    """EPUB copié dans la bibliothèque avec son texte extrait."""

    file_name: str
    file_path: str
    extracted_text: str
    metadata: BookMetadata = field(default_factory=BookMetadata)


@dataclass
class ImportReport:
    """Résultat du traitement d'un fichier en mode CLI."""

    path: str
    text: str = ""
    metadata: BookMetadata | None = None
    stored_path: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
