# tests/conftest.py
"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables pour tous les tests, dont un
constructeur d'EPUB en mémoire.
"""

import io
import zipfile
from typing import Dict, List, Optional, Tuple

import pytest

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">{identifier}</dc:identifier>
    <dc:title>{title}</dc:title>
    <dc:creator>{author}</dc:creator>
    <dc:language>{language}</dc:language>
  </metadata>
  <manifest>
{items}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>
"""


def chapter(title: str, body: str) -> str:
    """Document XHTML minimal."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        f"<head><title>{title}</title><style>p {{ color: red; }}</style></head>"
        f"<body><h1>{title}</h1><p>{body}</p></body></html>"
    )


def build_opf(
    manifest: List[Tuple[str, str]],
    spine: List[str],
    title: str = "Test Book",
    author: str = "Test Author",
    language: str = "en",
    identifier: str = "urn:uuid:1234",
) -> str:
    items = "\n".join(
        f'    <item id="{item_id}" href="{href}" media-type="application/xhtml+xml"/>'
        for item_id, href in manifest
    )
    itemrefs = "\n".join(f'    <itemref idref="{idref}"/>' for idref in spine)
    return OPF_TEMPLATE.format(
        items=items,
        itemrefs=itemrefs,
        title=title,
        author=author,
        language=language,
        identifier=identifier,
    )


def build_zip(files: Dict[str, str | bytes], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Construit une archive ZIP en mémoire, dans l'ordre du dict."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            # mimetype toujours stocké, comme dans un vrai EPUB
            method = zipfile.ZIP_STORED if name == "mimetype" else compression
            zf.writestr(name, content, compress_type=method)
    return buffer.getvalue()


def build_epub(
    documents: Optional[Dict[str, Optional[str | bytes]]] = None,
    spine: Optional[List[str]] = None,
    opf_path: str = "OEBPS/content.opf",
    compression: int = zipfile.ZIP_DEFLATED,
    container: bool = True,
    extra_files: Optional[Dict[str, str | bytes]] = None,
    **opf_fields,
) -> bytes:
    """
    Construit un EPUB en mémoire.

    Args:
        documents: href (relatif à l'OPF) -> contenu XHTML, ou None
        spine: ids de la spine; par défaut tous les documents dans l'ordre
        opf_path: chemin du document OPF dans l'archive
        compression: zipfile.ZIP_STORED ou zipfile.ZIP_DEFLATED
        container: si False, META-INF/container.xml est omis
        extra_files: fichiers supplémentaires ajoutés tels quels
    """
    if documents is None:
        documents = {"chapter1.xhtml": chapter("Chapter One", "Hello world.")}

    manifest = [(f"doc{i}", href) for i, href in enumerate(documents, start=1)]
    if spine is None:
        spine = [item_id for item_id, _ in manifest]

    base_dir = opf_path.rsplit("/", 1)[0] + "/" if "/" in opf_path else ""
    files: Dict[str, str | bytes] = {"mimetype": "application/epub+zip"}
    if container:
        files["META-INF/container.xml"] = CONTAINER_XML.format(opf_path=opf_path)
    files[opf_path] = build_opf(manifest, spine, **opf_fields)
    for href, content in documents.items():
        # None: présent dans le manifeste, absent de l'archive
        if content is not None:
            files[base_dir + href] = content
    if extra_files:
        files.update(extra_files)

    return build_zip(files, compression=compression)


@pytest.fixture
def make_epub():
    """Retourne le constructeur d'EPUB en mémoire."""
    return build_epub


@pytest.fixture
def make_chapter():
    """Retourne le constructeur de document XHTML."""
    return chapter


@pytest.fixture
def make_zip():
    """Retourne le constructeur d'archive ZIP en mémoire."""
    return build_zip


@pytest.fixture
def sample_epub_bytes() -> bytes:
    """EPUB de deux chapitres, compressé."""
    return build_epub(
        {
            "text/ch1.xhtml": chapter("Chapter One", "It was a bright cold day in April."),
            "text/ch2.xhtml": chapter("Chapter Two", "The clocks were striking thirteen."),
        }
    )


@pytest.fixture
def sample_epub_file(tmp_path, sample_epub_bytes):
    """Écrit l'EPUB d'exemple sur disque et retourne son chemin."""
    path = tmp_path / "sample.epub"
    path.write_bytes(sample_epub_bytes)
    return path
