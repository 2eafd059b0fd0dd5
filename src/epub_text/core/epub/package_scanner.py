# epub_text/src/epub_text/core/epub/package_scanner.py
"""
Module de lecture du conteneur et du paquetage OPF.

Responsabilité unique: Parcourir en une passe `META-INF/container.xml`
et le document OPF, sans DOM, en ne retenant que quelques éléments.

Aucune validation ni contrainte parent/enfant: un élément `item` est
retenu où qu'il se trouve dans le document.
"""

import logging
from io import BytesIO
from typing import Dict, Iterator, NamedTuple

from lxml import etree

from ..errors import MissingRootFileError
from ..models import PackageDocument

logger = logging.getLogger(__name__)

# Éléments Dublin Core retenus -> attribut de PackageDocument
_DC_FIELDS = {
    "title": "titles",
    "creator": "creators",
    "language": "languages",
    "identifier": "identifiers",
}


class XmlEvent(NamedTuple):
    """Événement d'élément: `start` porte les attributs, `end` le texte."""

    kind: str
    name: str
    attributes: Dict[str, str]
    text: str = ""


def _local_name(tag: str) -> str:
    """Retire l'espace de noms `{uri}` ou le préfixe `pfx:` d'un nom."""
    if tag.startswith("{"):
        tag = tag.rsplit("}", 1)[-1]
    return tag.rsplit(":", 1)[-1]


def _attributes(attrib) -> Dict[str, str]:
    """
    Indexe les attributs par nom local.

    Un attribut sans espace de noms l'emporte sur un attribut qualifié de
    même nom local (`id` face à `xml:id`).
    """
    attributes: Dict[str, str] = {}
    for key, value in attrib.items():
        local = _local_name(key)
        if key == local:
            attributes[local] = value
        else:
            attributes.setdefault(local, value)
    return attributes


def iter_xml_events(xml_data: bytes) -> Iterator[XmlEvent]:
    """
    Produit paresseusement les événements d'ouverture/fermeture d'éléments.

    Le parseur tourne en mode récupération, sans réseau ni résolution
    d'entités. Un document mal formé produit les événements vus avant
    l'erreur, puis le flux s'arrête.
    """
    try:
        for event, elem in etree.iterparse(
            BytesIO(xml_data),
            events=("start", "end"),
            recover=True,
            no_network=True,
            resolve_entities=False,
        ):
            if not isinstance(elem.tag, str):
                continue
            name = _local_name(elem.tag)
            attributes = _attributes(elem.attrib)
            if event == "start":
                yield XmlEvent("start", name, attributes)
            else:
                # Une entité non déclarée (`&nbsp;`) reste telle quelle dans le texte
                yield XmlEvent("end", name, attributes, "".join(elem.itertext()).strip())
    except etree.ParseError as e:
        logger.debug("XML scan stopped early: %s", e)


def find_rootfile_path(container_xml: bytes) -> str:
    """
    Extrait le chemin du document OPF depuis container.xml.

    Returns:
        Attribut `full-path` du premier élément `rootfile`

    Raises:
        MissingRootFileError: aucun `rootfile` avec `full-path`
    """
    for event in iter_xml_events(container_xml):
        if event.kind == "start" and event.name == "rootfile":
            full_path = event.attributes.get("full-path")
            if full_path:
                return full_path
    raise MissingRootFileError()


def scan_package_document(opf_xml: bytes) -> PackageDocument:
    """
    Lit le manifeste, la spine et les métadonnées DC d'un document OPF.

    - `item` avec `id` et `href`: manifest[id] = href (le dernier l'emporte)
    - `itemref` avec `idref`: ajouté à la spine dans l'ordre du document
    - `title`, `creator`, `language`, `identifier`: texte non vide retenu
    """
    package = PackageDocument()

    for event in iter_xml_events(opf_xml):
        if event.kind == "start":
            if event.name == "item":
                item_id = event.attributes.get("id")
                href = event.attributes.get("href")
                if item_id is not None and href is not None:
                    package.manifest[item_id] = href
            elif event.name == "itemref":
                idref = event.attributes.get("idref")
                if idref is not None:
                    package.spine.append(idref)
        elif event.name in _DC_FIELDS and event.text:
            getattr(package, _DC_FIELDS[event.name]).append(event.text)

    logger.debug(
        "Package document: %d manifest items, %d spine refs",
        len(package.manifest),
        len(package.spine),
    )
    return package
