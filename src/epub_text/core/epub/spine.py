# epub_text/src/epub_text/core/epub/spine.py
"""
Résolution de l'ordre de lecture.

Transforme manifeste + spine en chemins de documents dans l'archive, avec
un repli sur les fichiers HTML de l'archive quand la spine est inutilisable.
"""

import logging
from typing import Iterable, List

from ...config import CONTENT_EXTENSIONS
from ..errors import MissingContentError
from ..models import PackageDocument

logger = logging.getLogger(__name__)


def opf_base_dir(opf_path: str) -> str:
    """Dossier contenant le document OPF ("" s'il est à la racine)."""
    if "/" not in opf_path:
        return ""
    return opf_path.rsplit("/", 1)[0]


def join_archive_path(base_dir: str, href: str) -> str:
    return f"{base_dir}/{href}" if base_dir else href


def spine_paths(package: PackageDocument, opf_path: str) -> List[str]:
    """Chemins des documents de la spine; les idrefs orphelins sont ignorés."""
    base_dir = opf_base_dir(opf_path)
    paths = []
    for idref in package.spine:
        href = package.manifest.get(idref)
        if href is None:
            logger.debug("Spine idref %r has no manifest item", idref)
            continue
        paths.append(join_archive_path(base_dir, href))
    return paths


def fallback_paths(entry_names: Iterable[str]) -> List[str]:
    """Toutes les entrées HTML/XHTML de l'archive, triées par chemin."""
    return sorted(name for name in entry_names if name.lower().endswith(CONTENT_EXTENSIONS))


def resolve_content_paths(
    package: PackageDocument, opf_path: str, entry_names: Iterable[str]
) -> List[str]:
    """
    Retourne les documents à lire, dans l'ordre.

    Args:
        package: Document OPF analysé
        opf_path: Chemin du document OPF dans l'archive
        entry_names: Noms des entrées de l'archive

    Raises:
        MissingContentError: ni la spine ni le repli ne donnent de document
    """
    paths = spine_paths(package, opf_path)
    if paths:
        return paths

    logger.debug("Spine unusable, falling back to archive HTML entries")
    paths = fallback_paths(entry_names)
    if not paths:
        raise MissingContentError()
    return paths
