# epub_text/src/epub_text/core/epub/html_text.py
"""
Utilitaires pour réduire un document HTML/XHTML en texte brut.
"""

import re

_SCRIPT_RE = re.compile(r"<script.*?>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style.*?>.*?</style>", re.IGNORECASE | re.DOTALL)
_HEAD_RE = re.compile(r"<head.*?>.*?</head>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACES_RE = re.compile(r"\s+")

# Seules entités décodées; &lt; et &gt; en dernier, après le retrait des balises
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def plain_text(html_content: str) -> str:
    """
    Nettoie le HTML pour extraire le texte.

    Retire les blocs script/style/head, puis toutes les balises, décode
    quatre entités nommées et normalise les espaces. Ne lève jamais.
    """
    if not html_content:
        return ""
    text = _SCRIPT_RE.sub(" ", html_content)
    text = _STYLE_RE.sub(" ", text)
    text = _HEAD_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    text = _SPACES_RE.sub(" ", text)
    return text.strip()


def decode_document(data: bytes) -> str:
    """Décode un document en UTF-8 (BOM retiré), avec repli en Latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")
