# epub_text/src/epub_text/config.py
"""
Configuration et constantes pour EPUB Text
"""

import os
import re

# ---------- Format ZIP ----------
EOCD_SIGNATURE = 0x06054B50
CENTRAL_DIR_SIGNATURE = 0x02014B50
LOCAL_HEADER_SIGNATURE = 0x04034B50
EOCD_MIN_SIZE = 22
EOCD_SEARCH_WINDOW = 65557  # 22 octets + commentaire de 65535 octets max
CENTRAL_DIR_HEADER_SIZE = 46
LOCAL_HEADER_SIZE = 30

# ---------- Méthodes de compression ----------
METHOD_STORED = 0
METHOD_DEFLATE = 8
INFLATE_CHUNK_SIZE = 64 * 1024

# ---------- Structure EPUB ----------
CONTAINER_PATH = "META-INF/container.xml"
CONTENT_EXTENSIONS = (".xhtml", ".html", ".htm")
DOCUMENT_SEPARATOR = "\n\n"

# ---------- Extensions supportées ----------
SUPPORTED_EXT = (".epub",)

# ---------- Expressions régulières ----------
ISBN_RE = re.compile(r"(?:(?:ISBN(?:-1[03])?:?\s*)?)(97[89][ -]?)?[0-9][0-9 -]{8,}[0-9Xx]")

# ---------- Analyse du texte ----------
LANGUAGE_SAMPLE_CHARS = 3000

# ---------- Dossiers ----------
LIBRARY_DIR_ENV_VAR = "EPUB_TEXT_LIBRARY_DIR"
LIBRARY_DIR = os.getenv(LIBRARY_DIR_ENV_VAR, "library")
LOG_DIR = "logs"

# ---------- Configuration logging ----------
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"


# ---------- Initialisation des dossiers ----------
def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    os.makedirs(LOG_DIR, exist_ok=True)
    os.makedirs(LIBRARY_DIR, exist_ok=True)
