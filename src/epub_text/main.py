# epub_text/src/epub_text/main.py
"""
Point d'entrée principal pour EPUB Text
Configure le logging et lance le mode ligne de commande
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from .config import (
    LIBRARY_DIR,
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)

USAGE = """Usage: python -m epub_text <epub_or_folder> [...] [--store] [--print]
  epub_or_folder: Fichier EPUB ou dossier contenant des fichiers EPUB
  --store: Copie les fichiers dans la bibliothèque ({library})
  --print: Écrit le texte extrait sur la sortie standard"""


def setup_logging():
    """Configure le système de logging."""
    ensure_directories()
    logger = logging.getLogger("epub_text")
    logger.setLevel(logging.DEBUG)

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "epub_text.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(threadName)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console (stderr, la sortie standard reçoit le texte)
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Lance le mode ligne de commande."""
    logger = logging.getLogger("epub_text")
    args = sys.argv[1:] if argv is None else argv

    paths = [a for a in args if not a.startswith("--")]
    if not paths:
        print(USAGE.format(library=LIBRARY_DIR))
        return 1

    unknown = [a for a in args if a.startswith("--") and a not in ("--store", "--print")]
    if unknown:
        print(f"Error: unknown option(s): {' '.join(unknown)}")
        return 1

    missing = [p for p in paths if not os.path.exists(p)]
    if missing:
        print(f"Error: {', '.join(missing)} not found")
        return 1

    from .cli import cli_process_paths, print_import_summary, print_texts

    reports = cli_process_paths(paths, store="--store" in args)
    if "--print" in args:
        print_texts(reports)
    print_import_summary(reports)

    failed = sum(1 for r in reports if not r.succeeded)
    if failed:
        logger.info("%d file(s) failed", failed)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    return run_cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
