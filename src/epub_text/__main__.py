# epub_text/src/epub_text/__main__.py
"""
Point d'entrée `python -m epub_text` et script `epub-text`.

Convertit le résultat de main() en code de sortie du processus.
"""

import logging
import sys

from .main import main

logger = logging.getLogger(__name__)


def cli() -> int:
    """
    Lance la ligne de commande avec les arguments de sys.argv.

    Returns:
        0 si tous les fichiers ont été traités, 1 sinon
    """
    try:
        return main(sys.argv[1:])
    except KeyboardInterrupt:
        sys.stderr.write("Interrompu\n")
        return 130
    except Exception as exc:
        logger.exception("Unhandled error")
        sys.stderr.write(f"Erreur inattendue: {exc}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(cli())
