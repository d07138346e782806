"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie stderr : lisible par l'humain, pour la surveillance en temps réel
- Sortie fichier (optionnelle) : sérialisée en JSON, avec rotation, pour l'analyse historique

stdout est réservé au protocole MCP: aucun handler n'y écrit.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour stderr (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin du fichier de log JSON, None pour stderr seul
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver
    """
    # Supprime le handler par défaut (stderr sans filtre de niveau)
    logger.remove()

    # Handler stderr - lisible par l'humain, sans couleur (le client MCP capture le flux)
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=(
            "{time:YYYY-MM-DD HH:mm:ss} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message} | {extra}"
        ),
        colorize=False,
    )

    if log_file is None:
        return

    # Handler fichier - JSON pour l'analyse
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",  # Capture tous les niveaux (logs API en DEBUG)
        format="{message}",
        serialize=True,  # Sortie JSON
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
