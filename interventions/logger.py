'''
Logger centralisé du service d'interventions.

Loguru avec une sortie console colorée et des fichiers rotatifs dans
`settings.LOG_DIR`.
'''

import os
import sys

from loguru import logger

from interventions.config import settings

if not os.path.exists(settings.LOG_DIR):
    os.makedirs(settings.LOG_DIR)

# Pas de doublons avec le handler par défaut
logger.remove()

LOG_FORMAT_CONSOLE = (
    "<white>{time:YYYY-MM-DD HH:mm:ss.SSS}</white> | "
    "<level>{level: <8}</level> | "
    "<light-black>{name}:{function}:{line}</light-black> - "
    "<level><b>{message}</b></level>"
)
LOG_FORMAT_FILE = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{name}:{function}:{line} - "
    "{message}"
)

logger.add(
    sys.stderr,
    level=settings.LOG_LEVEL,
    format=LOG_FORMAT_CONSOLE,
    colorize=True,
    backtrace=True,
    diagnose=True
)


def _file_handler(filename: str, level: str, **kwargs) -> None:
    """Ajoute un fichier journalier (rotation à minuit, 30 jours, zip)."""
    logger.add(
        os.path.join(settings.LOG_DIR, filename),
        level=level,
        format=LOG_FORMAT_FILE,
        rotation="00:00",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
        **kwargs
    )


# DEBUG uniquement : on y retrouve le classement de chaque frappe
_file_handler("debug.log", "DEBUG", filter=lambda record: record["level"].name == "DEBUG")
_file_handler("info.log", "INFO", filter=lambda record: record["level"].name in ("INFO", "WARNING"))
_file_handler("error.log", "ERROR", backtrace=True, diagnose=True)
