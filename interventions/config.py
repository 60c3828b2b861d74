"""Configuration du service d'interventions de la barre d'adresse."""
from pydantic_settings import BaseSettings
from typing import Dict, List


class Settings(BaseSettings):
    """Configuration de l'application."""

    # Scoring
    DISTANCE_THRESHOLD: int = 1
    STOP_WORDS: List[str] = []
    DISTANCE_CACHE_SIZE: int = 4096

    # Étude
    STUDY_BRANCH: str = "treatment"
    URLBAR_PROVIDER_NAME: str = "interventions"

    # Redis (compteurs de télémétrie)
    REDIS_URL: str = "redis://redis:6379/0"
    ENABLE_TELEMETRY: bool = True
    TELEMETRY_ROOT: str = "urlbarInterventionsExperiment"
    TELEMETRY_SHOWN_PART: str = "tipShownCount"
    TELEMETRY_PICKED_PART: str = "tipPickedCount"

    # Hôte : statut de mise à jour renvoyé par le pont statique
    HOST_UPDATE_STATUS: str = "neverChecked"
    FIREFOX_DOWNLOAD_URL: str = "https://www.mozilla.org/firefox/new/"

    # Logs
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # Mots-clés de chaque document (un document par type d'astuce)
    TIP_KEYWORDS: Dict[str, List[str]] = {
        'update': [
            '2019', 'browser', 'download', 'fire', 'firefox', 'fox', 'free',
            'get', 'install', 'installer', 'latest', 'mac', 'mozilla', 'new',
            'newest', 'quantum', 'update', 'updates', 'version', 'windows',
            'www.firefox.com',
        ],
        'clear': [
            'cache', 'clear', 'cookie', 'cookies', 'delete', 'firefox',
            'history', 'load', 'loading', 'loads', 'location', 'page',
        ],
        'refresh': [
            'crash', 'crashes', 'crashing', 'firefox', 'keep', 'keeps', 'not',
            'refresh', 'reset', 'respond', 'responding', 'responds', 'slow',
            'slows', 'work', 'working', 'works',
        ],
    }

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
