"""Pont vers l'application hôte (statut de mise à jour, dialogues, redémarrage)."""
from abc import ABC, abstractmethod

from interventions.config import settings
from interventions.logger import logger
from interventions.models import UpdateStatus


class HostBridge(ABC):
    """Commandes et requêtes que le service adresse au navigateur hôte."""

    @abstractmethod
    async def get_update_status(self) -> UpdateStatus:
        """Statut courant du système de mise à jour."""

    @abstractmethod
    async def check_for_update(self) -> None:
        """Déclenche une vérification (sans effet si les mises à jour sont désactivées)."""

    @abstractmethod
    async def is_private_window(self) -> bool:
        """Vrai si l'onglet actif est en navigation privée."""

    @abstractmethod
    async def open_clear_history_dialog(self) -> None:
        ...

    @abstractmethod
    async def reset_browser(self) -> None:
        ...

    @abstractmethod
    async def install_update_and_restart(self) -> None:
        ...

    @abstractmethod
    async def restart_browser(self) -> None:
        ...

    @abstractmethod
    async def open_url(self, url: str) -> None:
        ...


class StaticHostBridge(HostBridge):
    """
    Hôte minimal piloté par la configuration.

    Le statut de mise à jour vient de `settings.HOST_UPDATE_STATUS` ; les
    commandes sont seulement journalisées.
    """

    def __init__(self, update_status: str = settings.HOST_UPDATE_STATUS, private_window: bool = False):
        self.update_status = UpdateStatus(update_status)
        self.private_window = private_window

    async def get_update_status(self) -> UpdateStatus:
        return self.update_status

    async def check_for_update(self) -> None:
        logger.info("Vérification de mise à jour demandée (statut actuel : {status})",
                    status=self.update_status.value)

    async def is_private_window(self) -> bool:
        return self.private_window

    async def open_clear_history_dialog(self) -> None:
        logger.info("Ouverture du dialogue d'effacement de l'historique")

    async def reset_browser(self) -> None:
        logger.info("Réinitialisation du navigateur demandée")

    async def install_update_and_restart(self) -> None:
        logger.info("Installation de la mise à jour et redémarrage demandés")

    async def restart_browser(self) -> None:
        logger.info("Redémarrage du navigateur demandé")

    async def open_url(self, url: str) -> None:
        logger.info("Ouverture d'un onglet : {url}", url=url)
