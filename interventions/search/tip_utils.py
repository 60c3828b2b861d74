"""
TipUtils - choix de l'astuce à partir du classement du QueryScorer.
"""

from typing import Dict, List, Optional, Sequence, Set

from interventions.models import Tip, TipPayload, TipResult, UpdateStatus
from interventions.scoring.query_scorer import ScoredDocument

SUPPORT_URL = "https://support.mozilla.org/kb/"

# Texte, bouton et lien d'aide de chaque astuce
TIP_PAYLOADS: Dict[Tip, Dict[str, str]] = {
    Tip.CLEAR: {
        'text': "Clear Firefox’s cache, cookies, history and more.",
        'button_text': "Choose What to Clear…",
        'help_url': SUPPORT_URL + "delete-browsing-search-download-history-firefox",
    },
    Tip.REFRESH: {
        'text': "Restore default settings and remove old add-ons for optimal performance.",
        'button_text': "Refresh Firefox…",
        'help_url': SUPPORT_URL + "refresh-firefox-reset-add-ons-and-settings",
    },
    Tip.UPDATE_ASK: {
        'text': "A new version of Firefox is available.",
        'button_text': "Install and Restart to Update",
        'help_url': SUPPORT_URL + "update-firefox-latest-release",
    },
    Tip.UPDATE_REFRESH: {
        'text': (
            "Firefox is up to date. Trying to fix a problem? Restore default "
            "settings and remove old add-ons for optimal performance."
        ),
        'button_text': "Refresh Firefox…",
        'help_url': SUPPORT_URL + "refresh-firefox-reset-add-ons-and-settings",
    },
    Tip.UPDATE_RESTART: {
        'text': "The latest Firefox is downloaded and ready to install.",
        'button_text': "Restart to Update",
        'help_url': SUPPORT_URL + "update-firefox-latest-release",
    },
    Tip.UPDATE_WEB: {
        'text': "Get the latest Firefox browser.",
        'button_text': "Download Now",
        'help_url': SUPPORT_URL + "update-firefox-latest-release",
    },
}

RESTART_STATUSES = {
    UpdateStatus.DOWNLOADING,
    UpdateStatus.STAGING,
    UpdateStatus.READY_FOR_RESTART,
}


class TipUtils:
    """Logique pure du choix d'astuce, sans accès à l'hôte."""

    def top_document_ids(self, doc_scores: Sequence[ScoredDocument]) -> Set[str]:
        """
        Identifiants de tous les documents ex aequo au meilleur score.

        Args:
            doc_scores: Classement trié renvoyé par QueryScorer.score

        Returns:
            Ensemble vide si le corpus est vide ou si rien ne correspond.
        """
        if not doc_scores or not doc_scores[0].matched:
            return set()

        top_score = doc_scores[0].score
        top_ids = set()
        for scored in doc_scores:
            if scored.score != top_score:
                break
            top_ids.add(scored.document.id)
        return top_ids

    def tip_for_update_status(self, status: UpdateStatus) -> Optional[Tip]:
        """Astuce de mise à jour selon le statut ; None pendant une vérification."""
        if status in RESTART_STATUSES:
            return Tip.UPDATE_RESTART
        if status == UpdateStatus.DOWNLOAD_AND_INSTALL:
            return Tip.UPDATE_ASK
        if status == UpdateStatus.NO_UPDATES_FOUND:
            return Tip.UPDATE_REFRESH
        if status == UpdateStatus.CHECKING:
            # Pas d'interface de progression : on n'affiche rien
            return None
        return Tip.UPDATE_WEB

    def build_results(self, tip: Tip) -> List[TipResult]:
        """Résultat à afficher pour l'astuce courante (aucun si Tip.NONE)."""
        if tip == Tip.NONE:
            return []
        return [TipResult(payload=TipPayload(type=tip, **TIP_PAYLOADS[tip]))]
