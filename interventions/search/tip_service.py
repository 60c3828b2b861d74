"""Service principal : du texte saisi dans la barre d'adresse à l'astuce affichée."""
import time
from typing import Dict, List, Optional, Set

import psutil

from interventions.config import settings
from interventions.host import HostBridge
from interventions.logger import logger
from interventions.models import Behavior, Branch, EngagementState, Tip, TipResult
from interventions.scoring.query_scorer import QueryScorer, ScoredDocument
from interventions.search.tip_utils import TipUtils
from interventions.telemetry import TelemetryRecorder, telemetry_recorder

# Ordre de préférence quand plusieurs documents sont ex aequo
UPDATE_DOC, CLEAR_DOC, REFRESH_DOC = "update", "clear", "refresh"


def build_query_scorer(
        keywords: Optional[Dict[str, List[str]]] = None,
        distance_threshold: int = settings.DISTANCE_THRESHOLD,
        stop_words: Optional[List[str]] = None) -> QueryScorer:
    """Crée un QueryScorer et y ajoute un document par type d'astuce."""
    scorer = QueryScorer(
        distance_threshold=distance_threshold,
        stop_words=settings.STOP_WORDS if stop_words is None else stop_words,
    )
    for doc_id, words in (keywords or settings.TIP_KEYWORDS).items():
        scorer.add_document({"id": doc_id, "keywords": words})
    return scorer


class TipService:
    """Gestion de l'astuce courante et des compteurs d'affichage et de sélection."""

    def __init__(
            self,
            scorer: QueryScorer,
            host: HostBridge,
            telemetry: TelemetryRecorder = telemetry_recorder,
            branch: str = settings.STUDY_BRANCH):
        self.scorer = scorer
        self.host = host
        self.telemetry = telemetry
        self.branch = Branch(branch)
        self.utils = TipUtils()
        self.current_tip = Tip.NONE
        self.tips_shown_in_current_engagement: Set[Tip] = set()

    def score(self, search_string: str) -> List[ScoredDocument]:
        """Classement complet du corpus, avec durée et mémoire dans les logs."""
        start_time = time.time()
        doc_scores = self.scorer.score(search_string)
        duration = time.time() - start_time
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        logger.debug(
            "Score '{query}' : {ranking} | Durée = {duration:.4f}s | RAM = {memory:.2f} Mo",
            query=search_string,
            ranking=[(s.document.id, s.score) for s in doc_scores],
            duration=duration,
            memory=memory_mb,
        )
        return doc_scores

    async def _choose_tip(self, top_doc_ids: Set[str]) -> Optional[Tip]:
        """Astuce pour les meilleurs documents, None s'il ne faut rien afficher."""
        if UPDATE_DOC in top_doc_ids:
            status = await self.host.get_update_status()
            return self.utils.tip_for_update_status(status)
        if CLEAR_DOC in top_doc_ids and not await self.host.is_private_window():
            return Tip.CLEAR
        if REFRESH_DOC in top_doc_ids:
            return Tip.REFRESH
        return None

    async def on_behavior_requested(self, search_string: str) -> Behavior:
        """
        Décide si le fournisseur est actif pour cette saisie.

        Args:
            search_string: Texte actuellement saisi

        Returns:
            Behavior.ACTIVE si une astuce doit être affichée (branche traitement).
        """
        self.current_tip = Tip.NONE

        if not search_string:
            return Behavior.INACTIVE

        top_doc_ids = self.utils.top_document_ids(self.score(search_string))
        tip = await self._choose_tip(top_doc_ids)
        if tip is None:
            return Behavior.INACTIVE

        self.current_tip = tip
        self.tips_shown_in_current_engagement.add(tip)
        logger.info("Astuce '{tip}' retenue pour '{query}' (branche {branch})",
                    tip=tip.value, query=search_string, branch=self.branch.value)

        return Behavior.ACTIVE if self.branch == Branch.TREATMENT else Behavior.INACTIVE

    def on_results_requested(self) -> List[TipResult]:
        return self.utils.build_results(self.current_tip)

    async def on_result_picked(self, tip: Tip) -> None:
        """Compte la sélection puis exécute l'action de l'astuce."""
        await self.telemetry.keyed_scalar_add(settings.TELEMETRY_PICKED_PART, tip.value)

        if tip == Tip.CLEAR:
            await self.host.open_clear_history_dialog()
        elif tip in (Tip.REFRESH, Tip.UPDATE_REFRESH):
            await self.host.reset_browser()
        elif tip == Tip.UPDATE_ASK:
            await self.host.install_update_and_restart()
        elif tip == Tip.UPDATE_RESTART:
            await self.host.restart_browser()
        elif tip == Tip.UPDATE_WEB:
            await self.host.open_url(settings.FIREFOX_DOWNLOAD_URL)

    async def on_engagement(self, state: EngagementState) -> None:
        """Fin d'engagement : compte les astuces affichées puis repart de zéro."""
        # Remise à zéro avant tout await : une saisie concurrente alimente le nouvel engagement
        shown, self.tips_shown_in_current_engagement = self.tips_shown_in_current_engagement, set()
        if state in (EngagementState.ENGAGEMENT, EngagementState.ABANDONMENT):
            for tip in shown:
                await self.telemetry.keyed_scalar_add(settings.TELEMETRY_SHOWN_PART, tip.value)
