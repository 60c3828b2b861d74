# tests/conftest.py
import pytest
from unittest.mock import AsyncMock, MagicMock

from interventions.host import HostBridge
from interventions.models import UpdateStatus
from interventions.scoring.query_scorer import QueryScorer

DISTANCE_THRESHOLD = 1
STOP_WORDS = ["stop"]

DOCUMENTS = {
    "fruits": "apple pear banana orange pomegranate",
    "iceCreams": "chocolate vanilla butterscotch",
    "animals": "aardvark badger hamster elephant",
}


@pytest.fixture
def scorer():
    """QueryScorer rempli avec les trois documents de référence."""
    qs = QueryScorer(distance_threshold=DISTANCE_THRESHOLD, stop_words=STOP_WORDS)
    for doc_id, words in DOCUMENTS.items():
        qs.add_document({"id": doc_id, "keywords": words.split()})
    return qs


# --- Mocks des collaborateurs externes ---

@pytest.fixture
def mock_host():
    """Hôte mocké : navigateur à jour, fenêtre non privée."""
    host = AsyncMock(spec=HostBridge)
    host.get_update_status.return_value = UpdateStatus.NO_UPDATES_FOUND
    host.is_private_window.return_value = False
    return host


@pytest.fixture
def mock_telemetry():
    """Télémétrie mockée : aucun appel Redis."""
    telemetry = MagicMock()
    telemetry.keyed_scalar_add = AsyncMock()
    return telemetry


@pytest.fixture
def tip_service_mock(mock_host, mock_telemetry):
    """Vrai TipService sur le corpus d'astuces, avec hôte et télémétrie mockés."""
    from interventions.search.tip_service import TipService, build_query_scorer

    return TipService(
        scorer=build_query_scorer(),
        host=mock_host,
        telemetry=mock_telemetry,
        branch="treatment",
    )
