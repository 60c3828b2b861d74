"""Modèles Pydantic : documents, configuration du scoreur, requêtes et réponses."""
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class Tip(str, Enum):
    """Astuces affichables dans la barre d'adresse."""
    NONE = ""
    CLEAR = "clear"
    REFRESH = "refresh"
    # Mise à jour disponible, mais les préférences demandent de confirmer
    UPDATE_ASK = "update_ask"
    # Navigateur à jour : on propose une réinitialisation à la place
    UPDATE_REFRESH = "update_refresh"
    # Mise à jour téléchargée et appliquée, il reste à redémarrer
    UPDATE_RESTART = "update_restart"
    # Impossible de mettre à jour : téléchargement depuis le web
    UPDATE_WEB = "update_web"


class UpdateStatus(str, Enum):
    """Statuts de mise à jour exposés par l'hôte."""
    NEVER_CHECKED = "neverChecked"
    CHECKING = "checking"
    NO_UPDATER = "noUpdater"
    UPDATE_DISABLED_BY_POLICY = "updateDisabledByPolicy"
    OTHER_INSTANCE_HANDLING_UPDATES = "otherInstanceHandlingUpdates"
    NO_UPDATES_FOUND = "noUpdatesFound"
    MANUAL_UPDATE = "manualUpdate"
    UNSUPPORTED_SYSTEM = "unsupportedSystem"
    DOWNLOAD_AND_INSTALL = "downloadAndInstall"
    DOWNLOADING = "downloading"
    DOWNLOAD_FAILED = "downloadFailed"
    STAGING = "staging"
    READY_FOR_RESTART = "readyForRestart"


class Behavior(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Branch(str, Enum):
    CONTROL = "control"
    TREATMENT = "treatment"


class EngagementState(str, Enum):
    START = "start"
    ENGAGEMENT = "engagement"
    ABANDONMENT = "abandonment"
    DISCARD = "discard"


class Document(BaseModel): # pylint: disable=too-few-public-methods
    """Un ensemble nommé de mots-clés, normalisés en minuscules."""
    model_config = ConfigDict(frozen=True)

    id: StrictStr
    keywords: Tuple[StrictStr, ...] = Field(
        default=(),
        validation_alias=AliasChoices("keywords", "words"),
    )

    @field_validator("keywords")
    @classmethod
    def _lowercase_keywords(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(word.lower() for word in value)


class ScorerConfig(BaseModel): # pylint: disable=too-few-public-methods
    """Configuration figée d'un QueryScorer."""
    model_config = ConfigDict(frozen=True)

    # Au-delà de ce seuil, une distance compte comme infinie
    distance_threshold: StrictInt = Field(default=1, ge=0)
    stop_words: FrozenSet[StrictStr] = frozenset()

    @field_validator("stop_words")
    @classmethod
    def _lowercase_stop_words(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        return frozenset(word.lower() for word in value)


class ScoreRequest(BaseModel): # pylint: disable=too-few-public-methods
    """Requête de scoring."""
    query: StrictStr


class DocumentScore(BaseModel): # pylint: disable=too-few-public-methods
    """Score d'un document. `score` vaut None quand le document ne correspond pas."""
    document_id: str
    score: Optional[int] = None
    matched: bool


class ScoreResponse(BaseModel): # pylint: disable=too-few-public-methods
    """Classement complet du corpus pour une requête."""
    results: List[DocumentScore]
    total: int
    matched_count: int
    query_time_ms: float
    memory_used_mb: Optional[float] = None


class BehaviorRequest(BaseModel): # pylint: disable=too-few-public-methods
    search_string: StrictStr


class BehaviorResponse(BaseModel): # pylint: disable=too-few-public-methods
    behavior: Behavior
    tip: Tip


class TipPayload(BaseModel): # pylint: disable=too-few-public-methods
    type: Tip
    text: str
    button_text: str
    help_url: str


class TipResult(BaseModel): # pylint: disable=too-few-public-methods
    """Résultat de type astuce renvoyé à la barre d'adresse."""
    type: str = "tip"
    source: str = "local"
    suggested_index: int = 1
    payload: TipPayload


class PickRequest(BaseModel): # pylint: disable=too-few-public-methods
    type: Tip


class EngagementRequest(BaseModel): # pylint: disable=too-few-public-methods
    state: EngagementState
