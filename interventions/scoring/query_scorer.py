"""
Scoring d'une requête saisie contre des ensembles de mots-clés.

Par analogie avec un moteur de recherche, un ensemble de mots-clés est un
"document" et l'ensemble des documents le "corpus". On ajoute d'abord les
documents avec `add_document`, puis on appelle `score` à chaque frappe.

Le score est une somme de distances de Levenshtein : plus il est bas, meilleure
est la correspondance. Le premier mot de la requête est comparé aux mots-clés
exacts du corpus ; les mots suivants sont comparés à tous les préfixes des
mots-clés, car l'utilisateur est peut-être encore en train de les taper.
Pour chaque mot, on garde la distance minimale par document et on l'ajoute à
la somme courante du document.

`score` renvoie tout le corpus trié. Le filtrage (seuil, premier résultat...)
reste à la charge de l'appelant.
"""
import math
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple, Union

from pydantic import ValidationError

from interventions.errors import InvalidArgumentError, InvalidConfigurationError, InvalidDocumentError
from interventions.logger import logger
from interventions.models import Document, ScorerConfig
from interventions.scoring.distance import string_distance

UNMATCHED = math.inf


@dataclass(frozen=True)
class ScoredDocument:
    """Un document et son score pour une requête."""
    document: Document
    score: float

    @property
    def matched(self) -> bool:
        return self.score != UNMATCHED


def _prefixes(word: str) -> Iterable[str]:
    """Tous les préfixes d'un mot, jusqu'au mot entier inclus."""
    for i in range(1, len(word) + 1):
        yield word[:i]


class QueryScorer:
    """Scoreur de requêtes par distance d'édition, pensé pour la saisie au fil de l'eau."""

    def __init__(self, distance_threshold: int = 1, stop_words: Optional[Iterable[str]] = None):
        """
        Args:
            distance_threshold: Les distances supérieures à ce seuil comptent
                comme infinies, c'est-à-dire sans correspondance.
            stop_words: Mots ignorés dans la requête. Comparés exactement en
                première position, par préfixe dans les positions suivantes.
        """
        self._config, self._stop_word_prefixes = self._build_config(
            distance_threshold, stop_words or ()
        )
        # Le corpus possède les documents ; les index ne gardent que leur position.
        self._documents: List[Document] = []
        self._handles_by_id: Dict[str, int] = {}
        self._documents_by_word: Dict[str, Set[int]] = {}
        self._documents_by_prefix: Dict[str, Set[int]] = {}

    # -----------------------------------------------------------------
    # Configuration
    # -----------------------------------------------------------------
    @staticmethod
    def _build_config(
            distance_threshold: int,
            stop_words: Iterable[str]) -> Tuple[ScorerConfig, FrozenSet[str]]:
        if isinstance(stop_words, str):
            raise InvalidConfigurationError("stop_words doit être une liste de mots, pas une chaîne")
        try:
            config = ScorerConfig(
                distance_threshold=distance_threshold,
                stop_words=list(stop_words),
            )
        except (ValidationError, TypeError) as e:
            raise InvalidConfigurationError(str(e)) from e

        prefixes = frozenset(
            prefix for word in config.stop_words for prefix in _prefixes(word)
        )
        return config, prefixes

    @property
    def config(self) -> ScorerConfig:
        return self._config

    @property
    def distance_threshold(self) -> int:
        return self._config.distance_threshold

    @property
    def stop_words(self) -> FrozenSet[str]:
        return self._config.stop_words

    def set_distance_threshold(self, value: int) -> None:
        """Change le seuil. À ne pas appeler pendant un `score` concurrent."""
        self._config, self._stop_word_prefixes = self._build_config(value, self._config.stop_words)

    def set_stop_words(self, words: Iterable[str]) -> None:
        """Remplace les mots vides et recalcule leurs préfixes d'un seul coup."""
        self._config, self._stop_word_prefixes = self._build_config(
            self._config.distance_threshold, words
        )

    # -----------------------------------------------------------------
    # Corpus
    # -----------------------------------------------------------------
    @property
    def documents(self) -> List[Document]:
        return list(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def add_document(self, doc: Union[Document, Mapping]) -> None:
        """
        Ajoute un document au corpus et l'indexe par mot-clé et par préfixe.

        Args:
            doc: Un Document, ou un dict {"id": ..., "keywords": [...]}
                ("words" est accepté à la place de "keywords").

        Raises:
            InvalidDocumentError: document mal formé ou identifiant déjà utilisé.
        """
        if not isinstance(doc, Document):
            if not isinstance(doc, Mapping):
                raise InvalidDocumentError(
                    f"Document attendu, reçu {type(doc).__name__}"
                )
            try:
                doc = Document.model_validate(dict(doc))
            except ValidationError as e:
                raise InvalidDocumentError(str(e)) from e

        if doc.id in self._handles_by_id:
            raise InvalidDocumentError(f"Identifiant de document déjà présent : {doc.id!r}")

        handle = len(self._documents)
        self._documents.append(doc)
        self._handles_by_id[doc.id] = handle

        for word in doc.keywords:
            self._documents_by_word.setdefault(word, set()).add(handle)
            for prefix in _prefixes(word):
                self._documents_by_prefix.setdefault(prefix, set()).add(handle)

        logger.debug(
            "Document '{doc_id}' indexé ({count} mots-clés, {prefixes} préfixes au total)",
            doc_id=doc.id, count=len(doc.keywords), prefixes=len(self._documents_by_prefix),
        )

    # -----------------------------------------------------------------
    # Scoring
    # -----------------------------------------------------------------
    def _is_stop_word(self, word: str, position: int) -> bool:
        if position == 0:
            return word in self._config.stop_words
        return word in self._stop_word_prefixes

    def score(self, search_string: str) -> List[ScoredDocument]:
        """
        Score une requête contre tous les documents du corpus.

        Args:
            search_string: La requête telle que saisie

        Returns:
            Un ScoredDocument par document, trié par score croissant. Les
            documents sans correspondance ont un score infini et arrivent en
            dernier.
        """
        if not isinstance(search_string, str):
            raise InvalidArgumentError(
                f"La requête doit être une chaîne, reçu {type(search_string).__name__}"
            )

        # Même comportement que "".split(/\s+/) : une requête vide donne [""]
        search_words = [word.lower() for word in re.split(r"\s+", search_string.strip())]
        threshold = self._config.distance_threshold

        # Pour chaque mot : distance minimale par document, puis somme courante.
        sum_by_doc: Dict[int, float] = {}
        for position, search_word in enumerate(search_words):
            if self._is_stop_word(search_word, position):
                continue

            index = self._documents_by_word if position == 0 else self._documents_by_prefix
            min_distance_by_doc: Dict[int, float] = {}
            for doc_word, handles in index.items():
                distance = string_distance.distance(search_word, doc_word, threshold)
                if distance > threshold:
                    distance = UNMATCHED
                for handle in handles:
                    min_distance_by_doc[handle] = min(
                        distance, min_distance_by_doc.get(handle, UNMATCHED)
                    )

            for handle, minimum in min_distance_by_doc.items():
                sum_by_doc[handle] = minimum + sum_by_doc.get(handle, 0)

        results = [
            ScoredDocument(document=doc, score=sum_by_doc.get(handle, UNMATCHED))
            for handle, doc in enumerate(self._documents)
        ]
        results.sort(key=lambda result: result.score)
        return results
