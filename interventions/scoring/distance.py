"""Calcul de distance Levenshtein."""
from functools import lru_cache
from typing import Optional

import Levenshtein as lev

from interventions.config import settings
from interventions.errors import InvalidArgumentError


def levenshtein(
    word1: str = "",
    word2: str = "",
    cost_ins: int = 1,
    cost_rep: int = 1,
    cost_del: int = 1,
    max_distance: Optional[int] = None,
) -> int:
    """
    Distance de Levenshtein pondérée pour transformer `word1` en `word2`.

    Args:
        word1: Mot de référence
        word2: Mot éventuellement différent
        cost_ins: Coût d'une insertion
        cost_rep: Coût d'un remplacement
        cost_del: Coût d'une suppression
        max_distance: Si dépassée, retourne max_distance + 1

    Returns:
        Distance d'édition
    """
    if not isinstance(word1, str) or not isinstance(word2, str):
        raise InvalidArgumentError(
            f"levenshtein() attend deux chaînes, reçu {type(word1).__name__} "
            f"et {type(word2).__name__}"
        )

    if word1 == word2:
        return 0
    if not word1:
        dist = len(word2) * cost_ins
    elif not word2:
        dist = len(word1) * cost_del
    else:
        # python-Levenshtein : deux lignes glissantes, mémoire O(min(len))
        return lev.distance(
            word1,
            word2,
            weights=(cost_ins, cost_del, cost_rep),
            score_cutoff=max_distance,
        )

    if max_distance is not None and dist > max_distance:
        return max_distance + 1
    return dist


class StringDistance:
    """Distances entre chaînes, mises en cache d'une frappe à l'autre."""

    @lru_cache(maxsize=settings.DISTANCE_CACHE_SIZE)
    def distance(self, s1: str, s2: str, max_distance: Optional[int] = None) -> int:
        """
        Calcule la distance de Levenshtein (coûts unitaires) entre deux chaînes.

        Args:
            s1: Première chaîne
            s2: Deuxième chaîne
            max_distance: Distance maximale (si dépassée, retourne max_distance + 1)

        Returns:
            Distance de Levenshtein
        """
        return levenshtein(s1, s2, max_distance=max_distance)


# Instance globale réutilisable
string_distance = StringDistance()
