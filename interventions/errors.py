"""Exceptions du moteur de scoring."""


class ScorerError(Exception):
    """Erreur de base levée par le moteur de scoring."""


class InvalidArgumentError(ScorerError, ValueError):
    """Argument invalide (requête non textuelle, mot non textuel...)."""


class InvalidDocumentError(InvalidArgumentError):
    """Document mal formé ou identifiant déjà présent dans le corpus."""


class InvalidConfigurationError(ScorerError, ValueError):
    """Configuration invalide (seuil de distance négatif, mots vides non textuels...)."""
