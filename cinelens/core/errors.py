"""
Exceptions du domaine CineLens.

Trois familles d'erreurs remontent jusqu'a la couche outils:
- InvalidInputError (et ses derivees) : entree appelant incomplete ou invalide
- CatalogError : signal d'echec documente d'un catalogue externe (OMDb, TMDB)
- erreurs de transport : httpx.HTTPError, RateLimitError, TransientStatusError
  (voir cinelens.adapters.api.retry)
"""

from typing import Optional


class CineLensError(Exception):
    """Exception de base pour toutes les erreurs CineLens."""


class InvalidInputError(CineLensError):
    """Parametres d'appel manquants ou valeur enumeree inconnue."""


class EntityNotFoundError(InvalidInputError):
    """
    La resolution d'une entite n'a donne aucun resultat.

    Traitee comme une erreur de validation: l'identifiant ou le titre fourni
    ne correspond a rien dans le catalogue.
    """


class TypeMismatchError(InvalidInputError):
    """Le catalogue a retourne un autre type de contenu que celui attendu."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The result is a {actual}, not a {expected}. "
            f"Use the appropriate tool for {actual}."
        )


class CatalogError(CineLensError):
    """
    Erreur signalee par un catalogue externe.

    Attributes:
        catalog: Identifiant du catalogue ("omdb" ou "tmdb")
        message: Message d'erreur du catalogue lui-meme
        status_code: Code HTTP de la reponse, si pertinent
    """

    def __init__(
        self,
        catalog: str,
        message: str,
        status_code: Optional[int] = None,
    ) -> None:
        self.catalog = catalog
        self.message = message
        self.status_code = status_code
        super().__init__(message)
