"""
Fonctions utilitaires partagees dans le projet CineLens.

- get_genre_id : traduction nom de genre -> ID TMDB (insensible a la casse)
- parse_int : conversion tolerante des nombres OMDb ("1,234", "N/A")
"""

from typing import Mapping, Optional

from cinelens.core.errors import InvalidInputError


def get_genre_id(name: str, genre_map: Mapping[str, int]) -> int:
    """
    Retourne l'ID TMDB d'un genre.

    La recherche ignore la casse et les espaces autour du nom.

    Args:
        name: Nom du genre saisi par l'appelant (ex: "  Sci-Fi ")
        genre_map: MOVIE_GENRE_MAP ou TV_GENRE_MAP

    Raises:
        InvalidInputError: Si le genre est inconnu, avec la liste des noms valides
    """
    genre_id = genre_map.get(name.strip().lower())
    if genre_id is None:
        raise InvalidInputError(
            f"Unknown genre '{name}'. Available genres: {', '.join(genre_map)}"
        )
    return genre_id


def parse_int(value: Optional[str]) -> Optional[int]:
    """Convertit "1,234" en 1234; retourne None pour "N/A" ou une valeur vide."""
    if not value:
        return None
    try:
        return int(str(value).replace(",", ""))
    except ValueError:
        return None
