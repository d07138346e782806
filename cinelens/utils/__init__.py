"""
Utilitaires et constantes pour CineLens.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from cinelens.utils.constants import (
    MAX_TOTAL_PAGES,
    MOVIE_GENRE_MAP,
    TV_GENRE_MAP,
)
from cinelens.utils.helpers import get_genre_id, parse_int

__all__ = [
    "MAX_TOTAL_PAGES",
    "MOVIE_GENRE_MAP",
    "TV_GENRE_MAP",
    "get_genre_id",
    "parse_int",
]
