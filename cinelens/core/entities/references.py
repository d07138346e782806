"""
References canoniques et vues fusionnees.

Valeurs transitoires creees pour un appel d'outil puis jetees apres
serialisation de la reponse.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class MovieReference:
    """
    Reference canonique d'un film dans le catalogue de metadonnees.

    Attributes:
        tmdb_id: Identifiant TMDB (toujours renseigne apres resolution)
        title: Titre canonique selon TMDB
        imdb_id: Identifiant IMDb, quand la resolution l'a fourni
    """

    tmdb_id: int
    title: str
    imdb_id: Optional[str] = None


@dataclass(frozen=True)
class SeriesReference:
    """Reference canonique d'une serie dans le catalogue de metadonnees."""

    tmdb_id: int
    name: str


@dataclass
class CreditEntry:
    """
    Contributeur dedoublonne d'un titre.

    Un meme person_id apparaissant comme acteur et scenariste accumule
    les deux libelles dans roles, sans doublon et dans l'ordre d'arrivee.
    """

    person_id: int
    name: str
    roles: list[str] = field(default_factory=list)
    profile_url: Optional[str] = None

    def add_role(self, role: str) -> None:
        """Ajoute un libelle de role s'il n'est pas deja present."""
        if role not in self.roles:
            self.roles.append(role)

    def to_dict(self) -> dict[str, Any]:
        return {
            "personId": self.person_id,
            "name": self.name,
            "roles": list(self.roles),
            "profileImageUrl": self.profile_url,
        }
