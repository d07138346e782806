"""
Operations personnes: recherche, fiche et filmographie TMDB.

La filmographie regroupe les participations d'une personne par film:
un realisateur qui signe aussi le scenario n'a qu'une entree, avec ses
deux roles.
"""

import asyncio
from typing import Any, Optional

from loguru import logger

from cinelens.adapters.api.tmdb_client import TMDBClient
from cinelens.core.ports.api_clients import CatalogRecord
from cinelens.services.formatters import (
    extract_year,
    format_person_details,
    format_person_result,
    paginate,
)
from cinelens.utils.constants import (
    DIRECTOR_JOBS,
    NOT_AVAILABLE,
    POSTER_THUMB_SIZE,
    PRODUCER_JOBS,
    PROFILE_DETAIL_SIZE,
    PROFILE_THUMB_SIZE,
    WRITER_JOBS,
)

FILMOGRAPHY_ROLES = ("all", "actor", "director", "writer", "producer")
FILMOGRAPHY_SORTS = ("date", "rating", "title")
DEFAULT_FILMOGRAPHY_LIMIT = 50

_CREW_FILTERS = {
    "director": lambda row: row.get("job") in DIRECTOR_JOBS,
    "writer": lambda row: row.get("job") in WRITER_JOBS or row.get("department") == "Writing",
    "producer": lambda row: row.get("job") in PRODUCER_JOBS,
}


def _select_credits(credits: CatalogRecord, role: str) -> list[tuple[CatalogRecord, str]]:
    """Couples (participation, libelle de role) retenus pour le filtre de role."""
    selected: list[tuple[CatalogRecord, str]] = []
    if role in ("all", "actor"):
        selected.extend(
            (row, f"Actor ({row.get('character') or NOT_AVAILABLE})")
            for row in credits.get("cast") or []
        )
    for name, predicate in _CREW_FILTERS.items():
        if role in ("all", name):
            selected.extend(
                (row, row.get("job") or "Unknown")
                for row in credits.get("crew") or []
                if predicate(row)
            )
    return selected


def group_by_movie(selected: list[tuple[CatalogRecord, str]]) -> list[dict[str, Any]]:
    """
    Regroupe les participations par ID de film.

    La premiere participation rencontree fournit les champs du film; les
    roles suivants s'ajoutent sans doublon.
    """
    movies: dict[int, dict[str, Any]] = {}
    for row, role in selected:
        movie_id = row.get("id")
        if movie_id is None:
            continue
        entry = movies.get(movie_id)
        if entry is None:
            movies[movie_id] = {"movie": row, "roles": [role]}
        elif role not in entry["roles"]:
            entry["roles"].append(role)
    return list(movies.values())


def sort_filmography(entries: list[dict[str, Any]], sort_by: str) -> list[dict[str, Any]]:
    if sort_by == "rating":
        return sorted(entries, key=lambda e: e["movie"].get("vote_average") or 0, reverse=True)
    if sort_by == "title":
        return sorted(entries, key=lambda e: (e["movie"].get("title") or "").casefold())
    return sorted(
        entries, key=lambda e: e["movie"].get("release_date") or "0000", reverse=True
    )


class PeopleService:
    """Operations personnes exposees comme outils."""

    def __init__(self, tmdb_client: TMDBClient) -> None:
        self._tmdb = tmdb_client

    async def search_person(self, query: str, page: Optional[int] = None) -> dict[str, Any]:
        data = await self._tmdb.search_person(query, page=page)
        return {
            "results": [
                format_person_result(person, self._tmdb.image_url)
                for person in data.get("results") or []
            ],
            **paginate(data),
        }

    async def get_person_details(self, person_id: int) -> dict[str, Any]:
        """Fiche d'une personne avec portrait w500."""
        person = await self._tmdb.get_person_details(person_id)
        return format_person_details(person, self._tmdb.image_url, PROFILE_DETAIL_SIZE)

    async def get_filmography(
        self,
        person_id: int,
        role: str = "all",
        sort_by: str = "date",
        limit: int = DEFAULT_FILMOGRAPHY_LIMIT,
    ) -> dict[str, Any]:
        """
        Filmographie d'une personne.

        Args:
            person_id: ID TMDB de la personne
            role: all, actor, director, writer ou producer
            sort_by: date (recent d'abord), rating (mieux note d'abord) ou title
            limit: Nombre maximum de films retournes

        Returns:
            Fiche de la personne, films retenus et nombre total de films
            avant application de la limite
        """
        person, credits = await asyncio.gather(
            self._tmdb.get_person_details(person_id),
            self._tmdb.get_person_movie_credits(person_id),
        )
        entries = group_by_movie(_select_credits(credits, role))
        logger.debug(
            "Filmographie assemblee", person_id=person_id, role=role, movies=len(entries)
        )

        filmography = [
            {
                "tmdbId": entry["movie"].get("id"),
                "title": entry["movie"].get("title"),
                "year": extract_year(entry["movie"].get("release_date")),
                "roles": entry["roles"],
                "tmdbRating": entry["movie"].get("vote_average"),
                "voteCount": entry["movie"].get("vote_count"),
                "posterUrl": self._tmdb.image_url(
                    entry["movie"].get("poster_path"), POSTER_THUMB_SIZE
                ),
            }
            for entry in sort_filmography(entries, sort_by)[:limit]
        ]

        return {
            "person": format_person_details(person, self._tmdb.image_url, PROFILE_THUMB_SIZE),
            "filmography": filmography,
            "totalCredits": len(entries),
            "filters": {"role": role, "sortBy": sort_by, "limit": limit},
        }
