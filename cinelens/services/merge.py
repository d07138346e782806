"""
Vue film combinee OMDb + TMDB.

Chaque catalogue fournit les champs pour lesquels il fait reference:
- OMDb : notes agregees (IMDb, Rotten Tomatoes, Metacritic), box-office,
  recompenses, intrigue, realisateur/scenaristes/acteurs en texte libre
- TMDB : budget, recettes, genres structures, societes de production,
  accroche, resume long, images haute resolution, generique structure

Le generique TMDB est replie par personne: un meme contributeur present
a plusieurs postes (acteur et scenariste par exemple) n'apparait qu'une fois,
avec la liste de ses roles.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from loguru import logger

from cinelens.core.entities.references import CreditEntry
from cinelens.core.errors import CatalogError, EntityNotFoundError, TypeMismatchError
from cinelens.core.ports.api_clients import CatalogRecord
from cinelens.services.formatters import ImageUrlBuilder, format_omdb_details
from cinelens.services.resolver import MovieLookup
from cinelens.utils.constants import (
    BACKDROP_SIZE,
    CINEMATOGRAPHER_JOBS,
    COMPOSER_JOBS,
    DIRECTOR_JOBS,
    POSTER_DETAIL_SIZE,
    PRODUCER_JOBS,
    PROFILE_THUMB_SIZE,
    WRITER_JOBS,
)

# Nombre d'acteurs retenus dans le generique structure
TOP_CAST_LIMIT = 10


def _is_writer(row: CatalogRecord) -> bool:
    return row.get("department") == "Writing" or row.get("job") in WRITER_JOBS


def _cast_label(row: CatalogRecord) -> str:
    return f"Actor ({row.get('character') or 'N/A'})"


def fold_credits(
    rows: Iterable[tuple[CatalogRecord, str]],
    image_url: Optional[ImageUrlBuilder] = None,
) -> list[CreditEntry]:
    """
    Replie des lignes de generique par identifiant de personne.

    Args:
        rows: Couples (ligne brute TMDB, libelle de role)
        image_url: Constructeur d'URL pour la photo de profil (optionnel)

    Returns:
        Une CreditEntry par personne, dans l'ordre de premiere apparition
    """
    entries: dict[int, CreditEntry] = {}
    for row, role in rows:
        person_id = row.get("id")
        if person_id is None:
            continue
        entry = entries.get(person_id)
        if entry is None:
            entry = CreditEntry(
                person_id=person_id,
                name=row.get("name", ""),
                profile_url=image_url(row.get("profile_path"), PROFILE_THUMB_SIZE)
                if image_url
                else None,
            )
            entries[person_id] = entry
        entry.add_role(role)
    return list(entries.values())


def select_credit_rows(credits: CatalogRecord) -> list[tuple[CatalogRecord, str]]:
    """
    Selectionne les lignes de generique retenues pour la vue combinee.

    Acteurs principaux (par ordre d'affichage), puis realisation, ecriture,
    production, musique et photographie.
    """
    cast = sorted(credits.get("cast") or [], key=lambda row: row.get("order", 0))
    rows = [(row, _cast_label(row)) for row in cast[:TOP_CAST_LIMIT]]

    for row in credits.get("crew") or []:
        job = row.get("job")
        if (
            job in DIRECTOR_JOBS
            or _is_writer(row)
            or job in PRODUCER_JOBS
            or job in COMPOSER_JOBS
            or job in CINEMATOGRAPHER_JOBS
        ):
            rows.append((row, job or row.get("department") or "Unknown"))
    return rows


def _unique_names(crew: list[CatalogRecord], predicate) -> list[str]:
    names: list[str] = []
    for row in crew:
        if predicate(row) and row.get("name") and row["name"] not in names:
            names.append(row["name"])
    return names


def credits_breakdown(credits: CatalogRecord, image_url: ImageUrlBuilder) -> dict[str, Any]:
    """Generique structure: listes par poste et contributeurs dedoublonnes."""
    crew = credits.get("crew") or []
    cast = sorted(credits.get("cast") or [], key=lambda row: row.get("order", 0))
    return {
        "cast": [
            {"personId": row.get("id"), "name": row.get("name"), "character": row.get("character")}
            for row in cast[:TOP_CAST_LIMIT]
        ],
        "directors": _unique_names(crew, lambda row: row.get("job") in DIRECTOR_JOBS),
        "writers": _unique_names(crew, _is_writer),
        "producers": _unique_names(crew, lambda row: row.get("job") in PRODUCER_JOBS),
        "composers": _unique_names(crew, lambda row: row.get("job") in COMPOSER_JOBS),
        "cinematographers": _unique_names(
            crew, lambda row: row.get("job") in CINEMATOGRAPHER_JOBS
        ),
        "people": [
            entry.to_dict()
            for entry in fold_credits(select_credit_rows(credits), image_url)
        ],
    }


@dataclass
class MergedMovieView:
    """
    Union d'une fiche OMDb et, si disponible, d'une fiche TMDB.

    Attributes:
        ratings: Fiche OMDb (toujours presente)
        metadata: Details TMDB, None si le film est absent de TMDB
        credits: Generique TMDB brut, None si absent
    """

    ratings: CatalogRecord
    metadata: Optional[CatalogRecord] = None
    credits: Optional[CatalogRecord] = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self, image_url: ImageUrlBuilder) -> dict[str, Any]:
        """Serialise la vue; les champs propres a TMDB valent None sans fiche TMDB."""
        output = format_omdb_details(self.ratings)
        output["boxOffice"] = self.ratings.get("BoxOffice")

        metadata = self.metadata or {}
        collection = metadata.get("belongs_to_collection")
        output.update(
            {
                "tmdbId": metadata.get("id"),
                "tagline": metadata.get("tagline") or None,
                "overview": metadata.get("overview") or None,
                "genres": [g.get("name") for g in metadata["genres"]]
                if metadata.get("genres")
                else None,
                "budget": metadata.get("budget") or None,
                "revenue": metadata.get("revenue") or None,
                "productionCompanies": [c.get("name") for c in metadata["production_companies"]]
                if metadata.get("production_companies")
                else None,
                "tmdbRating": metadata.get("vote_average"),
                "posterUrl": image_url(metadata.get("poster_path"), POSTER_DETAIL_SIZE),
                "backdropUrl": image_url(metadata.get("backdrop_path"), BACKDROP_SIZE),
                "collection": {"id": collection.get("id"), "name": collection.get("name")}
                if collection
                else None,
                "credits": credits_breakdown(self.credits, image_url)
                if self.credits is not None
                else None,
            }
        )
        if self.warnings:
            output["warnings"] = list(self.warnings)
        return output


class MovieMergeService:
    """
    Construit la vue film combinee a partir des deux catalogues.

    Example:
        service = MovieMergeService(omdb_client, tmdb_client)
        view = await service.get_movie(MovieLookup(imdb_id="tt0111161"))
        payload = view.to_dict(tmdb_client.image_url)
    """

    def __init__(self, omdb_client, tmdb_client) -> None:
        """
        Args:
            omdb_client: Client du catalogue de notes (OMDbClient)
            tmdb_client: Client du catalogue de metadonnees (TMDBClient)
        """
        self._omdb = omdb_client
        self._tmdb = tmdb_client

    async def get_movie(self, lookup: MovieLookup, plot: Optional[str] = None) -> MergedMovieView:
        """
        Recupere la fiche OMDb puis la complete avec TMDB.

        Ordre de recherche OMDb: ID IMDb > ID TMDB (via son imdb_id) > titre.

        Raises:
            InvalidInputError: Aucun identifiant fourni
            TypeMismatchError: OMDb retourne une serie ou un episode
            EntityNotFoundError: Le film TMDB n'a pas d'ID IMDb associe
            CatalogError: Echec OMDb (film introuvable, cle invalide...)
        """
        lookup.validate()
        tmdb_details: Optional[CatalogRecord] = None

        if lookup.imdb_id:
            ratings = await self._omdb.get_by_id(lookup.imdb_id, plot=plot)
        elif lookup.tmdb_id is not None:
            tmdb_details = await self._tmdb.get_movie_details(lookup.tmdb_id)
            imdb_id = tmdb_details.get("imdb_id")
            if not imdb_id:
                raise EntityNotFoundError(
                    f"No IMDb ID linked to TMDB movie: {lookup.tmdb_id}"
                )
            ratings = await self._omdb.get_by_id(imdb_id, plot=plot)
        else:
            ratings = await self._omdb.get_by_title(
                lookup.title,
                content_type="movie",
                year=str(lookup.year) if lookup.year else None,
                plot=plot,
            )

        content_type = ratings.get("Type") or "unknown"
        if content_type != "movie":
            raise TypeMismatchError("movie", content_type)

        view = MergedMovieView(ratings=ratings)
        try:
            view.metadata, view.credits = await self._fetch_metadata(
                ratings.get("imdbID"), tmdb_details
            )
        except (EntityNotFoundError, CatalogError) as e:
            logger.warning(
                "Donnees TMDB indisponibles, vue OMDb seule",
                imdb_id=ratings.get("imdbID"),
                error=str(e),
            )
            view.warnings.append(f"TMDB data unavailable: {e}")
        return view

    async def _fetch_metadata(
        self,
        imdb_id: Optional[str],
        details: Optional[CatalogRecord],
    ) -> tuple[CatalogRecord, CatalogRecord]:
        """Details et generique TMDB, recuperes en parallele."""
        if details is not None:
            return details, await self._tmdb.get_movie_credits(details["id"])

        if not imdb_id:
            raise EntityNotFoundError("No IMDb ID to cross-reference")

        found = await self._tmdb.find_by_imdb_id(imdb_id)
        movie_results = found.get("movie_results") or []
        if not movie_results:
            raise EntityNotFoundError(f"Movie not found for IMDb ID: {imdb_id}")

        movie_id = movie_results[0]["id"]
        details, credits = await asyncio.gather(
            self._tmdb.get_movie_details(movie_id),
            self._tmdb.get_movie_credits(movie_id),
        )
        return details, credits
