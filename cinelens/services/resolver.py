"""
Resolution d'entites vers une reference canonique TMDB.

L'appelant peut designer un film par son ID TMDB, son ID IMDb ou son titre
(eventuellement une annee). La resolution suit un ordre de priorite fixe et
s'arrete a la premiere etape concluante:

1. ID TMDB : lecture directe des details (source canonique du titre)
2. ID IMDb : endpoint find de TMDB, premier resultat film
3. Titre : recherche TMDB (filtree par annee), premier resultat du classement

Aucune recherche approximative n'est tentee: en cas d'homonymes, le premier
resultat du catalogue est retenu tel quel.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from cinelens.core.entities.references import MovieReference, SeriesReference
from cinelens.core.errors import EntityNotFoundError, InvalidInputError
from cinelens.core.ports.api_clients import IMetadataCatalog


def require_at_least_one(**fields: object) -> None:
    """
    Verifie qu'au moins un des champs nommes est renseigne.

    Raises:
        InvalidInputError: Message enumerant les noms de champs acceptes
    """
    if all(value is None or value == "" for value in fields.values()):
        names = ", ".join(f"'{name}'" for name in fields)
        raise InvalidInputError(f"At least one of {names} must be provided")


@dataclass(frozen=True)
class MovieLookup:
    """
    Combinaison d'identifiants fournie par l'appelant pour designer un film.

    Attributes:
        tmdb_id: ID TMDB (prioritaire)
        imdb_id: ID IMDb (ttXXXXXXX)
        title: Titre libre
        year: Annee de sortie pour affiner la recherche par titre
    """

    tmdb_id: Optional[int] = None
    imdb_id: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None

    def validate(self) -> None:
        require_at_least_one(tmdbId=self.tmdb_id, imdbId=self.imdb_id, title=self.title)


@dataclass(frozen=True)
class SeriesLookup:
    """Combinaison d'identifiants fournie par l'appelant pour designer une serie."""

    tmdb_id: Optional[int] = None
    title: Optional[str] = None
    year: Optional[int] = None

    def validate(self) -> None:
        require_at_least_one(tmdbId=self.tmdb_id, title=self.title)


class EntityResolver:
    """
    Resout films et series vers une reference TMDB.

    Example:
        resolver = EntityResolver(tmdb_client)
        movie = await resolver.resolve_movie(MovieLookup(title="Heat", year=1995))
        print(movie.tmdb_id, movie.title)
    """

    def __init__(self, tmdb_client: IMetadataCatalog) -> None:
        self._tmdb = tmdb_client

    async def resolve_movie(self, lookup: MovieLookup) -> MovieReference:
        """
        Resout un film selon l'ordre ID TMDB > ID IMDb > titre.

        Raises:
            InvalidInputError: Aucun identifiant fourni (avant tout appel reseau)
            EntityNotFoundError: ID IMDb inconnu ou recherche par titre vide
        """
        lookup.validate()

        if lookup.tmdb_id is not None:
            logger.debug("Resolution film par ID TMDB", tmdb_id=lookup.tmdb_id)
            details = await self._tmdb.get_movie_details(lookup.tmdb_id)
            return MovieReference(
                tmdb_id=details["id"],
                title=details.get("title", ""),
                imdb_id=details.get("imdb_id"),
            )

        if lookup.imdb_id:
            logger.debug("Resolution film par ID IMDb", imdb_id=lookup.imdb_id)
            details = await self._tmdb.get_movie_by_imdb_id(lookup.imdb_id)
            if details is None:
                raise EntityNotFoundError(f"Movie not found for IMDb ID: {lookup.imdb_id}")
            return MovieReference(
                tmdb_id=details["id"],
                title=details.get("title", ""),
                imdb_id=details.get("imdb_id") or lookup.imdb_id,
            )

        logger.debug("Resolution film par titre", title=lookup.title, year=lookup.year)
        search = await self._tmdb.search_movies(lookup.title, year=lookup.year)
        results = search.get("results") or []
        if not results:
            raise EntityNotFoundError(f"No movies found matching title: {lookup.title}")
        first = results[0]
        return MovieReference(tmdb_id=first["id"], title=first.get("title", ""))

    async def resolve_series(self, lookup: SeriesLookup) -> SeriesReference:
        """
        Resout une serie selon l'ordre ID TMDB > titre.

        Raises:
            InvalidInputError: Aucun identifiant fourni
            EntityNotFoundError: Recherche par titre vide
        """
        lookup.validate()

        if lookup.tmdb_id is not None:
            logger.debug("Resolution serie par ID TMDB", tmdb_id=lookup.tmdb_id)
            details = await self._tmdb.get_tv_details(lookup.tmdb_id)
            return SeriesReference(tmdb_id=details["id"], name=details.get("name", ""))

        logger.debug("Resolution serie par titre", title=lookup.title, year=lookup.year)
        search = await self._tmdb.search_tv(lookup.title, year=lookup.year)
        results = search.get("results") or []
        if not results:
            raise EntityNotFoundError(f"No TV series found matching title: {lookup.title}")
        first = results[0]
        return SeriesReference(tmdb_id=first["id"], name=first.get("name", ""))
