"""
Operations films: recherche, decouverte, fiche combinee, disponibilite,
recommandations, collections et films a l'affiche.

Chaque operation retourne un dictionnaire pret a serialiser en JSON et leve
une exception du domaine (ou de transport) en cas d'echec; la conversion en
reponse d'erreur est faite par la couche MCP.
"""

from typing import Any, Optional

from loguru import logger

from cinelens.adapters.api.tmdb_client import TMDBClient
from cinelens.core.errors import InvalidInputError
from cinelens.services.formatters import (
    extract_year,
    format_movie_result,
    format_providers,
    paginate,
    truncate_text,
)
from cinelens.services.merge import MovieMergeService
from cinelens.services.resolver import EntityResolver, MovieLookup, require_at_least_one
from cinelens.utils.constants import (
    BACKDROP_SIZE,
    MOVIE_GENRE_MAP,
    NOT_AVAILABLE,
    OVERVIEW_MAX_LENGTH,
    POSTER_DETAIL_SIZE,
    POSTER_LIST_SIZE,
)
from cinelens.utils.helpers import get_genre_id

DEFAULT_SORT = "popularity.desc"

# Nombre maximum de regions listees quand la region demandee n'a aucune offre
MAX_LISTED_REGIONS = 20


class MovieService:
    """Operations films exposees comme outils."""

    def __init__(
        self,
        tmdb_client: TMDBClient,
        resolver: EntityResolver,
        merger: MovieMergeService,
        default_region: str = "US",
    ) -> None:
        self._tmdb = tmdb_client
        self._resolver = resolver
        self._merger = merger
        self._default_region = default_region

    async def search_movies(
        self,
        query: str,
        year: Optional[int] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """Recherche de films TMDB par titre."""
        data = await self._tmdb.search_movies(query, page=page, year=year)
        return {
            "results": [
                format_movie_result(movie, self._tmdb.image_url)
                for movie in data.get("results") or []
            ],
            **paginate(data),
        }

    async def get_movie(
        self,
        imdb_id: Optional[str] = None,
        tmdb_id: Optional[int] = None,
        title: Optional[str] = None,
        year: Optional[int] = None,
        plot: Optional[str] = None,
    ) -> dict[str, Any]:
        """Fiche film combinant notes OMDb et metadonnees TMDB."""
        view = await self._merger.get_movie(
            MovieLookup(tmdb_id=tmdb_id, imdb_id=imdb_id, title=title, year=year),
            plot=plot,
        )
        return view.to_dict(self._tmdb.image_url)

    async def discover_movies(
        self,
        year: Optional[int] = None,
        genre: Optional[str] = None,
        min_rating: Optional[float] = None,
        director_id: Optional[int] = None,
        actor_id: Optional[int] = None,
        language: Optional[str] = None,
        sort_by: Optional[str] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Decouverte de films par filtres.

        Un genre inconnu est refuse avant tout appel reseau. Une note minimale
        impose aussi 50 votes minimum pour ecarter les films confidentiels.
        """
        genre_id = get_genre_id(genre, MOVIE_GENRE_MAP) if genre else None
        people = [str(pid) for pid in (director_id, actor_id) if pid is not None]

        data = await self._tmdb.discover_movies(
            page=page,
            sort_by=sort_by,
            primary_release_year=year,
            with_genres=str(genre_id) if genre_id is not None else None,
            with_people=",".join(people) if people else None,
            vote_average_gte=min_rating,
            vote_count_gte=50 if min_rating else None,
            with_original_language=language,
        )
        return {
            "results": [
                format_movie_result(movie, self._tmdb.image_url, include_vote_count=True)
                for movie in data.get("results") or []
            ],
            **paginate(data),
            "filters": {
                "year": year,
                "genre": genre,
                "minRating": min_rating,
                "directorId": director_id,
                "actorId": actor_id,
                "language": language,
                "sortBy": sort_by or DEFAULT_SORT,
            },
        }

    async def get_where_to_watch(
        self,
        tmdb_id: Optional[int] = None,
        imdb_id: Optional[str] = None,
        title: Optional[str] = None,
        region: Optional[str] = None,
    ) -> dict[str, Any]:
        """Offres de streaming, location et achat d'un film pour une region."""
        movie = await self._resolver.resolve_movie(
            MovieLookup(tmdb_id=tmdb_id, imdb_id=imdb_id, title=title)
        )
        region = (region or self._default_region).upper()
        providers = await self._tmdb.get_watch_providers(movie.tmdb_id)
        regions = providers.get("results") or {}
        region_data = regions.get(region)

        if not region_data:
            return {
                "movieTitle": movie.title,
                "tmdbId": movie.tmdb_id,
                "region": region,
                "message": f"No streaming/rental/purchase options available in {region}",
                "availableRegions": list(regions)[:MAX_LISTED_REGIONS],
            }

        return {
            "movieTitle": movie.title,
            "tmdbId": movie.tmdb_id,
            "region": region,
            "justWatchLink": region_data.get("link"),
            "streaming": format_providers(region_data.get("flatrate"), self._tmdb.image_url),
            "rent": format_providers(region_data.get("rent"), self._tmdb.image_url),
            "buy": format_providers(region_data.get("buy"), self._tmdb.image_url),
            "freeWithAds": format_providers(region_data.get("free"), self._tmdb.image_url),
        }

    async def get_movie_recommendations(
        self,
        tmdb_id: Optional[int] = None,
        imdb_id: Optional[str] = None,
        title: Optional[str] = None,
        year: Optional[int] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """Recommandations TMDB a partir d'un film."""
        movie = await self._resolver.resolve_movie(
            MovieLookup(tmdb_id=tmdb_id, imdb_id=imdb_id, title=title, year=year)
        )
        data = await self._tmdb.get_movie_recommendations(movie.tmdb_id, page=page)
        return {
            "sourceMovie": {"tmdbId": movie.tmdb_id, "title": movie.title},
            "recommendations": [
                format_movie_result(m, self._tmdb.image_url, include_vote_count=True)
                for m in data.get("results") or []
            ],
            **paginate(data),
        }

    async def get_collection(
        self,
        collection_id: Optional[int] = None,
        movie_tmdb_id: Optional[int] = None,
        movie_title: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Films d'une collection (franchise), tries par date de sortie.

        Sans collection_id, la collection est celle du film designe.

        Raises:
            InvalidInputError: Le film designe n'appartient a aucune collection
        """
        require_at_least_one(
            collectionId=collection_id, movieTmdbId=movie_tmdb_id, movieTitle=movie_title
        )

        if collection_id is None:
            movie_id = movie_tmdb_id
            if movie_id is None:
                movie = await self._resolver.resolve_movie(MovieLookup(title=movie_title))
                movie_id = movie.tmdb_id
            details = await self._tmdb.get_movie_details(movie_id)
            collection_ref = details.get("belongs_to_collection")
            if not collection_ref:
                raise InvalidInputError(
                    f'"{details.get("title")}" is not part of a collection/franchise'
                )
            collection_id = collection_ref["id"]

        collection = await self._tmdb.get_collection(collection_id)
        parts = sorted(collection.get("parts") or [], key=lambda m: m.get("release_date") or "")
        logger.debug("Collection recuperee", collection_id=collection_id, parts=len(parts))

        return {
            "collectionId": collection.get("id"),
            "name": collection.get("name"),
            "overview": collection.get("overview") or "No overview available",
            "posterUrl": self._tmdb.image_url(collection.get("poster_path"), POSTER_DETAIL_SIZE),
            "backdropUrl": self._tmdb.image_url(collection.get("backdrop_path"), BACKDROP_SIZE),
            "totalMovies": len(parts),
            "movies": [
                {
                    "order": index,
                    "tmdbId": movie.get("id"),
                    "title": movie.get("title"),
                    "year": extract_year(movie.get("release_date")),
                    "releaseDate": movie.get("release_date") or NOT_AVAILABLE,
                    "overview": truncate_text(movie.get("overview"), OVERVIEW_MAX_LENGTH),
                    "tmdbRating": movie.get("vote_average"),
                    "voteCount": movie.get("vote_count"),
                    "posterUrl": self._tmdb.image_url(movie.get("poster_path"), POSTER_LIST_SIZE),
                }
                for index, movie in enumerate(parts, start=1)
            ],
        }

    async def get_now_playing(
        self, region: Optional[str] = None, page: Optional[int] = None
    ) -> dict[str, Any]:
        """Films actuellement en salle dans une region."""
        region = (region or self._default_region).upper()
        data = await self._tmdb.get_now_playing(region=region, page=page)
        return {
            "results": [
                format_movie_result(movie, self._tmdb.image_url, include_vote_count=True)
                for movie in data.get("results") or []
            ],
            **paginate(data),
            "region": region,
        }
