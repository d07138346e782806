"""
Operations series: recherche et fiches OMDb (serie, saison, episode),
recommandations, decouverte et diffusions du jour via TMDB.
"""

from typing import Any, Optional

from loguru import logger

from cinelens.adapters.api.omdb_client import OMDbClient
from cinelens.adapters.api.tmdb_client import TMDBClient
from cinelens.core.errors import TypeMismatchError
from cinelens.services.formatters import (
    format_omdb_details,
    format_omdb_episode,
    format_omdb_search_result,
    format_tv_result,
    omdb_total_pages,
    paginate,
)
from cinelens.services.resolver import EntityResolver, SeriesLookup, require_at_least_one
from cinelens.utils.constants import TV_GENRE_MAP
from cinelens.utils.helpers import get_genre_id, parse_int

DEFAULT_SORT = "popularity.desc"


class SeriesService:
    """Operations series exposees comme outils."""

    def __init__(
        self,
        omdb_client: OMDbClient,
        tmdb_client: TMDBClient,
        resolver: EntityResolver,
    ) -> None:
        self._omdb = omdb_client
        self._tmdb = tmdb_client
        self._resolver = resolver

    # --- OMDb ---

    async def search_series(
        self,
        query: str,
        year: Optional[int] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Recherche de series OMDb par titre (10 resultats par page).

        OMDb ne fournit pas le nombre de pages: il est deduit du total.
        """
        data = await self._omdb.search_series(
            query, year=str(year) if year else None, page=page
        )
        total_results = parse_int(data.get("totalResults")) or 0
        return {
            "results": [format_omdb_search_result(item) for item in data.get("Search") or []],
            "totalResults": total_results,
            "page": page or 1,
            "totalPages": omdb_total_pages(total_results, self._omdb.PAGE_SIZE),
        }

    async def get_series(
        self,
        imdb_id: Optional[str] = None,
        title: Optional[str] = None,
        year: Optional[int] = None,
        plot: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Fiche OMDb d'une serie, par ID IMDb (prioritaire) ou titre exact.

        Raises:
            InvalidInputError: Ni ID IMDb ni titre
            TypeMismatchError: L'ID designe un film ou un episode
        """
        require_at_least_one(imdbId=imdb_id, title=title)

        if imdb_id:
            record = await self._omdb.get_by_id(imdb_id, plot=plot)
        else:
            record = await self._omdb.get_by_title(
                title,
                content_type="series",
                year=str(year) if year else None,
                plot=plot,
            )

        content_type = record.get("Type") or "unknown"
        if content_type != "series":
            raise TypeMismatchError("series", content_type)

        output = format_omdb_details(record)
        output["totalSeasons"] = record.get("totalSeasons")
        return output

    async def get_episode(self, series_id: str, season: int, episode: int) -> dict[str, Any]:
        """Fiche OMDb d'un episode."""
        record = await self._omdb.get_episode(series_id, season, episode)
        output = format_omdb_details(record)
        output.update(
            {
                "season": record.get("Season"),
                "episode": record.get("Episode"),
                "seriesId": record.get("seriesID"),
            }
        )
        return output

    async def get_season(self, series_id: str, season: int) -> dict[str, Any]:
        """Liste des episodes d'une saison."""
        record = await self._omdb.get_season(series_id, season)
        return {
            "title": record.get("Title"),
            "season": record.get("Season"),
            "totalSeasons": record.get("totalSeasons"),
            "episodes": [format_omdb_episode(ep) for ep in record.get("Episodes") or []],
        }

    async def get_all_episodes(self, series_id: str) -> dict[str, Any]:
        """
        Tous les episodes de toutes les saisons, dans l'ordre des saisons.

        Raises:
            CatalogError: Serie inconnue, sans nombre de saisons, ou saison en echec
        """
        seasons = await self._omdb.get_all_episodes(series_id)
        logger.debug("Episodes recuperes", series_id=series_id, seasons=len(seasons))
        return {
            "title": seasons[0].get("Title") if seasons else "Unknown",
            "totalSeasons": len(seasons),
            "seasons": [
                {
                    "season": season.get("Season"),
                    "episodeCount": len(season.get("Episodes") or []),
                    "episodes": [
                        format_omdb_episode(ep) for ep in season.get("Episodes") or []
                    ],
                }
                for season in seasons
            ],
        }

    # --- TMDB ---

    async def get_tv_recommendations(
        self,
        tmdb_id: Optional[int] = None,
        title: Optional[str] = None,
        year: Optional[int] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """Recommandations TMDB a partir d'une serie."""
        show = await self._resolver.resolve_series(
            SeriesLookup(tmdb_id=tmdb_id, title=title, year=year)
        )
        data = await self._tmdb.get_tv_recommendations(show.tmdb_id, page=page)
        recommendations = []
        for item in data.get("results") or []:
            formatted = format_tv_result(item, self._tmdb.image_url, include_vote_count=True)
            formatted["originalName"] = item.get("original_name")
            recommendations.append(formatted)
        return {
            "sourceShow": {"tmdbId": show.tmdb_id, "name": show.name},
            "recommendations": recommendations,
            **paginate(data),
        }

    async def get_airing_today(self, page: Optional[int] = None) -> dict[str, Any]:
        data = await self._tmdb.get_airing_today(page=page)
        return {
            "results": [
                format_tv_result(show, self._tmdb.image_url, include_vote_count=True)
                for show in data.get("results") or []
            ],
            **paginate(data),
        }

    async def discover_tv(
        self,
        year: Optional[int] = None,
        genre: Optional[str] = None,
        min_rating: Optional[float] = None,
        language: Optional[str] = None,
        sort_by: Optional[str] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Decouverte de series par filtres.

        Les genres TV ont leurs propres IDs (action -> "Action & Adventure").
        """
        genre_id = get_genre_id(genre, TV_GENRE_MAP) if genre else None

        data = await self._tmdb.discover_tv(
            page=page,
            sort_by=sort_by,
            first_air_date_year=year,
            with_genres=str(genre_id) if genre_id is not None else None,
            vote_average_gte=min_rating,
            vote_count_gte=50 if min_rating else None,
            with_original_language=language,
        )
        return {
            "results": [
                format_tv_result(show, self._tmdb.image_url, include_vote_count=True)
                for show in data.get("results") or []
            ],
            **paginate(data),
            "filters": {
                "year": year,
                "genre": genre,
                "minRating": min_rating,
                "language": language,
                "sortBy": sort_by or DEFAULT_SORT,
            },
        }
