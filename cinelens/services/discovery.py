"""
Operations transverses films/series: recherche multiple, tendances,
contenus similaires, critiques et videos.

Les operations similaires, critiques et videos acceptent un ID de film ou
un ID de serie; l'ID de film est prioritaire quand les deux sont fournis.
"""

import asyncio
from typing import Any, Optional

from cinelens.adapters.api.tmdb_client import TMDBClient
from cinelens.services.formatters import (
    cap_total_pages,
    format_movie_result,
    format_multi_search_result,
    format_review,
    format_trending_result,
    format_tv_result,
    format_video,
    paginate,
)
from cinelens.services.resolver import require_at_least_one

_BY_TYPE_GROUPS = (("movies", "movie"), ("tvShows", "tv"), ("people", "person"))


class DiscoveryService:
    """Operations de decouverte exposees comme outils."""

    def __init__(self, tmdb_client: TMDBClient) -> None:
        self._tmdb = tmdb_client

    async def multi_search(self, query: str, page: Optional[int] = None) -> dict[str, Any]:
        """
        Recherche simultanee de films, series et personnes.

        Les resultats sont aussi regroupes par type; un groupe vide est omis.
        """
        data = await self._tmdb.multi_search(query, page=page)
        results = [
            format_multi_search_result(item, self._tmdb.image_url)
            for item in data.get("results") or []
        ]
        by_type = {}
        for group, media_type in _BY_TYPE_GROUPS:
            members = [r for r in results if r["mediaType"] == media_type]
            if members:
                by_type[group] = members
        return {"query": query, "results": results, "byType": by_type, **paginate(data)}

    async def get_trending(
        self,
        media_type: str = "all",
        time_window: str = "week",
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        data = await self._tmdb.get_trending(media_type, time_window, page=page)
        return {
            "results": [
                format_trending_result(item, self._tmdb.image_url)
                for item in data.get("results") or []
            ],
            **paginate(data),
            "filters": {"mediaType": media_type, "timeWindow": time_window},
        }

    async def get_similar(
        self,
        movie_id: Optional[int] = None,
        tv_id: Optional[int] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """Contenus similaires, avec le titre et les genres de la reference."""
        require_at_least_one(movieId=movie_id, tvId=tv_id)

        if movie_id is not None:
            similar, details = await asyncio.gather(
                self._tmdb.get_similar_movies(movie_id, page=page),
                self._tmdb.get_movie_details(movie_id),
            )
            return {
                "mediaType": "movie",
                "basedOn": {
                    "tmdbId": details.get("id"),
                    "title": details.get("title"),
                    "genres": [g.get("name") for g in details.get("genres") or []],
                },
                "similar": [
                    format_movie_result(m, self._tmdb.image_url, include_vote_count=True)
                    for m in similar.get("results") or []
                ],
                **paginate(similar),
            }

        similar, details = await asyncio.gather(
            self._tmdb.get_similar_tv(tv_id, page=page),
            self._tmdb.get_tv_details(tv_id),
        )
        return {
            "mediaType": "tv",
            "basedOn": {
                "tmdbId": details.get("id"),
                "name": details.get("name"),
                "genres": [g.get("name") for g in details.get("genres") or []],
            },
            "similar": [
                format_tv_result(s, self._tmdb.image_url, include_vote_count=True)
                for s in similar.get("results") or []
            ],
            **paginate(similar),
        }

    async def get_reviews(
        self,
        movie_id: Optional[int] = None,
        tv_id: Optional[int] = None,
        page: Optional[int] = None,
    ) -> dict[str, Any]:
        """Critiques d'utilisateurs TMDB; le contenu est tronque a 1000 caracteres."""
        require_at_least_one(movieId=movie_id, tvId=tv_id)

        if movie_id is not None:
            reviews, details = await asyncio.gather(
                self._tmdb.get_movie_reviews(movie_id, page=page),
                self._tmdb.get_movie_details(movie_id),
            )
            media_type, title, media_id = "movie", details.get("title"), movie_id
        else:
            reviews, details = await asyncio.gather(
                self._tmdb.get_tv_reviews(tv_id, page=page),
                self._tmdb.get_tv_details(tv_id),
            )
            media_type, title, media_id = "tv", details.get("name"), tv_id

        return {
            "mediaType": media_type,
            "mediaTitle": title,
            "mediaId": media_id,
            "reviews": [format_review(r) for r in reviews.get("results") or []],
            "totalReviews": reviews.get("total_results", 0),
            "page": reviews.get("page", 1),
            "totalPages": cap_total_pages(reviews.get("total_pages")),
        }

    async def get_videos(
        self,
        movie_id: Optional[int] = None,
        tv_id: Optional[int] = None,
        video_type: str = "all",
    ) -> dict[str, Any]:
        """
        Bandes-annonces, teasers et bonus.

        Les videos officielles passent en premier, puis les plus recentes.
        """
        require_at_least_one(movieId=movie_id, tvId=tv_id)

        if movie_id is not None:
            response, details = await asyncio.gather(
                self._tmdb.get_movie_videos(movie_id),
                self._tmdb.get_movie_details(movie_id),
            )
            media_type, title, media_id = "movie", details.get("title"), movie_id
        else:
            response, details = await asyncio.gather(
                self._tmdb.get_tv_videos(tv_id),
                self._tmdb.get_tv_details(tv_id),
            )
            media_type, title, media_id = "tv", details.get("name"), tv_id

        videos = list(response.get("results") or [])
        if video_type != "all":
            videos = [v for v in videos if v.get("type") == video_type]
        videos.sort(key=lambda v: v.get("published_at") or "", reverse=True)
        videos.sort(key=lambda v: not v.get("official"))

        return {
            "mediaType": media_type,
            "mediaTitle": title,
            "mediaId": media_id,
            "videos": [format_video(v) for v in videos],
            "totalVideos": len(videos),
            "filter": video_type,
        }
