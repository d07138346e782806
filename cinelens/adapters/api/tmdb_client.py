"""
Client TMDB pour la recherche et recuperation de metadonnees films et series.

Implemente l'interface IMetadataCatalog pour TMDB (The Movie Database).
Endpoints REST par ressource, pagination par le parametre "page"
(20 resultats par page, 500 pages au maximum).

Usage:
    client = TMDBClient(api_key="your_token")
    results = await client.search_movies("Avatar", year=2009)
    details = await client.get_movie_details(19995)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from cinelens.adapters.api.retry import DEFAULT_MAX_ATTEMPTS, request_with_retry
from cinelens.core.errors import CatalogError
from cinelens.core.ports.api_clients import CatalogRecord, IMetadataCatalog


class TMDBClient(IMetadataCatalog):
    """
    Client API TMDB pour les metadonnees de films, series et personnes.

    Implemente IMetadataCatalog avec:
    - Recherche (films, series, personnes, multi)
    - Details, generique, fournisseurs de streaming, avis, videos
    - Decouverte par filtres, tendances, recommandations, collections
    - Retry automatique sur erreurs transitoires (408, 429, 5xx)

    TMDB signale ses echecs par le code HTTP accompagne d'un corps
    {"success": false, "status_message": "..."}; _normalize() et _get()
    convertissent ce signal en CatalogError.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base pour les images
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Read Access Token v4 (ou cle API v3)
            timeout: Delai maximum par requete en secondes
            max_attempts: Nombre de tentatives par requete (retry compris)
        """
        self._api_key = api_key
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - Read Access Token v4 (long JWT) : passe en header Bearer
        - API Key v3 (32 caracteres hex) : passe en parametre api_key

        Returns:
            httpx.AsyncClient configure pour l'API TMDB
        """
        if self._client is None or self._client.is_closed:
            # Detecter le type de cle : v3 (32 hex) vs v4 (long JWT)
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    def image_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        """
        Construit l'URL complete d'une image TMDB.

        Args:
            path: Chemin retourne par l'API (ex: "/abc.jpg"), ou None
            size: Taille nommee (w92, w185, w342, w500, w1280, original)

        Returns:
            URL complete, ou None si le chemin est absent
        """
        if not path:
            return None
        return f"{self.TMDB_IMAGE_BASE_URL}/{size}{path}"

    @staticmethod
    def _normalize(data: Any) -> CatalogRecord:
        """Convertit un corps {"success": false} en CatalogError."""
        if not isinstance(data, dict):
            raise CatalogError("tmdb", "Unexpected response format")
        if data.get("success") is False:
            raise CatalogError(
                "tmdb",
                data.get("status_message") or "Unknown error occurred",
                data.get("status_code"),
            )
        return data

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> CatalogRecord:
        """
        Execute une requete GET et normalise la reponse.

        Raises:
            CatalogError: Pour toute reponse 4xx non transitoire (404, 401...)
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}
        logger.debug("Requete TMDB", path=path, params=query)

        try:
            response = await request_with_retry(
                self._get_client(),
                "GET",
                path,
                max_attempts=self._max_attempts,
                params=query,
            )
        except httpx.HTTPStatusError as e:
            try:
                body = e.response.json()
            except ValueError:
                body = {}
            message = body.get("status_message") if isinstance(body, dict) else None
            raise CatalogError(
                "tmdb",
                message or f"HTTP {e.response.status_code}",
                e.response.status_code,
            ) from e

        return self._normalize(response.json())

    # Recherche

    async def search_movies(
        self,
        query: str,
        page: Optional[int] = None,
        year: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche de films par titre (filtre annee optionnel)."""
        return await self._get(
            "/search/movie", {"query": query, "page": page, "year": year}
        )

    async def search_tv(
        self,
        query: str,
        page: Optional[int] = None,
        year: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche de series par titre (filtre sur l'annee de premiere diffusion)."""
        return await self._get(
            "/search/tv",
            {"query": query, "page": page, "first_air_date_year": year},
        )

    async def search_person(self, query: str, page: Optional[int] = None) -> CatalogRecord:
        """Recherche d'acteurs, realisateurs et autres membres d'equipe."""
        return await self._get("/search/person", {"query": query, "page": page})

    async def multi_search(self, query: str, page: Optional[int] = None) -> CatalogRecord:
        """Recherche combinee films, series et personnes."""
        return await self._get("/search/multi", {"query": query, "page": page})

    # Films

    async def get_movie_details(self, movie_id: int) -> CatalogRecord:
        """Details complets d'un film (inclut imdb_id et belongs_to_collection)."""
        return await self._get(f"/movie/{movie_id}")

    async def find_by_imdb_id(self, imdb_id: str) -> CatalogRecord:
        """
        Recherche via l'endpoint /find/{external_id} avec source=imdb_id.

        Returns:
            Reponse brute avec movie_results, tv_results, person_results...
        """
        return await self._get(
            f"/find/{imdb_id}", {"external_source": "imdb_id"}
        )

    async def get_movie_by_imdb_id(self, imdb_id: str) -> Optional[CatalogRecord]:
        """
        Recupere les details complets d'un film via son ID IMDb.

        L'endpoint find ne retourne que des donnees partielles: le premier
        resultat film est relu via get_movie_details.

        Returns:
            Details du film, ou None si aucun film ne correspond
        """
        data = await self.find_by_imdb_id(imdb_id)
        movie_results = data.get("movie_results") or []
        if not movie_results:
            return None
        return await self.get_movie_details(movie_results[0]["id"])

    async def get_movie_credits(self, movie_id: int) -> CatalogRecord:
        """Generique (cast et crew) d'un film."""
        return await self._get(f"/movie/{movie_id}/credits")

    async def get_watch_providers(self, movie_id: int) -> CatalogRecord:
        """Offres de streaming, location et achat par region (donnees JustWatch)."""
        return await self._get(f"/movie/{movie_id}/watch/providers")

    async def get_movie_recommendations(
        self, movie_id: int, page: Optional[int] = None
    ) -> CatalogRecord:
        return await self._get(f"/movie/{movie_id}/recommendations", {"page": page})

    async def get_similar_movies(
        self, movie_id: int, page: Optional[int] = None
    ) -> CatalogRecord:
        return await self._get(f"/movie/{movie_id}/similar", {"page": page})

    async def get_movie_reviews(
        self, movie_id: int, page: Optional[int] = None
    ) -> CatalogRecord:
        return await self._get(f"/movie/{movie_id}/reviews", {"page": page})

    async def get_movie_videos(self, movie_id: int) -> CatalogRecord:
        return await self._get(f"/movie/{movie_id}/videos")

    async def get_now_playing(
        self, region: Optional[str] = None, page: Optional[int] = None
    ) -> CatalogRecord:
        """Films actuellement a l'affiche dans une region."""
        return await self._get("/movie/now_playing", {"region": region, "page": page})

    async def discover_movies(self, **filters: Any) -> CatalogRecord:
        """
        Decouverte de films par filtres.

        Les noms de filtres Python sont traduits vers les cles TMDB
        (ex: vote_average_gte -> vote_average.gte).
        """
        return await self._get("/discover/movie", _discover_params(filters))

    async def get_collection(self, collection_id: int) -> CatalogRecord:
        """Details d'une collection (franchise) et de ses films."""
        return await self._get(f"/collection/{collection_id}")

    # Series

    async def get_tv_details(self, tv_id: int) -> CatalogRecord:
        return await self._get(f"/tv/{tv_id}")

    async def get_tv_recommendations(
        self, tv_id: int, page: Optional[int] = None
    ) -> CatalogRecord:
        return await self._get(f"/tv/{tv_id}/recommendations", {"page": page})

    async def get_similar_tv(self, tv_id: int, page: Optional[int] = None) -> CatalogRecord:
        return await self._get(f"/tv/{tv_id}/similar", {"page": page})

    async def get_tv_reviews(self, tv_id: int, page: Optional[int] = None) -> CatalogRecord:
        return await self._get(f"/tv/{tv_id}/reviews", {"page": page})

    async def get_tv_videos(self, tv_id: int) -> CatalogRecord:
        return await self._get(f"/tv/{tv_id}/videos")

    async def get_airing_today(self, page: Optional[int] = None) -> CatalogRecord:
        """Series dont un episode est diffuse aujourd'hui."""
        return await self._get("/tv/airing_today", {"page": page})

    async def discover_tv(self, **filters: Any) -> CatalogRecord:
        """Decouverte de series par filtres (memes conventions que discover_movies)."""
        return await self._get("/discover/tv", _discover_params(filters))

    # Tendances

    async def get_trending(
        self,
        media_type: str = "all",
        time_window: str = "week",
        page: Optional[int] = None,
    ) -> CatalogRecord:
        """
        Contenus en tendance.

        Args:
            media_type: "movie", "tv" ou "all"
            time_window: "day" ou "week"
            page: Page de resultats
        """
        return await self._get(f"/trending/{media_type}/{time_window}", {"page": page})

    # Personnes

    async def get_person_details(self, person_id: int) -> CatalogRecord:
        return await self._get(f"/person/{person_id}")

    async def get_person_movie_credits(self, person_id: int) -> CatalogRecord:
        """Filmographie d'une personne (participations cast et crew)."""
        return await self._get(f"/person/{person_id}/movie_credits")

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


# Filtres dont le nom TMDB contient un point
_DOTTED_FILTERS = {
    "vote_average_gte": "vote_average.gte",
    "vote_average_lte": "vote_average.lte",
    "vote_count_gte": "vote_count.gte",
    "with_runtime_gte": "with_runtime.gte",
    "with_runtime_lte": "with_runtime.lte",
}


def _discover_params(filters: dict[str, Any]) -> dict[str, Any]:
    """Traduit les filtres de decouverte en parametres de requete TMDB."""
    return {
        _DOTTED_FILTERS.get(name, name): value
        for name, value in filters.items()
        if value is not None
    }
