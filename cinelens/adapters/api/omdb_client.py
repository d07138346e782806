"""
Client OMDb pour les notes agregees, intrigues et recompenses.

Implemente l'interface IRatingsCatalog pour OMDb (Open Movie Database).
Un seul endpoint GET: l'operation est choisie par les parametres de requete
(s = recherche, i = identifiant IMDb, t = titre, Season/Episode).

Usage:
    client = OMDbClient(api_key="your_key")
    results = await client.search("Lost", content_type="series")
    details = await client.get_by_id("tt0411008")
    await client.close()
"""

import asyncio
from typing import Any, Optional

import httpx
from loguru import logger

from cinelens.adapters.api.retry import DEFAULT_MAX_ATTEMPTS, request_with_retry
from cinelens.core.errors import CatalogError
from cinelens.core.ports.api_clients import CatalogRecord, IRatingsCatalog


class OMDbClient(IRatingsCatalog):
    """
    Client API OMDb.

    Implemente IRatingsCatalog avec:
    - Recherche par titre, filtree par type (10 resultats par page)
    - Recuperation par ID IMDb ou par titre exact
    - Episodes et saisons de series
    - Retry automatique sur erreurs transitoires (408, 429, 5xx)

    OMDb signale ses echecs dans le corps de la reponse (HTTP 200):
    "Response": "False" accompagne d'un champ "Error". Ces reponses sont
    converties en CatalogError par _normalize().

    Attributes:
        OMDB_BASE_URL: URL de l'endpoint unique OMDb
    """

    OMDB_BASE_URL = "https://www.omdbapi.com/"

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """
        Initialise le client OMDb.

        Args:
            api_key: Cle API OMDb
            timeout: Delai maximum par requete en secondes
            max_attempts: Nombre de tentatives par requete (retry compris)
        """
        self._api_key = api_key
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                params={"apikey": self._api_key},
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "omdb"

    @staticmethod
    def _normalize(data: Any) -> CatalogRecord:
        """
        Convertit le signal d'echec OMDb en CatalogError.

        Args:
            data: Corps JSON decode de la reponse

        Returns:
            Le corps inchange si la reponse signale un succes

        Raises:
            CatalogError: Si "Response" vaut "False"
        """
        if not isinstance(data, dict):
            raise CatalogError("omdb", "Unexpected response format")
        if data.get("Response") == "False":
            raise CatalogError("omdb", data.get("Error") or "Unknown error occurred")
        return data

    async def _get(self, params: dict[str, Any]) -> CatalogRecord:
        """
        Execute la requete GET unique et normalise la reponse.

        Raises:
            CatalogError: Pour un corps en echec ou une reponse 4xx non
                transitoire (cle invalide, quota atteint...)
        """
        # Les valeurs None ne sont pas transmises a OMDb
        query = {key: value for key, value in params.items() if value is not None}
        logger.debug("Requete OMDb", params=query)

        try:
            response = await request_with_retry(
                self._get_client(),
                "GET",
                self.OMDB_BASE_URL,
                max_attempts=self._max_attempts,
                params=query,
            )
        except httpx.HTTPStatusError as e:
            # Le message httpx contient l'URL, donc la cle API: il n'est pas repris
            try:
                body = e.response.json()
            except ValueError:
                body = {}
            message = body.get("Error") if isinstance(body, dict) else None
            raise CatalogError(
                "omdb",
                message or f"HTTP {e.response.status_code}",
                e.response.status_code,
            ) from None

        return self._normalize(response.json())

    async def search(
        self,
        query: str,
        content_type: Optional[str] = None,
        year: Optional[str] = None,
        page: Optional[int] = None,
    ) -> CatalogRecord:
        """
        Recherche des titres par nom.

        Args:
            query: Titre a rechercher
            content_type: "movie", "series" ou "episode"
            year: Annee de sortie optionnelle
            page: Page de resultats (1-100, 10 resultats par page)

        Returns:
            Reponse brute avec "Search" et "totalResults"
        """
        return await self._get(
            {"s": query, "type": content_type, "y": year, "page": page}
        )

    async def search_movies(
        self,
        query: str,
        year: Optional[str] = None,
        page: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche restreinte aux films."""
        return await self.search(query, content_type="movie", year=year, page=page)

    async def search_series(
        self,
        query: str,
        year: Optional[str] = None,
        page: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche restreinte aux series."""
        return await self.search(query, content_type="series", year=year, page=page)

    async def get_by_id(self, imdb_id: str, plot: Optional[str] = None) -> CatalogRecord:
        """
        Recupere un film, une serie ou un episode par son ID IMDb.

        Args:
            imdb_id: ID IMDb (format ttXXXXXXX)
            plot: "short" (defaut) ou "full"
        """
        return await self._get({"i": imdb_id, "plot": plot or "short"})

    async def get_by_title(
        self,
        title: str,
        content_type: Optional[str] = None,
        year: Optional[str] = None,
        plot: Optional[str] = None,
    ) -> CatalogRecord:
        """
        Recupere le titre correspondant a un nom exact.

        Args:
            title: Titre exact
            content_type: "movie", "series" ou "episode"
            year: Annee pour lever les ambiguites
            plot: "short" (defaut) ou "full"
        """
        return await self._get(
            {"t": title, "type": content_type, "y": year, "plot": plot or "short"}
        )

    async def get_episode(self, series_id: str, season: int, episode: int) -> CatalogRecord:
        """Recupere un episode a partir de l'ID IMDb de la serie."""
        return await self._get({"i": series_id, "Season": season, "Episode": episode})

    async def get_season(self, series_id: str, season: int) -> CatalogRecord:
        """Recupere tous les episodes d'une saison."""
        return await self._get({"i": series_id, "Season": season})

    async def get_all_episodes(self, series_id: str) -> list[CatalogRecord]:
        """
        Recupere toutes les saisons d'une serie.

        Lit d'abord le nombre de saisons de la serie, puis lance une requete
        par saison en parallele. Les saisons sont retournees dans l'ordre;
        l'echec d'une seule requete fait echouer l'ensemble.

        Args:
            series_id: ID IMDb de la serie

        Returns:
            Liste des reponses de saison, saison 1 en premier

        Raises:
            CatalogError: Si la serie n'indique pas de nombre de saisons
        """
        series = await self.get_by_id(series_id)
        try:
            total_seasons = int(series.get("totalSeasons") or "")
        except ValueError:
            raise CatalogError(
                "omdb", f"No season information available for {series_id}"
            ) from None

        return list(
            await asyncio.gather(
                *(self.get_season(series_id, season) for season in range(1, total_seasons + 1))
            )
        )

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
