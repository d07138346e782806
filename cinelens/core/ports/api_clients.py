"""
Interfaces ports pour les clients des catalogues externes.

Deux catalogues sont consommes:
- IRatingsCatalog : notes agregees, intrigue, recompenses (OMDb)
- IMetadataCatalog : metadonnees structurees, images, generique (TMDB)

Les reponses sont manipulees sous forme de CatalogRecord (dictionnaire JSON brut):
seuls les champs effectivement utilises sont lus par les formatters.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

CatalogRecord = dict[str, Any]


class IRatingsCatalog(ABC):
    """
    Interface du catalogue de notes (cle de liaison: identifiant IMDb).

    Pagination fixe de 10 resultats par page, recherche et filtre de type
    combines dans une seule requete.
    """

    PAGE_SIZE = 10

    @abstractmethod
    async def search(
        self,
        query: str,
        content_type: Optional[str] = None,
        year: Optional[str] = None,
        page: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche par titre, filtree par type ("movie", "series", "episode")."""
        ...

    @abstractmethod
    async def get_by_id(self, imdb_id: str, plot: Optional[str] = None) -> CatalogRecord:
        """Recupere un titre par son identifiant IMDb."""
        ...

    @abstractmethod
    async def get_by_title(
        self,
        title: str,
        content_type: Optional[str] = None,
        year: Optional[str] = None,
        plot: Optional[str] = None,
    ) -> CatalogRecord:
        """Recupere le titre correspondant le mieux a un titre exact."""
        ...

    @abstractmethod
    async def get_episode(self, series_id: str, season: int, episode: int) -> CatalogRecord:
        """Recupere un episode d'une serie."""
        ...

    @abstractmethod
    async def get_season(self, series_id: str, season: int) -> CatalogRecord:
        """Recupere la liste des episodes d'une saison."""
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'omdb')."""
        ...


class IMetadataCatalog(ABC):
    """
    Interface du catalogue de metadonnees (identifiant numerique natif).

    Pagination de 20 resultats par page, un endpoint par type de contenu.
    """

    PAGE_SIZE = 20

    @abstractmethod
    async def search_movies(
        self,
        query: str,
        page: Optional[int] = None,
        year: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche de films par titre."""
        ...

    @abstractmethod
    async def search_tv(
        self,
        query: str,
        page: Optional[int] = None,
        year: Optional[int] = None,
    ) -> CatalogRecord:
        """Recherche de series par titre."""
        ...

    @abstractmethod
    async def get_movie_details(self, movie_id: int) -> CatalogRecord:
        """Details complets d'un film."""
        ...

    @abstractmethod
    async def get_movie_by_imdb_id(self, imdb_id: str) -> Optional[CatalogRecord]:
        """Details complets d'un film retrouve par son ID IMDb, ou None."""
        ...

    @abstractmethod
    async def get_tv_details(self, tv_id: int) -> CatalogRecord:
        """Details complets d'une serie."""
        ...

    @abstractmethod
    def image_url(self, path: Optional[str], size: str = "w500") -> Optional[str]:
        """Construit l'URL complete d'une image, None si le chemin est absent."""
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...
