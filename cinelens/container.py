"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances du serveur MCP:
configuration, clients des catalogues, services et serveur.
"""

from dependency_injector import containers, providers

from .adapters.api.omdb_client import OMDbClient
from .adapters.api.tmdb_client import TMDBClient
from .adapters.mcp.server import CineLensServer
from .config import Settings
from .services.discovery import DiscoveryService
from .services.merge import MovieMergeService
from .services.movies import MovieService
from .services.people import PeopleService
from .services.resolver import EntityResolver
from .services.series import SeriesService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        server = container.mcp_server()
        await server.run_stdio()
        await container.omdb_client().close()
        await container.tmdb_client().close()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Clients API - Singleton: un client HTTP partage par catalogue
    omdb_client = providers.Singleton(
        OMDbClient,
        api_key=config.provided.omdb_api_key,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.max_attempts,
    )

    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.max_attempts,
    )

    # Services (stateless - Singletons)
    resolver = providers.Singleton(EntityResolver, tmdb_client=tmdb_client)

    movie_merge_service = providers.Singleton(
        MovieMergeService,
        omdb_client=omdb_client,
        tmdb_client=tmdb_client,
    )

    movie_service = providers.Singleton(
        MovieService,
        tmdb_client=tmdb_client,
        resolver=resolver,
        merger=movie_merge_service,
        default_region=config.provided.default_region,
    )

    series_service = providers.Singleton(
        SeriesService,
        omdb_client=omdb_client,
        tmdb_client=tmdb_client,
        resolver=resolver,
    )

    people_service = providers.Singleton(PeopleService, tmdb_client=tmdb_client)

    discovery_service = providers.Singleton(DiscoveryService, tmdb_client=tmdb_client)

    # Serveur MCP
    mcp_server = providers.Singleton(
        CineLensServer,
        movies=movie_service,
        series=series_service,
        people=people_service,
        discovery=discovery_service,
    )
