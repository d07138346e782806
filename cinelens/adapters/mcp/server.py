"""
Serveur MCP CineLens.

Declare les outils (nom, titre, description, schema d'entree) et les
relie aux services. Chaque appel suit le meme chemin:

1. validation des arguments par le modele pydantic de l'outil
2. appel du service
3. succes -> JSON indente ; echec -> "Error {contexte}: {message}"

Aucune exception ne traverse la frontiere MCP: erreurs de saisie,
erreurs de catalogue et erreurs de transport deviennent toutes des
reponses isError.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx
from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool
from pydantic import ValidationError

from cinelens import __version__
from cinelens.adapters.api.retry import TransientStatusError
from cinelens.adapters.mcp import schemas
from cinelens.adapters.mcp.responses import error_response, success_response
from cinelens.core.errors import CineLensError
from cinelens.services.discovery import DiscoveryService
from cinelens.services.movies import MovieService
from cinelens.services.people import PeopleService
from cinelens.services.series import SeriesService

SERVER_NAME = "cinelens"

ToolHandler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    """
    Declaration d'un outil MCP.

    Attributes:
        name: Nom de l'outil (snake_case)
        title: Titre lisible
        description: Description publiee aux clients
        input_model: Modele pydantic des arguments
        context: Action decrite dans les messages d'erreur ("searching movies")
        handler: Coroutine recevant le modele valide
    """

    name: str
    title: str
    description: str
    input_model: type[schemas.ToolInput]
    context: str
    handler: ToolHandler

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(by_alias=True),
        )


def format_validation_error(error: ValidationError) -> str:
    """Resume une ValidationError pydantic en une ligne: "champ: message; ..."."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "input"
        parts.append(f"{location}: {item.get('msg')}")
    return "Invalid input - " + "; ".join(parts)


def build_tool_specs(
    movies: MovieService,
    series: SeriesService,
    people: PeopleService,
    discovery: DiscoveryService,
) -> list[ToolSpec]:
    """Catalogue complet des outils, relie aux services fournis."""
    return [
        # Recherche
        ToolSpec(
            "search_movies",
            "Search Movies",
            "Search for movies by title. Returns matching movies with year, "
            "overview, TMDB rating and poster.",
            schemas.SearchMoviesInput,
            "searching movies",
            lambda p: movies.search_movies(p.query, year=p.year, page=p.page),
        ),
        ToolSpec(
            "search_series",
            "Search TV Series",
            "Search for TV series by title. Returns a list of matching series with "
            "basic info (title, year, IMDb ID).",
            schemas.SearchSeriesInput,
            "searching series",
            lambda p: series.search_series(p.query, year=p.year, page=p.page),
        ),
        ToolSpec(
            "search_person",
            "Search Person",
            "Search for actors, directors, and other crew members by name. Returns "
            "their TMDB ID (needed for filmography lookup), known department, and "
            "notable works.",
            schemas.SearchPersonInput,
            "searching person",
            lambda p: people.search_person(p.query, page=p.page),
        ),
        ToolSpec(
            "multi_search",
            "Multi Search",
            "Search for movies, TV shows, and people in a single request. Useful "
            "when the kind of content is not known.",
            schemas.MultiSearchInput,
            "performing multi search",
            lambda p: discovery.multi_search(p.query, page=p.page),
        ),
        # Decouverte
        ToolSpec(
            "discover_movies",
            "Discover Movies",
            "Discover movies using filters like genre, year, rating, director, "
            "actor, and language.",
            schemas.DiscoverMoviesInput,
            "discovering movies",
            lambda p: movies.discover_movies(
                year=p.year,
                genre=p.genre,
                min_rating=p.min_rating,
                director_id=p.director_id,
                actor_id=p.actor_id,
                language=p.language,
                sort_by=p.sort_by,
                page=p.page,
            ),
        ),
        ToolSpec(
            "discover_tv",
            "Discover TV Shows",
            "Discover TV shows using filters like genre, first air year, rating, "
            "and language.",
            schemas.DiscoverTvInput,
            "discovering TV shows",
            lambda p: series.discover_tv(
                year=p.year,
                genre=p.genre,
                min_rating=p.min_rating,
                language=p.language,
                sort_by=p.sort_by,
                page=p.page,
            ),
        ),
        ToolSpec(
            "get_trending",
            "Get Trending",
            "Get trending movies and TV shows for the day or the week.",
            schemas.TrendingInput,
            "getting trending",
            lambda p: discovery.get_trending(p.media_type, p.time_window, page=p.page),
        ),
        ToolSpec(
            "get_now_playing",
            "Get Now Playing Movies",
            "Get movies currently playing in theaters. Results are region-specific.",
            schemas.NowPlayingInput,
            "getting now playing movies",
            lambda p: movies.get_now_playing(region=p.region, page=p.page),
        ),
        ToolSpec(
            "get_airing_today",
            "Get TV Airing Today",
            "Get TV shows that have episodes airing today.",
            schemas.AiringTodayInput,
            "getting TV shows airing today",
            lambda p: series.get_airing_today(page=p.page),
        ),
        # Fiches
        ToolSpec(
            "get_movie",
            "Get Movie Details",
            "Get detailed information about a movie by IMDb ID, TMDB ID or title. "
            "Combines OMDb ratings (IMDb, Rotten Tomatoes, Metacritic), box office "
            "and awards with TMDB budget, revenue, genres, images and credits.",
            schemas.GetMovieInput,
            "getting movie details",
            lambda p: movies.get_movie(
                imdb_id=p.imdb_id, tmdb_id=p.tmdb_id, title=p.title, year=p.year, plot=p.plot
            ),
        ),
        ToolSpec(
            "get_series",
            "Get TV Series Details",
            "Get detailed information about a TV series by IMDb ID or title, "
            "including plot, ratings, cast and total seasons.",
            schemas.GetSeriesInput,
            "getting series details",
            lambda p: series.get_series(
                imdb_id=p.imdb_id, title=p.title, year=p.year, plot=p.plot
            ),
        ),
        ToolSpec(
            "get_episode",
            "Get Episode Details",
            "Get detailed information about a TV episode. Requires the series IMDb "
            "ID and season/episode numbers.",
            schemas.GetEpisodeInput,
            "getting episode details",
            lambda p: series.get_episode(p.series_id, p.season, p.episode),
        ),
        ToolSpec(
            "get_season",
            "Get Season Episodes",
            "Get all episodes in a season of a TV series with titles, ratings and "
            "air dates.",
            schemas.GetSeasonInput,
            "getting season",
            lambda p: series.get_season(p.series_id, p.season),
        ),
        ToolSpec(
            "get_all_episodes",
            "Get All Episodes",
            "Get all episodes across all seasons of a TV series. Useful for "
            "analyzing rating trends over time.",
            schemas.GetAllEpisodesInput,
            "getting all episodes",
            lambda p: series.get_all_episodes(p.series_id),
        ),
        # Films et series lies
        ToolSpec(
            "get_where_to_watch",
            "Get Where to Watch",
            "Find streaming, rental, and purchase options for a movie in a region. "
            "Powered by JustWatch data via TMDB.",
            schemas.WhereToWatchInput,
            "getting watch providers",
            lambda p: movies.get_where_to_watch(
                tmdb_id=p.tmdb_id, imdb_id=p.imdb_id, title=p.title, region=p.region
            ),
        ),
        ToolSpec(
            "get_movie_recommendations",
            "Get Movie Recommendations",
            "Get movie recommendations based on a movie, using TMDB's "
            "recommendation algorithm.",
            schemas.MovieRecommendationsInput,
            "getting movie recommendations",
            lambda p: movies.get_movie_recommendations(
                tmdb_id=p.tmdb_id, imdb_id=p.imdb_id, title=p.title, year=p.year, page=p.page
            ),
        ),
        ToolSpec(
            "get_tv_recommendations",
            "Get TV Recommendations",
            "Get TV series recommendations based on a show.",
            schemas.TvRecommendationsInput,
            "getting TV recommendations",
            lambda p: series.get_tv_recommendations(
                tmdb_id=p.tmdb_id, title=p.title, year=p.year, page=p.page
            ),
        ),
        ToolSpec(
            "get_similar",
            "Get Similar",
            "Get movies or TV shows similar by genres and keywords. Different from "
            "recommendations, which use TMDB's recommendation algorithm.",
            schemas.SimilarInput,
            "getting similar content",
            lambda p: discovery.get_similar(movie_id=p.movie_id, tv_id=p.tv_id, page=p.page),
        ),
        ToolSpec(
            "get_collection",
            "Get Movie Collection",
            "Get all movies in a collection/franchise, by collection ID or from a "
            "movie belonging to it.",
            schemas.CollectionInput,
            "getting collection",
            lambda p: movies.get_collection(
                collection_id=p.collection_id,
                movie_tmdb_id=p.movie_tmdb_id,
                movie_title=p.movie_title,
            ),
        ),
        ToolSpec(
            "get_reviews",
            "Get Reviews",
            "Get user reviews for movies or TV shows from the TMDB community.",
            schemas.ReviewsInput,
            "getting reviews",
            lambda p: discovery.get_reviews(movie_id=p.movie_id, tv_id=p.tv_id, page=p.page),
        ),
        ToolSpec(
            "get_videos",
            "Get Videos",
            "Get trailers, teasers, clips, and behind-the-scenes videos for movies "
            "and TV shows. Returns YouTube/Vimeo links.",
            schemas.VideosInput,
            "getting videos",
            lambda p: discovery.get_videos(
                movie_id=p.movie_id, tv_id=p.tv_id, video_type=p.type
            ),
        ),
        # Personnes
        ToolSpec(
            "get_filmography",
            "Get Filmography",
            "Get a person's filmography. Use search_person first to get the TMDB "
            "person ID.",
            schemas.FilmographyInput,
            "getting filmography",
            lambda p: people.get_filmography(
                p.person_id, role=p.role, sort_by=p.sort_by, limit=p.limit
            ),
        ),
        ToolSpec(
            "get_person_details",
            "Get Person Details",
            "Get biography, birthday, place of birth and profile image of an actor, "
            "director, or other crew member. Use search_person first to get the "
            "TMDB person ID.",
            schemas.PersonDetailsInput,
            "getting person details",
            lambda p: people.get_person_details(p.person_id),
        ),
    ]


class CineLensServer:
    """
    Serveur MCP exposant les outils CineLens.

    Example:
        server = CineLensServer(movies, series, people, discovery)
        await server.run_stdio()
    """

    def __init__(
        self,
        movies: MovieService,
        series: SeriesService,
        people: PeopleService,
        discovery: DiscoveryService,
        name: str = SERVER_NAME,
    ) -> None:
        self._tools = {
            spec.name: spec for spec in build_tool_specs(movies, series, people, discovery)
        }
        self.server = Server(name, version=__version__)
        self.server.list_tools()(self.list_tools)
        # Les arguments sont valides par les modeles pydantic de chaque outil
        self.server.call_tool(validate_input=False)(self.call_tool)

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    async def list_tools(self) -> list[Tool]:
        return [spec.to_tool() for spec in self._tools.values()]

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> CallToolResult:
        """
        Execute un outil et retourne sa reponse MCP.

        Ne leve jamais: toute erreur est convertie en reponse isError.
        """
        spec = self._tools.get(name)
        if spec is None:
            logger.warning("Outil inconnu", tool=name)
            return error_response("calling tool", ValueError(f"Unknown tool: {name}"))

        try:
            params = spec.input_model.model_validate(arguments or {})
        except ValidationError as e:
            logger.info("Arguments invalides", tool=name, errors=e.error_count())
            return error_response(spec.context, ValueError(format_validation_error(e)))

        logger.debug("Appel d'outil", tool=name, arguments=arguments)
        try:
            data = await spec.handler(params)
        except (CineLensError, TransientStatusError, httpx.HTTPError) as e:
            logger.warning("Echec d'outil", tool=name, error_type=type(e).__name__, error=str(e))
            return error_response(spec.context, e)
        except Exception as e:
            logger.exception("Erreur inattendue", tool=name)
            return error_response(spec.context, e)

        return success_response(data)

    async def run_stdio(self) -> None:
        """Sert les outils sur stdin/stdout jusqu'a la fermeture du flux."""
        logger.info("Demarrage du serveur MCP", name=self.server.name, tools=len(self._tools))
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
