"""
Modeles d'entree des outils MCP.

Chaque outil declare un modele pydantic dont le schema JSON (noms en
camelCase) est publie aux clients MCP. Les bornes (pages, limites) et les
valeurs enumerees sont verifiees ici, avant tout appel de service.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# TMDB refuse les pages au-dela de 500, OMDb au-dela de 100
TMDB_MAX_PAGE = 500
OMDB_MAX_PAGE = 100

PlotLength = Literal["short", "full"]


class ToolInput(BaseModel):
    """Base des modeles d'entree: alias camelCase, noms Python acceptes aussi."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _tmdb_page():
    return Field(
        default=None, ge=1, le=TMDB_MAX_PAGE, description="Page number for pagination (1-500)"
    )


# --- Recherche ---


class SearchMoviesInput(ToolInput):
    query: str = Field(description="Movie title to search for")
    year: Optional[int] = Field(default=None, description="Filter results by release year")
    page: Optional[int] = _tmdb_page()


class SearchSeriesInput(ToolInput):
    query: str = Field(description="TV series title to search for")
    year: Optional[int] = Field(default=None, description="Filter results by release year")
    page: Optional[int] = Field(
        default=None,
        ge=1,
        le=OMDB_MAX_PAGE,
        description="Page number for pagination (1-100, 10 results per page)",
    )


class SearchPersonInput(ToolInput):
    query: str = Field(description="Name of the actor, director or crew member")
    page: Optional[int] = _tmdb_page()


class MultiSearchInput(ToolInput):
    query: str = Field(description="Search query matched against movies, TV shows and people")
    page: Optional[int] = _tmdb_page()


# --- Decouverte ---


class DiscoverMoviesInput(ToolInput):
    year: Optional[int] = Field(default=None, description="Primary release year")
    genre: Optional[str] = Field(
        default=None, description="Genre name (e.g. 'action', 'comedy', 'sci-fi')"
    )
    min_rating: Optional[float] = Field(
        default=None, ge=0, le=10, description="Minimum TMDB rating (0-10)"
    )
    director_id: Optional[int] = Field(default=None, description="TMDB person ID of a director")
    actor_id: Optional[int] = Field(default=None, description="TMDB person ID of an actor")
    language: Optional[str] = Field(
        default=None, description="Original language as ISO 639-1 code (e.g. 'en', 'fr')"
    )
    sort_by: Optional[
        Literal[
            "popularity.desc",
            "popularity.asc",
            "vote_average.desc",
            "vote_average.asc",
            "primary_release_date.desc",
            "primary_release_date.asc",
            "revenue.desc",
        ]
    ] = Field(default=None, description="Sort order (default: popularity.desc)")
    page: Optional[int] = _tmdb_page()


class DiscoverTvInput(ToolInput):
    year: Optional[int] = Field(default=None, description="First air date year")
    genre: Optional[str] = Field(
        default=None, description="Genre name (e.g. 'drama', 'animation', 'sci-fi')"
    )
    min_rating: Optional[float] = Field(
        default=None, ge=0, le=10, description="Minimum TMDB rating (0-10)"
    )
    language: Optional[str] = Field(
        default=None, description="Original language as ISO 639-1 code"
    )
    sort_by: Optional[
        Literal[
            "popularity.desc",
            "popularity.asc",
            "vote_average.desc",
            "vote_average.asc",
            "first_air_date.desc",
            "first_air_date.asc",
        ]
    ] = Field(default=None, description="Sort order (default: popularity.desc)")
    page: Optional[int] = _tmdb_page()


class TrendingInput(ToolInput):
    media_type: Literal["movie", "tv", "all"] = Field(
        default="all", description="Type of content"
    )
    time_window: Literal["day", "week"] = Field(default="week", description="Trending window")
    page: Optional[int] = _tmdb_page()


class NowPlayingInput(ToolInput):
    region: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=2,
        description="ISO 3166-1 region code (default: US)",
    )
    page: Optional[int] = _tmdb_page()


class AiringTodayInput(ToolInput):
    page: Optional[int] = _tmdb_page()


# --- Fiches ---


class GetMovieInput(ToolInput):
    imdb_id: Optional[str] = Field(
        default=None, description="IMDb ID of the movie (e.g. 'tt0111161')"
    )
    tmdb_id: Optional[int] = Field(default=None, description="TMDB ID of the movie")
    title: Optional[str] = Field(default=None, description="Exact title of the movie")
    year: Optional[int] = Field(default=None, description="Release year to disambiguate titles")
    plot: Optional[PlotLength] = Field(
        default=None, description="Plot length: 'short' (default) or 'full'"
    )


class GetSeriesInput(ToolInput):
    imdb_id: Optional[str] = Field(
        default=None, description="IMDb ID of the series (e.g. 'tt0903747')"
    )
    title: Optional[str] = Field(default=None, description="Exact title of the series")
    year: Optional[int] = Field(default=None, description="Release year to disambiguate titles")
    plot: Optional[PlotLength] = Field(
        default=None, description="Plot length: 'short' (default) or 'full'"
    )


class GetEpisodeInput(ToolInput):
    series_id: str = Field(description="IMDb ID of the TV series (e.g. 'tt0903747')")
    season: int = Field(ge=1, description="Season number")
    episode: int = Field(ge=1, description="Episode number")


class GetSeasonInput(ToolInput):
    series_id: str = Field(description="IMDb ID of the TV series (e.g. 'tt0411008')")
    season: int = Field(ge=1, description="Season number")


class GetAllEpisodesInput(ToolInput):
    series_id: str = Field(description="IMDb ID of the TV series (e.g. 'tt0411008')")


# --- Films lies ---


class WhereToWatchInput(ToolInput):
    tmdb_id: Optional[int] = Field(default=None, description="TMDB ID of the movie")
    imdb_id: Optional[str] = Field(default=None, description="IMDb ID of the movie")
    title: Optional[str] = Field(default=None, description="Movie title")
    region: Optional[str] = Field(
        default=None,
        min_length=2,
        max_length=2,
        description="ISO 3166-1 region code (default: US)",
    )


class MovieRecommendationsInput(ToolInput):
    tmdb_id: Optional[int] = Field(default=None, description="TMDB ID of the source movie")
    imdb_id: Optional[str] = Field(default=None, description="IMDb ID of the source movie")
    title: Optional[str] = Field(default=None, description="Title of the source movie")
    year: Optional[int] = Field(default=None, description="Release year of the source movie")
    page: Optional[int] = _tmdb_page()


class TvRecommendationsInput(ToolInput):
    tmdb_id: Optional[int] = Field(default=None, description="TMDB ID of the source show")
    title: Optional[str] = Field(default=None, description="Title of the source show")
    year: Optional[int] = Field(default=None, description="First air year of the source show")
    page: Optional[int] = _tmdb_page()


class MediaIdInput(ToolInput):
    movie_id: Optional[int] = Field(default=None, description="TMDB ID of a movie")
    tv_id: Optional[int] = Field(default=None, description="TMDB ID of a TV show")


class SimilarInput(MediaIdInput):
    page: Optional[int] = _tmdb_page()


class ReviewsInput(MediaIdInput):
    page: Optional[int] = _tmdb_page()


class VideosInput(MediaIdInput):
    type: Literal[
        "all", "Trailer", "Teaser", "Clip", "Featurette", "Behind the Scenes", "Bloopers"
    ] = Field(default="all", description="Type of video to keep")


class CollectionInput(ToolInput):
    collection_id: Optional[int] = Field(default=None, description="TMDB collection ID")
    movie_tmdb_id: Optional[int] = Field(
        default=None, description="TMDB ID of a movie belonging to the collection"
    )
    movie_title: Optional[str] = Field(
        default=None, description="Title of a movie belonging to the collection"
    )


# --- Personnes ---


class FilmographyInput(ToolInput):
    person_id: int = Field(description="TMDB person ID")
    role: Literal["all", "actor", "director", "writer", "producer"] = Field(
        default="all", description="Filter by role"
    )
    sort_by: Literal["date", "rating", "title"] = Field(
        default="date", description="Sort order: newest first, best rated first, or title"
    )
    limit: int = Field(default=50, ge=1, le=100, description="Maximum number of movies")


class PersonDetailsInput(ToolInput):
    person_id: int = Field(description="TMDB person ID")
