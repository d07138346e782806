"""
Tests for OMDbClient - OMDb API client implementation.

Uses respx to mock httpx calls and verifies:
- Query parameters sent for each operation (s, i, t, Season, Episode)
- "Response": "False" bodies are turned into CatalogError
- get_all_episodes fetches every season, in order
"""

import httpx
import pytest
import respx

from cinelens.adapters.api.omdb_client import OMDbClient
from cinelens.core.errors import CatalogError
from cinelens.core.ports.api_clients import IRatingsCatalog
from tests.fixtures.omdb_responses import (
    OMDB_EPISODE_RESPONSE,
    OMDB_INVALID_KEY_RESPONSE,
    OMDB_MOVIE_RESPONSE,
    OMDB_NOT_FOUND_RESPONSE,
    OMDB_SEARCH_LOST_RESPONSE,
    OMDB_SERIES_RESPONSE,
    omdb_season_response,
)

OMDB_URL = "https://www.omdbapi.com/"


class TestOMDbClientInterface:
    def test_implements_interface(self, omdb_client: OMDbClient):
        assert isinstance(omdb_client, IRatingsCatalog)

    def test_source_property_returns_omdb(self, omdb_client: OMDbClient):
        assert omdb_client.source == "omdb"

    def test_page_size_is_ten(self, omdb_client: OMDbClient):
        assert omdb_client.PAGE_SIZE == 10


class TestOMDbSearch:
    @pytest.mark.asyncio
    @respx.mock
    async def test_search_series_sends_type_and_key(self, omdb_client: OMDbClient):
        """search_series() passe s, type=series et la cle API."""
        route = respx.get(OMDB_URL).mock(
            return_value=httpx.Response(200, json=OMDB_SEARCH_LOST_RESPONSE)
        )

        data = await omdb_client.search_series("Lost")

        assert data["totalResults"] == "23"
        params = route.calls.last.request.url.params
        assert params["s"] == "Lost"
        assert params["type"] == "series"
        assert params["apikey"] == "omdb_test_key"
        assert "y" not in params
        assert "page" not in params

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_with_year_and_page(self, omdb_client: OMDbClient):
        route = respx.get(OMDB_URL).mock(
            return_value=httpx.Response(200, json=OMDB_SEARCH_LOST_RESPONSE)
        )

        await omdb_client.search("Lost", content_type="series", year="2004", page=2)

        params = route.calls.last.request.url.params
        assert params["y"] == "2004"
        assert params["page"] == "2"

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_not_found_raises_catalog_error(self, omdb_client: OMDbClient):
        """Un corps Response=False leve CatalogError avec le message OMDb."""
        respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_NOT_FOUND_RESPONSE))

        with pytest.raises(CatalogError) as exc_info:
            await omdb_client.search_movies("zzzzzz")

        assert str(exc_info.value) == "Movie not found!"
        assert exc_info.value.catalog == "omdb"


class TestOMDbLookup:
    @pytest.mark.asyncio
    @respx.mock
    async def test_get_by_id_defaults_to_short_plot(self, omdb_client: OMDbClient):
        route = respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_MOVIE_RESPONSE))

        data = await omdb_client.get_by_id("tt0111161")

        assert data["Title"] == "The Shawshank Redemption"
        params = route.calls.last.request.url.params
        assert params["i"] == "tt0111161"
        assert params["plot"] == "short"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_by_title_with_type_and_full_plot(self, omdb_client: OMDbClient):
        route = respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=OMDB_MOVIE_RESPONSE))

        await omdb_client.get_by_title(
            "The Shawshank Redemption", content_type="movie", year="1994", plot="full"
        )

        params = route.calls.last.request.url.params
        assert params["t"] == "The Shawshank Redemption"
        assert params["type"] == "movie"
        assert params["y"] == "1994"
        assert params["plot"] == "full"

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_key_raises_catalog_error(self, omdb_client: OMDbClient):
        respx.get(OMDB_URL).mock(
            return_value=httpx.Response(200, json=OMDB_INVALID_KEY_RESPONSE)
        )

        with pytest.raises(CatalogError, match="Invalid API key!"):
            await omdb_client.get_by_id("tt0111161")

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_episode_params(self, omdb_client: OMDbClient):
        route = respx.get(OMDB_URL).mock(
            return_value=httpx.Response(200, json=OMDB_EPISODE_RESPONSE)
        )

        data = await omdb_client.get_episode("tt0411008", 1, 1)

        assert data["seriesID"] == "tt0411008"
        params = route.calls.last.request.url.params
        assert params["i"] == "tt0411008"
        assert params["Season"] == "1"
        assert params["Episode"] == "1"


class TestOMDbAllEpisodes:
    @pytest.mark.asyncio
    @respx.mock
    async def test_get_all_episodes_returns_seasons_in_order(self, omdb_client: OMDbClient):
        """Une requete serie puis une requete par saison, resultat ordonne."""
        series = {**OMDB_SERIES_RESPONSE, "totalSeasons": "3"}

        def responder(request: httpx.Request) -> httpx.Response:
            season = request.url.params.get("Season")
            if season is None:
                return httpx.Response(200, json=series)
            return httpx.Response(200, json=omdb_season_response(int(season)))

        route = respx.get(OMDB_URL).mock(side_effect=responder)

        seasons = await omdb_client.get_all_episodes("tt0411008")

        assert [s["Season"] for s in seasons] == ["1", "2", "3"]
        assert route.call_count == 4

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_all_episodes_without_season_count(self, omdb_client: OMDbClient):
        series = {**OMDB_SERIES_RESPONSE, "totalSeasons": "N/A"}
        respx.get(OMDB_URL).mock(return_value=httpx.Response(200, json=series))

        with pytest.raises(CatalogError, match="No season information available"):
            await omdb_client.get_all_episodes("tt0411008")

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_all_episodes_fails_if_one_season_fails(self, omdb_client: OMDbClient):
        series = {**OMDB_SERIES_RESPONSE, "totalSeasons": "2"}

        def responder(request: httpx.Request) -> httpx.Response:
            season = request.url.params.get("Season")
            if season is None:
                return httpx.Response(200, json=series)
            if season == "2":
                return httpx.Response(200, json={"Response": "False", "Error": "Series or season not found!"})
            return httpx.Response(200, json=omdb_season_response(1))

        respx.get(OMDB_URL).mock(side_effect=responder)

        with pytest.raises(CatalogError, match="Series or season not found!"):
            await omdb_client.get_all_episodes("tt0411008")


class TestOMDbTransport:
    @pytest.mark.asyncio
    @respx.mock
    async def test_http_401_raises_catalog_error(self, omdb_client: OMDbClient):
        """Le message OMDb est conserve et l'URL (avec la cle) n'apparait pas."""
        respx.get(OMDB_URL).mock(
            return_value=httpx.Response(401, json=OMDB_INVALID_KEY_RESPONSE)
        )

        with pytest.raises(CatalogError) as exc_info:
            await omdb_client.get_by_id("tt0111161")

        assert str(exc_info.value) == "Invalid API key!"
        assert exc_info.value.status_code == 401
        assert "omdb_test_key" not in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_without_body(self, omdb_client: OMDbClient):
        respx.get(OMDB_URL).mock(return_value=httpx.Response(403, text="Forbidden"))

        with pytest.raises(CatalogError, match="^HTTP 403$"):
            await omdb_client.get_by_id("tt0111161")

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = OMDbClient(api_key="k")
        await client.close()
        await client.close()
