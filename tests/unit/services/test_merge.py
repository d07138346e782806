"""
Tests unitaires de la vue film combinee OMDb + TMDB.

Verifie:
- le repli du generique par personne (roles cumules, sans doublon)
- la vue OMDb seule quand TMDB ne connait pas le film
- le refus d'une fiche OMDb qui n'est pas un film
- l'ordre de recherche OMDb (ID IMDb, ID TMDB, titre)
"""

from unittest.mock import MagicMock

import pytest

from cinelens.core.errors import CatalogError, EntityNotFoundError, TypeMismatchError
from cinelens.services.merge import (
    MergedMovieView,
    MovieMergeService,
    credits_breakdown,
    fold_credits,
    select_credit_rows,
)
from cinelens.services.resolver import MovieLookup
from tests.fixtures.omdb_responses import OMDB_MOVIE_RESPONSE, OMDB_SERIES_RESPONSE
from tests.fixtures.tmdb_responses import (
    TMDB_FIND_EMPTY_RESPONSE,
    TMDB_FIND_RESPONSE,
    TMDB_MOVIE_CREDITS_RESPONSE,
    TMDB_MOVIE_DETAILS_RESPONSE,
)


def image_url(path, size="w500"):
    return f"https://image.tmdb.org/t/p/{size}{path}" if path else None


@pytest.fixture
def merger(mock_omdb: MagicMock, mock_tmdb: MagicMock) -> MovieMergeService:
    return MovieMergeService(mock_omdb, mock_tmdb)


class TestFoldCredits:
    def test_same_person_folded_with_all_roles(self):
        entries = fold_credits(select_credit_rows(TMDB_MOVIE_CREDITS_RESPONSE))
        darabont = [e for e in entries if e.person_id == 4027]

        assert len(darabont) == 1
        assert darabont[0].roles == ["Director", "Screenplay"]

    def test_actor_and_writer_folded_into_one_entry(self):
        credits = {
            "cast": [{"id": 7, "name": "Sylvester Stallone", "character": "X", "order": 0}],
            "crew": [
                {"id": 7, "name": "Sylvester Stallone", "job": "Screenplay", "department": "Writing"}
            ],
        }

        entries = fold_credits(select_credit_rows(credits))

        assert len(entries) == 1
        assert entries[0].person_id == 7
        assert entries[0].roles == ["Actor (X)", "Screenplay"]

    def test_no_duplicate_person_ids(self):
        entries = fold_credits(select_credit_rows(TMDB_MOVIE_CREDITS_RESPONSE))
        ids = [e.person_id for e in entries]

        assert len(ids) == len(set(ids))

    def test_duplicate_role_not_repeated(self):
        row = {"id": 1, "name": "A"}
        entries = fold_credits([(row, "Producer"), (row, "Producer")])

        assert entries[0].roles == ["Producer"]

    def test_cast_label_with_missing_character(self):
        entries = fold_credits(select_credit_rows(TMDB_MOVIE_CREDITS_RESPONSE))
        cameo = next(e for e in entries if e.person_id == 4029)

        assert cameo.roles == ["Actor (N/A)"]

    def test_unrelated_crew_jobs_are_dropped(self):
        rows = select_credit_rows(TMDB_MOVIE_CREDITS_RESPONSE)

        assert all(row.get("job") != "Key Grip" for row, _ in rows)

    def test_profile_url_uses_thumbnail_size(self):
        entries = fold_credits(select_credit_rows(TMDB_MOVIE_CREDITS_RESPONSE), image_url)

        assert entries[0].profile_url == (
            "https://image.tmdb.org/t/p/w185/djLVFETFTvPyVUdrd7aLVykobof.jpg"
        )


class TestCreditsBreakdown:
    def test_breakdown_lists(self):
        result = credits_breakdown(TMDB_MOVIE_CREDITS_RESPONSE, image_url)

        assert result["directors"] == ["Frank Darabont"]
        assert result["writers"] == ["Frank Darabont", "Stephen King"]
        assert result["producers"] == ["Niki Marvin"]
        assert result["composers"] == ["Thomas Newman"]
        assert result["cinematographers"] == ["Roger Deakins"]
        assert [c["name"] for c in result["cast"]][:2] == ["Tim Robbins", "Morgan Freeman"]


class TestMergedMovieView:
    def test_omdb_only_view_has_null_tmdb_fields(self):
        view = MergedMovieView(ratings=OMDB_MOVIE_RESPONSE)

        result = view.to_dict(image_url)

        assert result["imdbRating"] == "9.3"
        assert result["boxOffice"] == "$28,767,189"
        for key in ("tmdbId", "budget", "revenue", "genres", "posterUrl", "credits"):
            assert result[key] is None
        assert "warnings" not in result

    def test_full_view(self):
        view = MergedMovieView(
            ratings=OMDB_MOVIE_RESPONSE,
            metadata=TMDB_MOVIE_DETAILS_RESPONSE,
            credits=TMDB_MOVIE_CREDITS_RESPONSE,
        )

        result = view.to_dict(image_url)

        assert result["tmdbId"] == 278
        assert result["budget"] == 25000000
        assert result["genres"] == ["Drama", "Crime"]
        assert result["productionCompanies"] == ["Castle Rock Entertainment"]
        assert result["posterUrl"].startswith("https://image.tmdb.org/t/p/w500/")
        assert result["backdropUrl"].startswith("https://image.tmdb.org/t/p/w1280/")
        assert result["collection"] is None
        assert result["credits"]["directors"] == ["Frank Darabont"]


class TestMovieMergeService:
    @pytest.mark.asyncio
    async def test_get_movie_by_imdb_id(self, merger, mock_omdb, mock_tmdb):
        mock_omdb.get_by_id.return_value = OMDB_MOVIE_RESPONSE
        mock_tmdb.find_by_imdb_id.return_value = TMDB_FIND_RESPONSE
        mock_tmdb.get_movie_details.return_value = TMDB_MOVIE_DETAILS_RESPONSE
        mock_tmdb.get_movie_credits.return_value = TMDB_MOVIE_CREDITS_RESPONSE

        view = await merger.get_movie(MovieLookup(imdb_id="tt0111161"))

        assert view.metadata["id"] == 278
        assert view.credits is TMDB_MOVIE_CREDITS_RESPONSE
        assert view.warnings == []
        mock_omdb.get_by_id.assert_awaited_once_with("tt0111161", plot=None)
        mock_tmdb.find_by_imdb_id.assert_awaited_once_with("tt0111161")

    @pytest.mark.asyncio
    async def test_movie_unknown_to_tmdb_gives_omdb_only_view(
        self, merger, mock_omdb, mock_tmdb
    ):
        mock_omdb.get_by_id.return_value = OMDB_MOVIE_RESPONSE
        mock_tmdb.find_by_imdb_id.return_value = TMDB_FIND_EMPTY_RESPONSE

        view = await merger.get_movie(MovieLookup(imdb_id="tt0111161"))
        result = view.to_dict(image_url)

        assert result["title"] == "The Shawshank Redemption"
        assert result["tmdbId"] is None
        assert result["warnings"] == [
            "TMDB data unavailable: Movie not found for IMDb ID: tt0111161"
        ]
        mock_tmdb.get_movie_credits.assert_not_called()

    @pytest.mark.asyncio
    async def test_tmdb_catalog_error_gives_omdb_only_view(self, merger, mock_omdb, mock_tmdb):
        mock_omdb.get_by_id.return_value = OMDB_MOVIE_RESPONSE
        mock_tmdb.find_by_imdb_id.side_effect = CatalogError("tmdb", "Invalid API key", 401)

        view = await merger.get_movie(MovieLookup(imdb_id="tt0111161"))

        assert view.metadata is None
        assert "Invalid API key" in view.warnings[0]

    @pytest.mark.asyncio
    async def test_series_record_is_rejected(self, merger, mock_omdb, mock_tmdb):
        mock_omdb.get_by_id.return_value = OMDB_SERIES_RESPONSE

        with pytest.raises(TypeMismatchError) as exc_info:
            await merger.get_movie(MovieLookup(imdb_id="tt0411008"))

        assert str(exc_info.value) == (
            "The result is a series, not a movie. Use the appropriate tool for series."
        )
        mock_tmdb.find_by_imdb_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_title_lookup_forces_movie_type(self, merger, mock_omdb, mock_tmdb):
        mock_omdb.get_by_title.return_value = OMDB_MOVIE_RESPONSE
        mock_tmdb.find_by_imdb_id.return_value = TMDB_FIND_EMPTY_RESPONSE

        await merger.get_movie(
            MovieLookup(title="The Shawshank Redemption", year=1994), plot="full"
        )

        mock_omdb.get_by_title.assert_awaited_once_with(
            "The Shawshank Redemption", content_type="movie", year="1994", plot="full"
        )

    @pytest.mark.asyncio
    async def test_tmdb_id_lookup_reuses_details(self, merger, mock_omdb, mock_tmdb):
        """Avec un ID TMDB, les details lus pour l'ID IMDb ne sont pas relus."""
        mock_tmdb.get_movie_details.return_value = TMDB_MOVIE_DETAILS_RESPONSE
        mock_tmdb.get_movie_credits.return_value = TMDB_MOVIE_CREDITS_RESPONSE
        mock_omdb.get_by_id.return_value = OMDB_MOVIE_RESPONSE

        view = await merger.get_movie(MovieLookup(tmdb_id=278))

        assert view.metadata["id"] == 278
        mock_omdb.get_by_id.assert_awaited_once_with("tt0111161", plot=None)
        mock_tmdb.get_movie_details.assert_awaited_once_with(278)
        mock_tmdb.find_by_imdb_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_tmdb_movie_without_imdb_id(self, merger, mock_omdb, mock_tmdb):
        mock_tmdb.get_movie_details.return_value = {**TMDB_MOVIE_DETAILS_RESPONSE, "imdb_id": None}

        with pytest.raises(EntityNotFoundError, match="No IMDb ID linked to TMDB movie: 278"):
            await merger.get_movie(MovieLookup(tmdb_id=278))

        mock_omdb.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_omdb_failure_propagates(self, merger, mock_omdb):
        mock_omdb.get_by_id.side_effect = CatalogError("omdb", "Incorrect IMDb ID.")

        with pytest.raises(CatalogError, match="Incorrect IMDb ID."):
            await merger.get_movie(MovieLookup(imdb_id="tt"))
