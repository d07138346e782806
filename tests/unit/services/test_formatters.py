"""
Tests unitaires des fonctions de mise en forme.

Verifie les bornes de troncature, l'extraction d'annee, le plafond de
pagination et la projection des enregistrements OMDb/TMDB.
"""

import pytest

from cinelens.services.formatters import (
    cap_total_pages,
    extract_year,
    format_movie_result,
    format_multi_search_result,
    format_omdb_details,
    format_person_details,
    format_providers,
    format_review,
    format_trending_result,
    format_video,
    omdb_total_pages,
    paginate,
    truncate_text,
)
from tests.fixtures.omdb_responses import OMDB_MOVIE_RESPONSE
from tests.fixtures.tmdb_responses import TMDB_PERSON_DETAILS_RESPONSE, TMDB_SEARCH_RESPONSE


def image_url(path, size="w500"):
    return f"https://image.tmdb.org/t/p/{size}{path}" if path else None


class TestTruncateText:
    def test_text_at_limit_is_unchanged(self):
        text = "a" * 200
        assert truncate_text(text, 200) == text

    def test_text_over_limit_is_cut_with_ellipsis(self):
        result = truncate_text("a" * 201, 200)
        assert result == "a" * 200 + "..."
        assert len(result) == 203

    @pytest.mark.parametrize("text", [None, ""])
    def test_missing_text_becomes_empty(self, text):
        assert truncate_text(text, 200) == ""


class TestExtractYear:
    def test_year_from_date(self):
        assert extract_year("1994-09-23") == "1994"

    @pytest.mark.parametrize("date", [None, ""])
    def test_missing_date(self, date):
        assert extract_year(date) == "N/A"


class TestPagination:
    @pytest.mark.parametrize(
        "total, expected", [(None, 0), (0, 0), (12, 12), (500, 500), (37000, 500)]
    )
    def test_cap_total_pages(self, total, expected):
        assert cap_total_pages(total) == expected

    @pytest.mark.parametrize("total, expected", [(0, 0), (1, 1), (10, 1), (11, 2), (23, 3)])
    def test_omdb_total_pages(self, total, expected):
        assert omdb_total_pages(total, 10) == expected

    def test_paginate_caps_pages(self):
        data = {"page": 3, "total_results": 10000, "total_pages": 8000}
        assert paginate(data) == {"totalResults": 10000, "page": 3, "totalPages": 500}


class TestTmdbResults:
    def test_movie_result_fields(self):
        movie = TMDB_SEARCH_RESPONSE["results"][0]

        result = format_movie_result(movie, image_url)

        assert result["tmdbId"] == 19995
        assert result["year"] == "2009"
        assert result["overview"].endswith("...")
        assert len(result["overview"]) == 203
        assert result["posterUrl"] == (
            "https://image.tmdb.org/t/p/w342/jRXYjXNq0Cs2TcJjLkki24MLp7u.jpg"
        )
        assert "voteCount" not in result

    def test_movie_result_without_date_or_poster(self):
        movie = TMDB_SEARCH_RESPONSE["results"][1]

        result = format_movie_result(movie, image_url, include_vote_count=True)

        assert result["year"] == "N/A"
        assert result["releaseDate"] == "N/A"
        assert result["posterUrl"] is None
        assert result["voteCount"] == 12000

    def test_trending_tv_uses_name_and_air_date(self):
        item = {
            "id": 1,
            "media_type": "tv",
            "name": "Severance",
            "first_air_date": "2022-02-17",
            "poster_path": None,
        }

        result = format_trending_result(item, image_url)

        assert result["title"] == "Severance"
        assert result["year"] == "2022"

    def test_multi_search_person(self):
        person = {
            "id": 31,
            "media_type": "person",
            "name": "Tom Hanks",
            "known_for_department": "Acting",
            "profile_path": "/tom.jpg",
            "known_for": [{"title": "Big"}, {"name": "Band of Brothers"}, {}, {"title": "x"}],
        }

        result = format_multi_search_result(person, image_url)

        assert result["mediaType"] == "person"
        assert result["knownForTitles"] == ["Big", "Band of Brothers"]
        assert result["profileImageUrl"] == "https://image.tmdb.org/t/p/w185/tom.jpg"

    def test_person_details_biography_capped(self):
        result = format_person_details(TMDB_PERSON_DETAILS_RESPONSE, image_url)

        assert len(result["biography"]) == 503
        assert result["biography"].endswith("...")

    def test_person_details_without_biography(self):
        result = format_person_details({"id": 1, "biography": ""}, image_url)
        assert result["biography"] == "No biography available."


class TestOtherFormatters:
    def test_omdb_details_projection(self):
        result = format_omdb_details(OMDB_MOVIE_RESPONSE)

        assert result["imdbId"] == "tt0111161"
        assert result["metascore"] == "82"
        assert len(result["ratings"]) == 3

    def test_review_content_capped(self):
        review = {
            "id": "r1",
            "author": "critic",
            "author_details": {"username": "critic", "rating": 9.0},
            "content": "x" * 1500,
        }

        result = format_review(review)

        assert len(result["content"]) == 1003
        assert result["rating"] == 9.0

    @pytest.mark.parametrize(
        "site, key, url",
        [
            ("YouTube", "abc", "https://www.youtube.com/watch?v=abc"),
            ("Vimeo", "123", "https://vimeo.com/123"),
            ("Dailymotion", "x", None),
        ],
    )
    def test_video_url(self, site, key, url):
        assert format_video({"site": site, "key": key})["url"] == url

    def test_providers_use_small_logo(self):
        providers = [{"provider_name": "Netflix", "logo_path": "/n.jpg"}]

        assert format_providers(providers, image_url) == [
            {"name": "Netflix", "logoUrl": "https://image.tmdb.org/t/p/w92/n.jpg"}
        ]
        assert format_providers(None, image_url) == []
