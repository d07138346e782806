"""
Mise en forme des enregistrements bruts des catalogues.

Projette les reponses OMDb et TMDB vers des structures plates et bornees,
destinees a etre serialisees en JSON pour un agent conversationnel:
- textes libres tronques (resume 200, avis 1000, biographie 500)
- annee extraite de la date, "N/A" si absente
- URLs d'images construites a partir du chemin et d'une taille nommee
- nombre total de pages plafonne a 500
"""

import math
from typing import Any, Callable, Optional

from cinelens.core.ports.api_clients import CatalogRecord
from cinelens.utils.constants import (
    BIOGRAPHY_MAX_LENGTH,
    ELLIPSIS,
    MAX_TOTAL_PAGES,
    NOT_AVAILABLE,
    OVERVIEW_MAX_LENGTH,
    POSTER_LIST_SIZE,
    PROFILE_THUMB_SIZE,
    PROVIDER_LOGO_SIZE,
    REVIEW_MAX_LENGTH,
)

ImageUrlBuilder = Callable[[Optional[str], str], Optional[str]]


def truncate_text(text: Optional[str], max_length: int) -> str:
    """
    Tronque un texte a max_length caracteres suivis de "...".

    Un texte de longueur inferieure ou egale a max_length est retourne
    tel quel; None devient une chaine vide.
    """
    if not text:
        return ""
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def extract_year(release_date: Optional[str]) -> str:
    """Retourne l'annee d'une date "YYYY-MM-DD", ou "N/A" si la date est absente."""
    if not release_date:
        return NOT_AVAILABLE
    return release_date.split("-")[0] or NOT_AVAILABLE


def cap_total_pages(total_pages: Optional[int]) -> int:
    """Plafonne le nombre de pages annonce par TMDB a sa limite documentee."""
    return min(total_pages or 0, MAX_TOTAL_PAGES)


def omdb_total_pages(total_results: int, page_size: int = 10) -> int:
    """Calcule le nombre de pages OMDb, qui n'est pas fourni par le catalogue."""
    return math.ceil(total_results / page_size) if total_results > 0 else 0


def paginate(data: CatalogRecord) -> dict[str, Any]:
    """Champs de pagination communs aux listes TMDB."""
    return {
        "totalResults": data.get("total_results", 0),
        "page": data.get("page", 1),
        "totalPages": cap_total_pages(data.get("total_pages")),
    }


def format_movie_result(
    movie: CatalogRecord,
    image_url: ImageUrlBuilder,
    include_vote_count: bool = False,
) -> dict[str, Any]:
    """Resume d'un film dans une liste TMDB (recherche, decouverte, recommandations)."""
    result = {
        "tmdbId": movie.get("id"),
        "title": movie.get("title"),
        "year": extract_year(movie.get("release_date")),
        "releaseDate": movie.get("release_date") or NOT_AVAILABLE,
        "overview": truncate_text(movie.get("overview"), OVERVIEW_MAX_LENGTH),
        "tmdbRating": movie.get("vote_average"),
    }
    if include_vote_count:
        result["voteCount"] = movie.get("vote_count")
    result["posterUrl"] = image_url(movie.get("poster_path"), POSTER_LIST_SIZE)
    return result


def format_tv_result(
    show: CatalogRecord,
    image_url: ImageUrlBuilder,
    include_vote_count: bool = False,
) -> dict[str, Any]:
    """Resume d'une serie dans une liste TMDB."""
    result = {
        "tmdbId": show.get("id"),
        "name": show.get("name"),
        "year": extract_year(show.get("first_air_date")),
        "firstAirDate": show.get("first_air_date") or NOT_AVAILABLE,
        "overview": truncate_text(show.get("overview"), OVERVIEW_MAX_LENGTH),
        "tmdbRating": show.get("vote_average"),
    }
    if include_vote_count:
        result["voteCount"] = show.get("vote_count")
    result["posterUrl"] = image_url(show.get("poster_path"), POSTER_LIST_SIZE)
    return result


def format_trending_result(item: CatalogRecord, image_url: ImageUrlBuilder) -> dict[str, Any]:
    """Resume d'un element de tendance, film ou serie."""
    is_movie = item.get("media_type") == "movie"
    title = item.get("title") if is_movie else item.get("name")
    release_date = item.get("release_date") if is_movie else item.get("first_air_date")
    return {
        "tmdbId": item.get("id"),
        "mediaType": item.get("media_type"),
        "title": title or "Unknown",
        "year": extract_year(release_date),
        "releaseDate": release_date or NOT_AVAILABLE,
        "overview": truncate_text(item.get("overview"), OVERVIEW_MAX_LENGTH),
        "tmdbRating": item.get("vote_average"),
        "voteCount": item.get("vote_count"),
        "posterUrl": image_url(item.get("poster_path"), POSTER_LIST_SIZE),
    }


def format_multi_search_result(
    result: CatalogRecord, image_url: ImageUrlBuilder
) -> dict[str, Any]:
    """Resume d'un resultat de recherche multiple selon son media_type."""
    media_type = result.get("media_type")
    base = {"tmdbId": result.get("id"), "mediaType": media_type}

    if media_type == "movie":
        return {**base, **_without_id(format_movie_result(result, image_url))}
    if media_type == "tv":
        return {**base, **_without_id(format_tv_result(result, image_url))}

    known_for = result.get("known_for") or []
    return {
        **base,
        "name": result.get("name"),
        "knownFor": result.get("known_for_department"),
        "profileImageUrl": image_url(result.get("profile_path"), PROFILE_THUMB_SIZE),
        "knownForTitles": [
            title
            for title in ((m.get("title") or m.get("name")) for m in known_for[:3])
            if title
        ],
    }


def _without_id(formatted: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in formatted.items() if key != "tmdbId"}


def format_person_result(person: CatalogRecord, image_url: ImageUrlBuilder) -> dict[str, Any]:
    """Resume d'une personne dans les resultats de search/person."""
    return {
        "tmdbId": person.get("id"),
        "name": person.get("name"),
        "knownForDepartment": person.get("known_for_department"),
        "profileImageUrl": image_url(person.get("profile_path"), PROFILE_THUMB_SIZE),
        "knownFor": [
            {
                "title": work.get("title") or work.get("name"),
                "year": extract_year(work.get("release_date") or work.get("first_air_date")),
                "tmdbId": work.get("id"),
            }
            for work in (person.get("known_for") or [])[:3]
        ],
    }


def format_person_details(
    person: CatalogRecord,
    image_url: ImageUrlBuilder,
    portrait_size: str = PROFILE_THUMB_SIZE,
) -> dict[str, Any]:
    """Fiche d'une personne; la biographie est plafonnee a 500 caracteres."""
    return {
        "tmdbId": person.get("id"),
        "name": person.get("name"),
        "knownFor": person.get("known_for_department"),
        "biography": truncate_text(person.get("biography"), BIOGRAPHY_MAX_LENGTH)
        or "No biography available.",
        "birthday": person.get("birthday"),
        "deathday": person.get("deathday"),
        "placeOfBirth": person.get("place_of_birth"),
        "imdbId": person.get("imdb_id"),
        "profileImageUrl": image_url(person.get("profile_path"), portrait_size),
    }


def format_omdb_search_result(item: CatalogRecord) -> dict[str, Any]:
    return {
        "title": item.get("Title"),
        "year": item.get("Year"),
        "imdbId": item.get("imdbID"),
        "type": item.get("Type"),
    }


def format_omdb_episode(episode: CatalogRecord) -> dict[str, Any]:
    return {
        "title": episode.get("Title"),
        "episode": episode.get("Episode"),
        "released": episode.get("Released"),
        "imdbRating": episode.get("imdbRating"),
        "imdbId": episode.get("imdbID"),
    }


def format_omdb_details(record: CatalogRecord) -> dict[str, Any]:
    """Champs communs aux fiches OMDb (film, serie, episode)."""
    return {
        "title": record.get("Title"),
        "year": record.get("Year"),
        "rated": record.get("Rated"),
        "released": record.get("Released"),
        "runtime": record.get("Runtime"),
        "genre": record.get("Genre"),
        "director": record.get("Director"),
        "writer": record.get("Writer"),
        "actors": record.get("Actors"),
        "plot": record.get("Plot"),
        "language": record.get("Language"),
        "country": record.get("Country"),
        "awards": record.get("Awards"),
        "ratings": record.get("Ratings") or [],
        "metascore": record.get("Metascore"),
        "imdbRating": record.get("imdbRating"),
        "imdbVotes": record.get("imdbVotes"),
        "imdbId": record.get("imdbID"),
    }


def format_review(review: CatalogRecord) -> dict[str, Any]:
    author_details = review.get("author_details") or {}
    return {
        "id": review.get("id"),
        "author": review.get("author"),
        "username": author_details.get("username"),
        "rating": author_details.get("rating"),
        "content": truncate_text(review.get("content"), REVIEW_MAX_LENGTH),
        "createdAt": review.get("created_at"),
        "url": review.get("url"),
    }


_VIDEO_URLS = {
    "YouTube": "https://www.youtube.com/watch?v={key}",
    "Vimeo": "https://vimeo.com/{key}",
}


def format_video(video: CatalogRecord) -> dict[str, Any]:
    template = _VIDEO_URLS.get(video.get("site", ""))
    return {
        "id": video.get("id"),
        "name": video.get("name"),
        "type": video.get("type"),
        "site": video.get("site"),
        "key": video.get("key"),
        "url": template.format(key=video.get("key")) if template else None,
        "size": video.get("size"),
        "official": video.get("official"),
        "publishedAt": video.get("published_at"),
    }


def format_providers(
    providers: Optional[list[CatalogRecord]], image_url: ImageUrlBuilder
) -> list[dict[str, Any]]:
    """Liste de fournisseurs (streaming, location, achat) avec logo w92."""
    return [
        {
            "name": provider.get("provider_name"),
            "logoUrl": image_url(provider.get("logo_path"), PROVIDER_LOGO_SIZE),
        }
        for provider in providers or []
    ]
