"""
Constantes globales pour CineLens.

Ce module contient:
- Les limites de troncature des textes libres
- La limite de pagination documentee par TMDB
- Les tailles d'images nommees par usage
- Les tables nom de genre -> ID de genre TMDB (films et series)
"""

# Troncature des textes libres
OVERVIEW_MAX_LENGTH = 200
REVIEW_MAX_LENGTH = 1000
BIOGRAPHY_MAX_LENGTH = 500
ELLIPSIS = "..."

# TMDB ne sert jamais au-dela de la page 500
MAX_TOTAL_PAGES = 500

# Marqueur d'annee ou de date absente
NOT_AVAILABLE = "N/A"

# Tailles d'images TMDB par usage
POSTER_LIST_SIZE = "w342"
POSTER_DETAIL_SIZE = "w500"
BACKDROP_SIZE = "w1280"
POSTER_THUMB_SIZE = "w185"
PROFILE_THUMB_SIZE = "w185"
PROFILE_DETAIL_SIZE = "w500"
PROVIDER_LOGO_SIZE = "w92"

# Genres films TMDB (nom en minuscules -> ID), alias inclus
MOVIE_GENRE_MAP = {
    "action": 28,
    "adventure": 12,
    "animation": 16,
    "comedy": 35,
    "crime": 80,
    "documentary": 99,
    "drama": 18,
    "family": 10751,
    "fantasy": 14,
    "history": 36,
    "horror": 27,
    "music": 10402,
    "mystery": 9648,
    "romance": 10749,
    "science fiction": 878,
    "sci-fi": 878,
    "scifi": 878,
    "thriller": 53,
    "tv movie": 10770,
    "war": 10752,
    "western": 37,
}

# Genres series TMDB: identifiants et regroupements differents des films
TV_GENRE_MAP = {
    "action & adventure": 10759,
    "action": 10759,
    "adventure": 10759,
    "animation": 16,
    "comedy": 35,
    "crime": 80,
    "documentary": 99,
    "drama": 18,
    "family": 10751,
    "kids": 10762,
    "mystery": 9648,
    "news": 10763,
    "reality": 10764,
    "sci-fi & fantasy": 10765,
    "sci-fi": 10765,
    "science fiction": 10765,
    "fantasy": 10765,
    "soap": 10766,
    "talk": 10767,
    "war & politics": 10768,
    "war": 10768,
    "politics": 10768,
    "western": 37,
}

# Metiers du generique retenus pour la vue film combinee
DIRECTOR_JOBS = frozenset({"Director"})
WRITER_JOBS = frozenset({"Writer", "Screenplay", "Story", "Novel", "Author", "Characters"})
PRODUCER_JOBS = frozenset({"Producer", "Executive Producer"})
COMPOSER_JOBS = frozenset({"Original Music Composer", "Music"})
CINEMATOGRAPHER_JOBS = frozenset({"Director of Photography"})
