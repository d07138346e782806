"""
Couche services applicatifs (cas d'utilisation).

Chaque service regroupe les operations exposees comme outils MCP pour un
domaine (films, series, personnes, decouverte). Les services retournent des
dictionnaires prets pour JSON et levent des erreurs du domaine; l'adaptateur
MCP convertit ces erreurs en reponses d'erreur.
"""

from cinelens.services.discovery import DiscoveryService
from cinelens.services.merge import MergedMovieView, MovieMergeService
from cinelens.services.movies import MovieService
from cinelens.services.people import PeopleService
from cinelens.services.resolver import EntityResolver, MovieLookup, SeriesLookup
from cinelens.services.series import SeriesService

__all__ = [
    "DiscoveryService",
    "EntityResolver",
    "MergedMovieView",
    "MovieLookup",
    "MovieMergeService",
    "MovieService",
    "PeopleService",
    "SeriesLookup",
    "SeriesService",
]
