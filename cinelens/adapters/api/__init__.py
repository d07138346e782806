"""
Clients des catalogues externes.

Ce module fournit les adaptateurs pour communiquer avec les API externes:
- OMDb: notes agregees, intrigues, recompenses, episodes
- TMDB: metadonnees structurees, images, generique, decouverte

Infrastructure partagee:
- RateLimitError / TransientStatusError: erreurs transitoires (429, 408, 5xx)
- with_retry: Decorateur avec backoff exponentiel
- request_with_retry: Requete httpx avec retry automatique

Les clients implementent IRatingsCatalog et IMetadataCatalog definis dans
core/ports/api_clients.py.
"""

from cinelens.adapters.api.omdb_client import OMDbClient
from cinelens.adapters.api.retry import (
    RateLimitError,
    TransientStatusError,
    request_with_retry,
    with_retry,
)
from cinelens.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "OMDbClient",
    "TMDBClient",
    "RateLimitError",
    "TransientStatusError",
    "with_retry",
    "request_with_retry",
]
