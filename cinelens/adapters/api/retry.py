"""
Mecanisme de retry avec backoff exponentiel pour les catalogues externes.

Relance automatiquement les echecs transitoires:
- 408 (Request Timeout) et 429 (rate limiting)
- 500, 502, 503, 504 (erreurs serveur)
- expiration du delai cote client (httpx.TimeoutException)

Les autres erreurs HTTP (4xx) sont propagees immediatement, sans retry.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=3, max_wait=10)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

# 2 relances apres la tentative initiale
DEFAULT_MAX_ATTEMPTS = 3


class TransientStatusError(Exception):
    """
    Exception levee pour un code HTTP transitoire (408, 5xx).

    Attributes:
        status_code: Code HTTP recu
    """

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Transient HTTP error: status {status_code}")


class RateLimitError(TransientStatusError):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        """
        Initialise l'erreur avec la valeur Retry-After optionnelle.

        Args:
            retry_after: Secondes a attendre avant de relancer (optionnel)
        """
        self.retry_after = retry_after
        super().__init__(429)
        self.args = (f"Rate limited. Retry after: {retry_after}s",)


def _log_retry(retry_state) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.debug(
        "Nouvelle tentative apres echec transitoire",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


def with_retry(max_attempts: int = DEFAULT_MAX_ATTEMPTS, max_wait: int = 10):
    """
    Decorateur pour relancer sur erreur transitoire avec backoff exponentiel.

    Utilise wait_random_exponential pour ajouter du jitter et eviter
    que des appels paralleles relancent tous au meme instant.

    Args:
        max_attempts: Nombre maximum de tentatives, tentative initiale comprise
        max_wait: Delai maximum entre les tentatives en secondes

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type((TransientStatusError, httpx.TimeoutException)),
        wait=wait_random_exponential(multiplier=0.5, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur erreur transitoire.

    Convertit les reponses 429 en RateLimitError et les 408/5xx en
    TransientStatusError, puis relance avec backoff exponentiel. Les autres
    erreurs HTTP sont propagees immediatement (httpx.HTTPStatusError).

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        TransientStatusError: Si 408/5xx apres epuisement des tentatives
        httpx.TimeoutException: Si timeout apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            retry_after_header = response.headers.get("Retry-After")
            retry_after = (
                int(retry_after_header)
                if retry_after_header and retry_after_header.isdigit()
                else None
            )
            raise RateLimitError(retry_after)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise TransientStatusError(response.status_code)
        response.raise_for_status()
        return response

    return await _do_request()
