"""
Fixtures pytest partagees pour les tests CineLens.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test isoles de l'environnement et du fichier .env
- Clients OMDb/TMDB reels (a combiner avec respx)
- Mocks des clients pour les tests de services
"""

from typing import Optional
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from cinelens.adapters.api.omdb_client import OMDbClient
from cinelens.adapters.api.tmdb_client import TMDBClient
from cinelens.config import Settings


def fake_image_url(path: Optional[str], size: str = "w500") -> Optional[str]:
    """Meme construction d'URL que TMDBClient.image_url."""
    if not path:
        return None
    return f"https://image.tmdb.org/t/p/{size}{path}"


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings de test avec des cles factices et sans fichier .env."""
    for name in ("OMDB_API_KEY", "TMDB_API_KEY", "CINELENS_OMDB_API_KEY", "CINELENS_TMDB_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return Settings(
        _env_file=None,
        omdb_api_key="omdb_test_key",
        tmdb_api_key="tmdb_test_key",
    )


@pytest_asyncio.fixture
async def omdb_client():
    """OMDbClient sans retry (une seule tentative par requete)."""
    client = OMDbClient(api_key="omdb_test_key", max_attempts=1)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def tmdb_client():
    """TMDBClient (cle v3) sans retry."""
    client = TMDBClient(api_key="tmdb_test_key", max_attempts=1)
    yield client
    await client.close()


@pytest.fixture
def mock_tmdb() -> MagicMock:
    """
    Mock de TMDBClient pour les tests de services.

    Les methodes async deviennent des AsyncMock (via spec); image_url
    construit des URLs reelles. Les retours sont a configurer par test.
    """
    mock = MagicMock(spec=TMDBClient)
    mock.image_url.side_effect = fake_image_url
    return mock


@pytest.fixture
def mock_omdb() -> MagicMock:
    """Mock de OMDbClient pour les tests de services."""
    mock = MagicMock(spec=OMDbClient)
    mock.PAGE_SIZE = OMDbClient.PAGE_SIZE
    return mock
