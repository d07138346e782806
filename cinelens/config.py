"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINELENS_,
et peut optionnellement être fournie via un fichier .env.

Les clés API acceptent aussi les noms usuels OMDB_API_KEY et TMDB_API_KEY. Elles sont
toutes deux nécessaires pour servir les outils.
"""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cinelens/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

OMDB_KEY_URL = "https://www.omdbapi.com/apikey.aspx"
TMDB_KEY_URL = "https://www.themoviedb.org/settings/api"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINELENS_.
    Exemple : CINELENS_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="CINELENS_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Clés API (requises pour servir les outils)
    omdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("omdb_api_key", "CINELENS_OMDB_API_KEY"),
    )
    tmdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tmdb_api_key", "CINELENS_TMDB_API_KEY"),
    )

    # HTTP
    http_timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=2, ge=0, le=10)

    # Outils
    default_region: str = Field(default="US", min_length=2, max_length=2)

    # Logging (stderr, fichier JSON optionnel avec rotation)
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("omdb_api_key", "tmdb_api_key", mode="before")
    @classmethod
    def empty_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Une clé vide ou composée d'espaces est traitée comme absente."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("default_region", mode="before")
    @classmethod
    def upper_region(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans le chemin du fichier de log."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @property
    def max_attempts(self) -> int:
        """Nombre total de tentatives par requête (premier essai + retries)."""
        return self.max_retries + 1

    def missing_api_keys(self) -> list[str]:
        """Liste les clés manquantes, chacune avec l'adresse où l'obtenir."""
        missing = []
        if not self.omdb_api_key:
            missing.append(f"OMDB_API_KEY (get one at {OMDB_KEY_URL})")
        if not self.tmdb_api_key:
            missing.append(f"TMDB_API_KEY (get one at {TMDB_KEY_URL})")
        return missing
