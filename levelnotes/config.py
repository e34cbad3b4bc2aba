"""Application configuration using Pydantic Settings."""

import logging
import os
import warnings
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def _default_data_dir() -> Path:
    """Per-user data directory, falling back to a sibling of the working dir."""
    local_app_data = os.environ.get("LOCALAPPDATA")
    if local_app_data:
        return Path(local_app_data) / "LevelNotes"
    return Path("../.levelnotes")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="LEVELNOTES_"
    )

    # App
    app_name: str = "LevelNotes"
    debug: bool = False
    log_level: str = "INFO"

    # Storage
    data_dir: Path = _default_data_dir()
    database_url: str | None = None

    # Server
    host: str = "127.0.0.1"
    port: int = 3030

    # CORS (the browser extension posts from arbitrary origins)
    cors_origins: list[str] = ["*"]

    def __init__(self, **kwargs):
        """Initialize settings and validate the storage configuration."""
        super().__init__(**kwargs)
        self._validate_storage_settings()

    @property
    def db_path(self) -> Path:
        """Location of the SQLite database file."""
        return self.data_dir / "levelnotes.db"

    @property
    def resolved_database_url(self) -> str:
        """Explicit database URL, or the SQLite file under the data dir."""
        return self.database_url or f"sqlite:///{self.db_path}"

    def _validate_storage_settings(self) -> None:
        """Warn about settings that will not survive a restart."""
        if self.database_url and self.database_url in ("sqlite://", "sqlite:///:memory:"):
            warnings.warn(
                "DATABASE_URL points at an in-memory database. Notes will not persist!",
                UserWarning,
                stacklevel=2,
            )
            logger.warning(
                "DATABASE_URL points at an in-memory database. Notes will not persist!"
            )


settings = Settings()
