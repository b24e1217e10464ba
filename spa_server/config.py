"""Server configuration via pydantic-settings."""

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

# Long-lived caching for content-hashed build output
_IMMUTABLE_CACHE = "public, max-age=31536000, immutable"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Listening socket
    PORT: int = 3000
    HOST: str = "0.0.0.0"

    # Roots – relative paths are taken from the working directory
    CLIENT_DIR: str = "build/client"
    PUBLIC_DIR: str = "public"

    # Response headers
    SERVER_NAME: str = "spa-static-server"
    ASSETS_CACHE_CONTROL: str = _IMMUTABLE_CACHE
    DOCUMENT_CACHE_CONTROL: str = "no-store"

    # CORS – empty disables the middleware
    CORS_ORIGINS: List[str] = []

    LOG_LEVEL: str = "info"

    @property
    def client_root(self) -> Path:
        return Path(self.CLIENT_DIR).resolve()

    @property
    def public_root(self) -> Path:
        return Path(self.PUBLIC_DIR).resolve()

    @property
    def assets_root(self) -> Path:
        """Immutable build assets live under the client build root."""
        return self.client_root / "assets"


settings = Settings()
