"""Application configuration."""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Environment variables take precedence over .env file.
    This makes it compatible with Docker (uses env vars) and
    local development (uses .env file).
    """

    APP_NAME: str = "Inventory Graph API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]

    # Neo4j
    NEO4J_URI: str = "bolt://localhost:7687"
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = "password"
    NEO4J_DATABASE: Optional[str] = None  # None = server default database
    NEO4J_QUERY_TIMEOUT: Optional[float] = None  # seconds, None = no timeout
    NEO4J_ENSURE_CONSTRAINTS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        # Only load .env file if it exists (for local dev)
        # Docker will use environment variables directly
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        # Environment variables take precedence over .env file
        extra="ignore",
    )


settings = Settings()
