"""Configuration management using Pydantic settings."""
import logging
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # File hosts - folder listing APIs
    rpmshare_api_key: str = Field(default="", description="RpmShare API key")
    rpmshare_api_url: str = Field(default="https://rpmshare.com/api/file/list", description="RpmShare folder listing endpoint")
    filemoon_api_key: str = Field(default="", description="Filemoon API key")
    filemoon_api_url: str = Field(default="https://filemoonapi.com/api/file/list", description="Filemoon folder listing endpoint")
    provider_max_workers: int = Field(default=4, description="Parallel file host requests per resolution")

    # TheTVDB v4 - Optional, for episode title/synopsis enrichment
    tvdb_api_key: str = Field(default="", description="TheTVDB v4 API key")
    tvdb_base_url: str = Field(default="https://api4.thetvdb.com/v4", description="TheTVDB v4 base URL")
    tvdb_max_workers: int = Field(default=4, description="Concurrent episode lookups against TheTVDB")
    tvdb_max_pages: int = Field(default=50, description="Upper bound on episode listing pages per lookup")

    # Translation of Japanese episode titles
    translate_url: str = Field(default="https://translate.googleapis.com/translate_a/single", description="Translation endpoint")
    translate_titles: bool = Field(default=False, description="Translate Japanese titles and synopses to English")

    # Anime catalog used when the caller does not pass provider info
    catalog_url: str = Field(
        default="https://raw.githubusercontent.com/OtakuFlix/ADATA/refs/heads/main/anime_data.txt",
        description="JSON list of anime with provider names (cname) and folder ids (cid)"
    )

    # Outbound HTTP
    http_timeout: float = Field(default=10.0, description="Per-request timeout in seconds")

    # Web API
    web_server_host: str = Field(default="0.0.0.0", description="Host for Flask web server")
    web_server_port: int = Field(default=27800, description="Port for Flask web server")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance with error handling
try:
    env_file_path = Path(__file__).parent.parent.parent / ".env"
    if env_file_path.exists():
        logger.info(f"Loading .env file from: {env_file_path}")
    else:
        logger.debug(f".env file not found at {env_file_path}, using environment only")

    settings = Settings()

    if not settings.tvdb_api_key:
        logger.info("TVDB_API_KEY not set - episode enrichment will be disabled")

except Exception as e:
    logger.error(f"Failed to load settings: {e}")
    logger.error(f"Check the .env file at: {Path(__file__).parent.parent.parent / '.env'}")
    raise
