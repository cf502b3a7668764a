"""Configuration management using pydantic-settings."""

from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BLOGWIRE_",
        extra="ignore",
    )

    # HTTP transport
    user_agent: str = Field(default="blogwire/0.1.0", description="User-Agent sent with every request")
    request_timeout: float = Field(default=50.0, description="Per-request timeout in seconds")
    max_retries: int = Field(
        default=3, description="Transport attempts on timeouts and network errors"
    )

    # Blogger 1.0 requires an application key as the first argument of every call
    blogger_app_key: str = Field(
        default="0123456789ABCDEF", description="Application key for blogger.* calls"
    )

    # GData (Atom) endpoints
    gdata_feed_base: str = Field(
        default="http://www.blogger.com/feeds", description="Base URL of the Blogger feeds"
    )
    gdata_auth_url: str = Field(
        default="https://www.google.com/accounts/ClientLogin",
        description="ClientLogin gateway used to obtain auth tokens",
    )
    auth_ttl_seconds: int = Field(
        default=600, description="Seconds before a GData auth token must be renewed"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_to_file: bool = Field(
        default=False, description="Also write a debug log to logs_dir/blogwire.log"
    )

    # Paths
    data_dir: Path = Field(default=Path("./data"), description="Data directory path")

    @property
    def categories_dir(self) -> Path:
        """Directory holding the per-blog category snapshots."""
        return self.data_dir / "categories"

    @property
    def logs_dir(self) -> Path:
        """Path to log files directory."""
        return self.data_dir / "logs"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.categories_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
