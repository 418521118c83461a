from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    news_api_key: str | None = Field(default=None, alias="NEWS_API_KEY")
    news_api_base_url: str = Field(
        "https://newsapi.org/v2", alias="NEWS_API_BASE_URL"
    )
    default_country: str = Field("us", min_length=1, alias="DEFAULT_COUNTRY")

    http_timeout: float = Field(10.0, gt=0, alias="HTTP_TIMEOUT")
    aggregate_timeout: float = Field(15.0, gt=0, alias="AGGREGATE_TIMEOUT")
    http_max_connections: int = Field(20, ge=1, alias="HTTP_MAX_CONNECTIONS")
    http_max_keepalive: int = Field(10, ge=1, alias="HTTP_MAX_KEEPALIVE")
    http_user_agent: str = Field(
        "NewsFeed/0.1 (+https://example.com; contact=admin@example.com)",
        alias="HTTP_USER_AGENT",
    )

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    public_dir: Path = Field(Path("public"), alias="PUBLIC_DIR")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: object) -> str:
        level = str(value or "").strip().upper()
        return level if level in LOG_LEVELS else "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
