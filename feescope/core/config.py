"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./feescope.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    create_tables: bool = True


class CovalentSettings(BaseModel):
    api_key: Optional[str] = None
    base_url: str = "https://api.covalenthq.com/v1"
    page_size: int = Field(default=1000, gt=0)
    request_timeout: float = 30.0


class ChainSettings(BaseModel):
    name: str
    slug: str


DEFAULT_CHAINS = [
    ChainSettings(name="Ethereum", slug="eth-mainnet"),
    ChainSettings(name="Polygon", slug="matic-mainnet"),
    ChainSettings(name="Optimism", slug="optimism-mainnet"),
    ChainSettings(name="Arbitrum", slug="arbitrum-mainnet"),
    ChainSettings(name="Base", slug="base-mainnet"),
]


class PipelineSettings(BaseModel):
    chains: list[ChainSettings] = Field(default_factory=lambda: list(DEFAULT_CHAINS))
    chain_timeout_seconds: float = Field(default=120.0, gt=0)
    top_transactions: int = Field(default=10, gt=0)


class CacheSettings(BaseModel):
    freshness_minutes: int = Field(default=60, gt=0)


class RefreshSettings(BaseModel):
    cron_secret: Optional[str] = None
    concurrency: int = Field(default=5, gt=0)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "FeeScope"
    api_prefix: str = "/api"

    # Flat variables kept for deployments that only export the bare names.
    covalent_api_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("COVALENT_API_KEY", "covalent_api_key")
    )
    cron_secret_env: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("CRON_SECRET", "cron_secret")
    )

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    covalent: CovalentSettings = CovalentSettings()
    pipeline: PipelineSettings = PipelineSettings()
    cache: CacheSettings = CacheSettings()
    refresh: RefreshSettings = RefreshSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def api_key(self) -> Optional[str]:
        return self.covalent.api_key or self.covalent_api_key

    @property
    def cron_secret(self) -> Optional[str]:
        return self.refresh.cron_secret or self.cron_secret_env

    @property
    def freshness_minutes(self) -> int:
        return self.cache.freshness_minutes


@lru_cache()
def get_settings() -> Settings:
    return Settings()
