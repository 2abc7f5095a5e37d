from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from defi_news.errors import StartupConfigError


DEFAULT_TARGET_WEBSITES = [
    "https://www.theblock.co",
    "https://www.cointelegraph.com",
    "https://crypto.news",
    "https://www.coindesk.com",
    "https://www.thedefiant.io",
    "https://blocktelegraph.io",
    "https://www.cryptotimes.io",
    "https://www.99bitcoins.com",
    "https://www.dlnews.com",
    "https://cryptopanic.com",
    "https://rekt.news/tr",
    "https://blockworks.co",
    "https://crypto-fundraising.info",
]

DEFAULT_FETCH_QUERIES = [
    "latest defi news",
    "defi protocol updates",
    "crypto market news",
    "hack news",
    "stablecoin news",
    "bitcoin news",
    "ethereum updates",
    "altcoin news",
    "crypto regulation",
    "defi hacks",
    "rug pull alerts",
    "smart contract vulnerabilities",
    "crypto exchange updates",
    "dex news",
    "total value locked",
    "protocol upgrades",
    "new token launches",
    "market volatility",
    "price analysis",
    "regulatory crackdown",
    "fundraising",
    "exploit reports",
    "governance proposals",
    "best defi platforms",
    "stablecoin depegging",
    "wallet vulnerabilities",
    "bitcoin etf news",
    "eth etf news",
    "donald trump",
    "elon musk",
    "CEX news",
    "hyperliquid",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore"
    )

    HOST: str = Field("0.0.0.0")
    PORT: int = Field(4020)
    LOG_LEVEL: str = Field("INFO")

    TAVILY_API_KEY: str = Field(min_length=1)
    TAVILY_BASE_URL: str = Field("https://api.tavily.com")
    TIMEOUT_SECONDS: float = Field(30)

    STORE_BACKEND: Literal["redis", "memory"] = Field("redis")
    REDIS_HOST: str = Field("localhost")
    REDIS_PORT: int = Field(6379)
    REDIS_DB: int = Field(0)
    REDIS_PASSWORD: str | None = None
    REDIS_KEY_PREFIX: str = Field("defi_news:")

    NEWS_CACHE_TTL_DAYS: int = Field(7, ge=1)
    NEWS_INDEX_MAX_SIZE: int = Field(1000, ge=1)

    FETCH_INTERVAL_HOURS: float = Field(3, gt=0)
    INITIAL_FETCH_DELAY_SECONDS: float = Field(5, ge=0)
    FETCH_MAX_RESULTS: int = Field(10, ge=1)
    FETCH_SEARCH_DEPTH: Literal["basic", "advanced"] = Field("advanced")
    FETCH_TIME_RANGE: str | None = Field("week")

    TARGET_WEBSITES: list[str] = Field(default_factory=lambda: list(DEFAULT_TARGET_WEBSITES))
    FETCH_QUERIES: list[str] = Field(default_factory=lambda: list(DEFAULT_FETCH_QUERIES))

    @property
    def news_cache_ttl_seconds(self) -> int:
        return self.NEWS_CACHE_TTL_DAYS * 24 * 60 * 60

    @property
    def fetch_interval_seconds(self) -> float:
        return self.FETCH_INTERVAL_HOURS * 60 * 60


def load_settings(**overrides) -> Settings:
    """Load settings from the environment, failing fast on missing credentials."""
    try:
        return Settings(**overrides)  # type: ignore[call-arg]
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise StartupConfigError(f"Invalid or missing configuration: {', '.join(missing)}") from e
