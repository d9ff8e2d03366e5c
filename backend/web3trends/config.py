"""
Application configuration with environment variable support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from the environment or a local .env file.

    A Settings instance is passed to every fetcher, the classifier and the
    pipeline; nothing below this module reads the environment directly.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # API keys
    GNEWS_API_KEY: str = ""
    GEMINI_API_KEY: str = ""
    TWELVE_DATA_API_KEY: str = ""

    # Upstream endpoints
    READER_PROXY_BASE: str = "https://r.jina.ai"
    GNEWS_SEARCH_URL: str = "https://gnews.io/api/v4/search"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    TWELVE_DATA_URL: str = "https://api.twelvedata.com/time_series"
    PRICE_SYMBOL: str = "APT/USD"

    # Pipeline limits
    ARTICLE_LIMIT: int = 5
    CONTENT_CHAR_LIMIT: int = 3000
    PRICE_OUTPUT_SIZE: int = 7

    # Timeouts (seconds)
    CONTENT_TIMEOUT_SECONDS: float = 15.0
    ARTICLE_TIMEOUT_SECONDS: float = 15.0
    CLASSIFIER_TIMEOUT_SECONDS: float = 20.0
    MARKET_TIMEOUT_SECONDS: float = 15.0

    # Server
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    PORT: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()


# Preset topics offered by the dashboard: label -> search query
TOPIC_PRESETS: Dict[str, str] = {
    "Aptos Ecosystem": '"Aptos" AND "Ecosystem"',
    "DeFi Trends": '"DeFi" AND ("Aptos" OR "Solana")',
    "NFTs & Gaming": '"NFT" OR "Web3 Gaming"',
    "L1 Regulation": '"Blockchain Layer 1" Regulation',
}

# HTTP Client Configuration
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)
HTTP_HEADERS = {"User-Agent": USER_AGENT}
