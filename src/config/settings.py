# src/config/settings.py

"""Central configuration for the giftcard_monitor pipeline."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: list[str]) -> list[str]:
    """Read a comma-separated list from the environment."""
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Central configuration for the giftcard_monitor pipeline."""

    # --- Upstream API ---
    API_BASE_URL: str = "https://www.bitrefill.com/api"
    CATALOG_PATH: str = "/omni?c=all-gift-cards&country={country}"
    PRODUCT_PATH: str = "/product/{product_id}"
    FX_RATES_PATH: str = "/accounts/fx_rates"
    COUNTRY_CODE: str = os.getenv("GIFTCARD_COUNTRY", "IN")
    CURRENCY: str = os.getenv("GIFTCARD_CURRENCY", "INR")

    # --- Fetching ---
    REQUEST_TIMEOUT: int = int(os.getenv("GIFTCARD_TIMEOUT", "12"))
    MAX_CONCURRENT_DETAILS: int = 20    # In-flight product detail fetches
    SLOW_THRESHOLD_MS: float = 5000.0   # Health check "slow" cut-off
    FETCH_STRATEGIES: list[str] = _env_list(
        "GIFTCARD_STRATEGIES",
        ["direct", "corsproxy", "allorigins", "cloudscraper"],
    )
    CORSPROXY_URL: str = "https://corsproxy.io/?{url}"
    ALLORIGINS_URL: str = "https://api.allorigins.win/get?url={url}"

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
    }

    # --- Processing ---
    OUT_OF_STOCK_LABEL: str = "out_of_stock"
    NEUTRAL_COMMISSION: float = 5.0     # Stand-in when commission unknown
    DEAL_COMMISSION_CEILING: float = 10.0
    DEAL_COMMISSION_WEIGHT: float = 0.7
    DEAL_RATING_WEIGHT: float = 0.3

    # --- Logos ---
    LOGO_SERVICE_URL: str = (
        "https://www.google.com/s2/favicons?domain={domain}&sz={size}"
    )
    LOGO_SIZE: int = 128

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("GIFTCARD_LOG_LEVEL", "WARNING").upper()
    LOG_FILE_PREFIX: str = "run"
