# src/services/health_checker.py

"""Connectivity health check for each fetch strategy."""

import asyncio
import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.fetchers.resilient_fetcher import FetchStrategy, ResilientFetcher
from src.models.errors import UpstreamHTTPError

logger = logging.getLogger("giftcard_monitor.health")


@dataclass
class HealthResult:
    """Result of a single strategy health check."""

    strategy: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


async def probe_strategy(
    fetcher: ResilientFetcher,
    strategy: FetchStrategy,
    url: str,
) -> HealthResult:
    """Fetch *url* through one strategy and time it."""
    start = time.monotonic()
    try:
        await fetcher.fetch_with(strategy, url)
    except UpstreamHTTPError as exc:
        return HealthResult(
            strategy=strategy.name,
            status="down",
            latency_ms=(time.monotonic() - start) * 1000,
            message=f"HTTP {exc.status_code}",
        )
    except Exception as exc:
        return HealthResult(
            strategy=strategy.name,
            status="down",
            latency_ms=(time.monotonic() - start) * 1000,
            message=str(exc)[:80],
        )

    elapsed_ms = (time.monotonic() - start) * 1000
    if elapsed_ms > Settings.SLOW_THRESHOLD_MS:
        return HealthResult(
            strategy=strategy.name,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )
    return HealthResult(
        strategy=strategy.name,
        status="ok",
        latency_ms=elapsed_ms,
        message="",
    )


class HealthChecker:
    """Runs concurrent probes of every strategy against the FX endpoint."""

    def __init__(self, fetcher: ResilientFetcher | None = None) -> None:
        self.fetcher = fetcher or ResilientFetcher()
        self.url = f"{Settings.API_BASE_URL}{Settings.FX_RATES_PATH}"

    async def check_all(self) -> list[HealthResult]:
        """Probe every configured strategy concurrently."""
        tasks = [
            probe_strategy(self.fetcher, strategy, self.url)
            for strategy in self.fetcher.strategies
        ]
        results: list[HealthResult] = list(await asyncio.gather(*tasks))
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.strategy,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
