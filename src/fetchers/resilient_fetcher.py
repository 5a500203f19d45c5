# src/fetchers/resilient_fetcher.py

"""JSON fetcher that relays requests through an ordered list of strategies.

Each strategy wraps the target URL its own way (direct, via a CORS
relay, via a challenge-solving client) and unwraps the response body
its own way.  Strategies are tried strictly in order; any failure logs
a warning and falls through to the next one.  There is no retry inside
a single strategy.
"""

import asyncio
import json
import logging
import urllib.parse
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from curl_cffi.requests import AsyncSession

from src.config.settings import Settings
from src.models.errors import (
    AllStrategiesFailedError,
    UnwrapError,
    UpstreamHTTPError,
)

logger = logging.getLogger("giftcard_monitor.fetcher")

CURL = "curl"
CLOUDSCRAPER = "cloudscraper"


def _passthrough(payload: Any) -> Any:
    return payload


def _unwrap_contents(payload: Any) -> Any:
    """Decode the JSON string nested in an ``{"contents": ...}`` envelope."""
    contents = payload.get("contents") if isinstance(payload, dict) else None
    if not isinstance(contents, str):
        raise UnwrapError("relay returned no contents")
    try:
        return json.loads(contents)
    except ValueError as exc:
        raise UnwrapError(f"relay contents are not JSON: {exc}") from exc


def _quoted(template: str) -> Callable[[str], str]:
    """Wrap a URL by URL-encoding it into *template*."""
    def wrap(url: str) -> str:
        return template.format(url=urllib.parse.quote(url, safe=""))
    return wrap


@dataclass(frozen=True)
class FetchStrategy:
    """One way of relaying a request and unwrapping its response."""

    name: str
    wrap: Callable[[str], str]
    unwrap: Callable[[Any], Any] = _passthrough
    transport: str = CURL


STRATEGY_REGISTRY: dict[str, FetchStrategy] = {
    "direct": FetchStrategy(name="direct", wrap=_passthrough),
    "corsproxy": FetchStrategy(
        name="corsproxy",
        wrap=_quoted(Settings.CORSPROXY_URL),
    ),
    "allorigins": FetchStrategy(
        name="allorigins",
        wrap=_quoted(Settings.ALLORIGINS_URL),
        unwrap=_unwrap_contents,
    ),
    "cloudscraper": FetchStrategy(
        name="cloudscraper",
        wrap=_passthrough,
        transport=CLOUDSCRAPER,
    ),
}


def build_strategies(names: Iterable[str]) -> list[FetchStrategy]:
    """Resolve strategy ids to strategies, preserving order.

    Raises ``ValueError`` on an unknown id.
    """
    strategies: list[FetchStrategy] = []
    for name in names:
        if name not in STRATEGY_REGISTRY:
            valid = ", ".join(sorted(STRATEGY_REGISTRY))
            raise ValueError(
                f"Unknown fetch strategy '{name}' (available: {valid})"
            )
        strategies.append(STRATEGY_REGISTRY[name])
    return strategies


class ResilientFetcher:
    """Fetch JSON resources with ordered strategy fallthrough."""

    def __init__(
        self,
        strategies: list[FetchStrategy] | None = None,
        session: AsyncSession | None = None,
        timeout: float | None = None,
    ) -> None:
        self.strategies = (
            strategies
            if strategies is not None
            else build_strategies(Settings.FETCH_STRATEGIES)
        )
        self.session = session or AsyncSession(
            impersonate=Settings.IMPERSONATE_BROWSER,
            headers=Settings.DEFAULT_HEADERS,
        )
        self.timeout = timeout or Settings.REQUEST_TIMEOUT

    async def __aenter__(self) -> "ResilientFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self.session.close()

    def _cloudscraper_get(self, url: str) -> tuple[int, str]:
        """Blocking GET through cloudscraper's JS challenge solver."""
        _cs: Any = cloudscraper
        with _cs.create_scraper() as scraper:
            resp: Any = scraper.get(
                url,
                headers=Settings.DEFAULT_HEADERS,
                timeout=self.timeout,
            )
            return int(resp.status_code), str(resp.text)

    async def fetch_with(
        self, strategy: FetchStrategy, url: str,
    ) -> Any:
        """Fetch *url* through one strategy, raising on any failure.

        The cloudscraper transport is bounded as a whole, challenge
        delay included, by the same per-attempt timeout.
        """
        wrapped = strategy.wrap(url)
        if strategy.transport == CLOUDSCRAPER:
            try:
                status, text = await asyncio.wait_for(
                    asyncio.to_thread(self._cloudscraper_get, wrapped),
                    self.timeout,
                )
            except TimeoutError as exc:
                raise TimeoutError(
                    f"cloudscraper attempt exceeded {self.timeout}s"
                ) from exc
        else:
            resp = await self.session.get(wrapped, timeout=self.timeout)
            status, text = resp.status_code, resp.text

        if not 200 <= status < 300:
            raise UpstreamHTTPError(status, wrapped)
        return strategy.unwrap(json.loads(text))

    async def fetch_json(self, url: str) -> Any:
        """Return the decoded JSON for *url* from the first working strategy.

        Raises the last strategy's error once all are exhausted, or
        ``AllStrategiesFailedError`` if none was recorded.
        """
        last_error: Exception | None = None
        for strategy in self.strategies:
            try:
                data = await self.fetch_with(strategy, url)
            except Exception as exc:
                logger.warning(
                    "[%s] Strategy failed for %s: %s",
                    strategy.name,
                    url,
                    exc,
                    exc_info=True,
                )
                last_error = exc
                continue
            logger.debug("[%s] Fetched %s", strategy.name, url)
            return data

        if last_error is not None:
            raise last_error
        raise AllStrategiesFailedError(
            f"All fetch strategies failed for: {url}"
        )
