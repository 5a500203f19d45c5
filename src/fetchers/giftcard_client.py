# src/fetchers/giftcard_client.py

"""Read-only client for the Bitrefill catalog, product and FX endpoints."""

import logging
from dataclasses import replace
from typing import Any

from src.config.settings import Settings
from src.fetchers.resilient_fetcher import ResilientFetcher
from src.models.errors import FatalFetchError, PartialDetailError
from src.models.product import ProductDetail, RawProduct

logger = logging.getLogger("giftcard_monitor.client")


class GiftCardClient:
    """Typed access to the three upstream resources.

    Catalog and FX failures are fatal for a refresh cycle and surface as
    ``FatalFetchError``; a detail failure only affects one product and
    surfaces as ``PartialDetailError``.
    """

    def __init__(
        self,
        fetcher: ResilientFetcher | None = None,
        country: str | None = None,
        currency: str | None = None,
    ) -> None:
        self.fetcher = fetcher or ResilientFetcher()
        self.country = country or Settings.COUNTRY_CODE
        self.currency = currency or Settings.CURRENCY

    async def close(self) -> None:
        await self.fetcher.close()

    def _url(self, path: str) -> str:
        return f"{Settings.API_BASE_URL}{path}"

    async def get_gift_cards(self) -> list[RawProduct]:
        """Fetch the catalog, keep local-currency cards, one per id."""
        url = self._url(Settings.CATALOG_PATH.format(country=self.country))
        try:
            data: Any = await self.fetcher.fetch_json(url)
        except Exception as exc:
            raise FatalFetchError(
                f"Could not load gift card catalog: {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise FatalFetchError("Catalog response is not a JSON object")

        products: list[RawProduct] = []
        seen: set[str] = set()
        for item in data.get("products") or []:
            if not isinstance(item, dict):
                continue
            if item.get("currency") != self.currency:
                continue
            product = RawProduct.from_api(item)
            if not product.product_id or product.product_id in seen:
                continue
            seen.add(product.product_id)
            products.append(product)

        logger.info(
            "Catalog returned %d %s gift cards",
            len(products),
            self.currency,
        )
        return products

    async def get_fx_rates(self) -> dict[str, Any]:
        """Fetch the currency-rate table."""
        url = self._url(Settings.FX_RATES_PATH)
        try:
            data: Any = await self.fetcher.fetch_json(url)
        except Exception as exc:
            raise FatalFetchError(
                f"Could not load FX rates: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise FatalFetchError("FX rates response is not a JSON object")
        return data

    async def get_product_details(self, product_id: str) -> ProductDetail:
        """Fetch packages and stock flag for one product."""
        url = self._url(Settings.PRODUCT_PATH.format(product_id=product_id))
        try:
            data: Any = await self.fetcher.fetch_json(url)
        except Exception as exc:
            raise PartialDetailError(
                product_id, f"Detail fetch failed for {product_id}: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise PartialDetailError(
                product_id, f"Detail for {product_id} is not a JSON object"
            )
        detail = ProductDetail.from_api(data, self.currency)
        if not detail.product_id:
            detail = replace(detail, product_id=product_id)
        return detail
