# src/processing/fx_normalizer.py

"""Reduce the upstream FX table to a single local-per-USD multiplier."""

import logging
from typing import Any

from src.models.errors import MissingRateError

logger = logging.getLogger("giftcard_monitor.processing")


class FXNormalizer:
    """Invert the local-currency to USD rate once per cycle."""

    @staticmethod
    def local_per_usd(
        fx_rates: dict[str, Any],
        currency: str,
    ) -> float:
        """Return how many local units buy 1 USD.

        The feed stores ``fx_rates[currency]["USD"]`` as the USD value
        of one local unit, so the multiplier is its reciprocal.

        Raises:
            MissingRateError: when the currency entry or its USD field
                is absent, or the rate is not a positive number.
        """
        entry = fx_rates.get(currency) if isinstance(fx_rates, dict) else None
        if not isinstance(entry, dict) or "USD" not in entry:
            raise MissingRateError(
                f"FX table has no USD rate for {currency}"
            )

        rate = entry["USD"]
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise MissingRateError(
                f"FX rate for {currency} is not numeric: {rate!r}"
            )
        if rate <= 0:
            raise MissingRateError(
                f"FX rate for {currency} must be positive, got {rate}"
            )

        local_per_usd = 1 / rate
        logger.debug("1 USD = %.4f %s", local_per_usd, currency)
        return local_per_usd
