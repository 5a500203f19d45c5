# src/processing/commission_calculator.py

"""Derive per-package markup over face value from detail packages."""

import logging

from src.models.commission import (
    UNKNOWN,
    Commission,
    CommissionEntry,
    PerPackageCommission,
    UniformCommission,
)
from src.models.product import Package, ProductDetail

logger = logging.getLogger("giftcard_monitor.processing")


def _round2(value: float) -> float:
    """Round to 2 dp, folding ``-0.0`` into ``0.0``."""
    return round(value, 2) + 0.0


class CommissionCalculator:
    """Compute the commission a product charges over face value."""

    @staticmethod
    def cost_in_local(
        package: Package, local_per_usd: float,
    ) -> float | None:
        """Local-currency cost, preferring the direct minor-unit price.

        Returns ``None`` when the package carries no positive price.
        """
        minor = package.local_price_minor
        if minor is not None and minor > 0:
            return minor / 100
        if package.usd_price is not None and package.usd_price > 0:
            return package.usd_price * local_per_usd
        return None

    @staticmethod
    def entries(
        packages: tuple[Package, ...],
        local_per_usd: float,
    ) -> list[CommissionEntry]:
        """Build one entry per package with a positive face value and price.

        Returns entries ordered by ascending face value.
        """
        result: list[CommissionEntry] = []
        for package in packages:
            face = package.face_value
            if face is None or face <= 0:
                logger.debug(
                    "Skipped package '%s' with face value %r",
                    package.label,
                    face,
                )
                continue
            cost = CommissionCalculator.cost_in_local(
                package, local_per_usd
            )
            if cost is None:
                logger.debug(
                    "Skipped unpriced package '%s' (face value %s)",
                    package.label,
                    face,
                )
                continue
            result.append(
                CommissionEntry(
                    face_value=face,
                    commission_rate=_round2((cost - face) / face * 100),
                    cost_in_local=_round2(cost),
                )
            )
        return sorted(result, key=lambda e: e.face_value)

    @staticmethod
    def calculate(
        detail: ProductDetail | None,
        local_per_usd: float,
    ) -> Commission:
        """Return Unknown, a uniform rate, or the per-package list."""
        if detail is None or not detail.packages:
            return UNKNOWN

        entries = CommissionCalculator.entries(
            detail.packages, local_per_usd
        )
        if not entries:
            logger.info(
                "Product %s has no package with a usable face value",
                detail.product_id,
            )
            return UNKNOWN

        distinct_rates = {e.commission_rate for e in entries}
        if len(distinct_rates) == 1:
            return UniformCommission(rate=entries[0].commission_rate)
        return PerPackageCommission(entries=tuple(entries))
