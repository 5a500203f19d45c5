# src/processing/data_processor.py

"""Turn raw catalog products (plus optional detail) into display records."""

import logging
from typing import Any

from src.config.settings import Settings
from src.models.product import ProductDetail, RawProduct
from src.models.record import ProcessedRecord
from src.processing.brand_logos import get_high_res_logo
from src.processing.commission_calculator import CommissionCalculator
from src.processing.deal_score import DealScoreCalculator
from src.processing.fx_normalizer import FXNormalizer
from src.processing.stock_resolver import StockResolver

logger = logging.getLogger("giftcard_monitor.processing")


class DataProcessor:
    """Processing facade bound to one cycle's FX table.

    The FX multiplier is normalised once at construction, so a
    malformed table fails fast with ``MissingRateError`` before any
    record is built.
    """

    def __init__(
        self,
        fx_rates: dict[str, Any],
        currency: str | None = None,
    ) -> None:
        self.currency = currency or Settings.CURRENCY
        self.local_per_usd = FXNormalizer.local_per_usd(
            fx_rates, self.currency
        )

    def process(
        self,
        product: RawProduct,
        detail: ProductDetail | None = None,
    ) -> ProcessedRecord:
        """Build a fresh record for *product*.

        Without *detail* the commission is Unknown and the deal score
        uses the neutral commission.
        """
        commission = CommissionCalculator.calculate(
            detail, self.local_per_usd
        )
        logo = (
            get_high_res_logo(product.name)
            or product.logo_preview
            or product.icon_preview
        )
        return ProcessedRecord(
            product_id=product.product_id,
            name=product.name,
            price_range_label=product.price_range_label,
            local_per_usd=self.local_per_usd,
            commission=commission,
            stock_status=StockResolver.resolve(product, detail),
            rating_value=product.rating_value,
            review_count=product.review_count,
            categories=product.categories,
            logo_url=logo,
            deal_score=DealScoreCalculator.score(
                commission, product.rating_value
            ),
        )
