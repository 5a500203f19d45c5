# src/filters/record_filter.py

"""Filtering, ordering and summary statistics over processed records."""

import logging
from dataclasses import dataclass

from src.models.commission import UnknownCommission
from src.models.record import ProcessedRecord
from src.processing.deal_score import DealScoreCalculator

logger = logging.getLogger("giftcard_monitor.filters")

SORT_FIELDS: tuple[str, ...] = (
    "deal",
    "commission",
    "rating",
    "reviews",
    "name",
)


@dataclass
class MarketSummary:
    """Headline numbers for a record set."""

    in_stock: int
    avg_commission: float | None
    best_deal: str


class RecordFilter:
    """Narrow and order a record set for display."""

    @staticmethod
    def filter(
        records: tuple[ProcessedRecord, ...] | list[ProcessedRecord],
        search: str = "",
        category: str | None = None,
        in_stock_only: bool = False,
    ) -> list[ProcessedRecord]:
        """Keep records matching the name search, category and stock.

        Name search is a case-insensitive substring match.
        """
        needle = search.lower()
        kept = [
            r
            for r in records
            if needle in r.name.lower()
            and (category is None or category in r.categories)
            and (not in_stock_only or r.in_stock)
        ]
        dropped = len(records) - len(kept)
        if dropped:
            logger.debug("Record filter dropped %d records", dropped)
        return kept

    @staticmethod
    def sort(
        records: list[ProcessedRecord],
        field: str = "deal",
    ) -> list[ProcessedRecord]:
        """Order records for display.

        ``deal``, ``rating`` and ``reviews`` sort descending; ``name``
        ascending; ``commission`` ascending with Unknown last.
        """
        if field == "deal":
            return sorted(records, key=lambda r: r.deal_score, reverse=True)
        if field == "rating":
            return sorted(records, key=lambda r: r.rating_value, reverse=True)
        if field == "reviews":
            return sorted(records, key=lambda r: r.review_count, reverse=True)
        if field == "name":
            return sorted(records, key=lambda r: r.name.lower())
        if field == "commission":
            return sorted(
                records,
                key=lambda r: (
                    isinstance(r.commission, UnknownCommission),
                    DealScoreCalculator.representative_commission(
                        r.commission
                    ),
                ),
            )
        raise ValueError(
            f"Unknown sort field '{field}' (use one of {', '.join(SORT_FIELDS)})"
        )

    @staticmethod
    def categories(
        records: tuple[ProcessedRecord, ...] | list[ProcessedRecord],
    ) -> list[str]:
        """Distinct categories in first-seen order."""
        seen: dict[str, None] = {}
        for record in records:
            for category in record.categories:
                seen.setdefault(category, None)
        return list(seen)

    @staticmethod
    def summarize(
        records: tuple[ProcessedRecord, ...] | list[ProcessedRecord],
    ) -> MarketSummary:
        """In-stock count, mean known commission, best in-stock deal."""
        in_stock = [r for r in records if r.in_stock]
        known = [
            DealScoreCalculator.representative_commission(r.commission)
            for r in in_stock
            if not isinstance(r.commission, UnknownCommission)
        ]
        best = max(in_stock, key=lambda r: r.deal_score, default=None)
        return MarketSummary(
            in_stock=len(in_stock),
            avg_commission=(
                round(sum(known) / len(known), 2) if known else None
            ),
            best_deal=best.name if best else "N/A",
        )
