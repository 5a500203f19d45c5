# src/models/record.py

"""Display-ready record produced for each catalog product."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.models.commission import (
    Commission,
    PerPackageCommission,
    UniformCommission,
)


class StockStatus(str, Enum):
    """Binary stock state shown to consumers."""

    IN_STOCK = "In Stock"
    OUT_OF_STOCK = "Out of Stock"


@dataclass(frozen=True)
class ProcessedRecord:
    """One processed gift card.  Rebuilt, never mutated, on new detail."""

    product_id: str
    name: str
    price_range_label: str
    local_per_usd: float
    commission: Commission
    stock_status: StockStatus
    rating_value: float
    review_count: int
    categories: tuple[str, ...]
    logo_url: str
    deal_score: float

    @property
    def in_stock(self) -> bool:
        return self.stock_status is StockStatus.IN_STOCK

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain JSON-compatible types."""
        commission: Any
        if isinstance(self.commission, UniformCommission):
            commission = self.commission.rate
        elif isinstance(self.commission, PerPackageCommission):
            commission = [
                {
                    "face_value": e.face_value,
                    "commission_rate": e.commission_rate,
                    "cost_in_local": e.cost_in_local,
                }
                for e in self.commission.entries
            ]
        else:
            commission = None
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price_range": self.price_range_label,
            "local_per_usd": self.local_per_usd,
            "commission": commission,
            "stock_status": self.stock_status.value,
            "rating_value": self.rating_value,
            "review_count": self.review_count,
            "categories": list(self.categories),
            "logo_url": self.logo_url,
            "deal_score": self.deal_score,
        }
