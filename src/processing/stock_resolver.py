# src/processing/stock_resolver.py

"""Resolve in-stock / out-of-stock from catalog label and detail flag."""

from src.config.settings import Settings
from src.models.product import ProductDetail, RawProduct
from src.models.record import StockStatus


class StockResolver:
    """First out-of-stock signal wins; catalog label is checked first."""

    @staticmethod
    def resolve(
        product: RawProduct,
        detail: ProductDetail | None = None,
    ) -> StockStatus:
        if product.stock_label == Settings.OUT_OF_STOCK_LABEL:
            return StockStatus.OUT_OF_STOCK
        if detail is not None and detail.out_of_stock:
            return StockStatus.OUT_OF_STOCK
        return StockStatus.IN_STOCK
