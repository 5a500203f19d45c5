# src/models/product.py

"""Catalog and product-detail models parsed from the upstream feed."""

import math
from dataclasses import dataclass
from typing import Any


def _to_optional_float(value: Any) -> float | None:
    """Coerce a JSON scalar to a finite float, or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_float(value: Any, default: float = 0.0) -> float:
    """Coerce a JSON scalar to a finite float, falling back to *default*."""
    number = _to_optional_float(value)
    return default if number is None else number


def _to_categories(value: Any) -> tuple[str, ...]:
    """Normalise ``categories`` to a tuple; a bare string is one category."""
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, (list, tuple)):
        return tuple(str(c) for c in value if c is not None)
    return ()


@dataclass(frozen=True)
class RawProduct:
    """A single gift card as listed in the catalog feed."""

    product_id: str
    name: str
    price_range_label: str = ""
    rating_value: float = 0.0
    review_count: int = 0
    currency: str = ""
    stock_label: str = ""
    categories: tuple[str, ...] = ()
    icon_preview: str = ""
    logo_preview: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RawProduct":
        """Build a RawProduct from one catalog ``products`` entry."""
        return cls(
            product_id=str(data.get("_id", "")),
            name=str(data.get("name") or data.get("baseName") or ""),
            price_range_label=str(data.get("_priceRange") or ""),
            rating_value=max(0.0, _to_float(data.get("_ratingValue"))),
            review_count=max(0, int(_to_float(data.get("_reviewCount")))),
            currency=str(data.get("currency") or ""),
            stock_label=str(data.get("label") or ""),
            categories=_to_categories(data.get("categories")),
            icon_preview=str(data.get("iconPreview") or ""),
            logo_preview=str(data.get("logoPreview") or ""),
        )


@dataclass(frozen=True)
class Package:
    """One purchasable denomination of a gift card.

    ``face_value`` comes from the numeric ``amount`` field; the
    free-text ``value`` label is kept for display only because some
    denominations embed non-numeric tokens.  ``usd_price`` is ``None``
    when the feed omits it; such a package is unpriced unless it has a
    local price.
    """

    face_value: float | None
    usd_price: float | None
    local_price_minor: float | None = None
    label: str = ""

    @classmethod
    def from_api(
        cls, data: dict[str, Any], currency: str,
    ) -> "Package":
        """Build a Package, reading the local price from ``<cur>Price``."""
        local_key = f"{currency.lower()}Price" if currency else ""
        return cls(
            face_value=_to_optional_float(data.get("amount")),
            usd_price=_to_optional_float(data.get("usdPrice")),
            local_price_minor=(
                _to_optional_float(data.get(local_key))
                if local_key
                else None
            ),
            label=str(data.get("value") or ""),
        )


@dataclass(frozen=True)
class ProductDetail:
    """Per-product detail record carrying packages and stock flag."""

    product_id: str
    packages: tuple[Package, ...] = ()
    out_of_stock: bool = False

    @classmethod
    def from_api(
        cls, data: dict[str, Any], currency: str,
    ) -> "ProductDetail":
        """Build a ProductDetail from a ``/product/<id>`` payload."""
        pkg_currency = str(data.get("currency") or currency)
        raw_packages = data.get("packages") or []
        return cls(
            product_id=str(data.get("_id", "")),
            packages=tuple(
                Package.from_api(p, pkg_currency)
                for p in raw_packages
                if isinstance(p, dict)
            ),
            out_of_stock=bool(data.get("outOfStock", False)),
        )
