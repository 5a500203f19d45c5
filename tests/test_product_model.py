# tests/test_product_model.py

"""Tests for catalog and detail parsing."""

import unittest
from dataclasses import FrozenInstanceError

from src.models.product import Package, ProductDetail, RawProduct

CATALOG_ITEM = {
    "_id": "zomato-india",
    "name": "Zomato India",
    "baseName": "Zomato",
    "_priceRange": "100 - 5000 INR",
    "_ratingValue": 4.6,
    "_reviewCount": 312,
    "currency": "INR",
    "countryCode": "IN",
    "label": "",
    "categories": ["food", "delivery"],
    "iconPreview": "data:image/png;base64,AAA",
}


class TestRawProduct(unittest.TestCase):
    """RawProduct.from_api mapping."""

    def test_maps_catalog_fields(self) -> None:
        """Feed keys map to their model fields."""
        product = RawProduct.from_api(CATALOG_ITEM)
        self.assertEqual(product.product_id, "zomato-india")
        self.assertEqual(product.name, "Zomato India")
        self.assertEqual(product.price_range_label, "100 - 5000 INR")
        self.assertEqual(product.rating_value, 4.6)
        self.assertEqual(product.review_count, 312)
        self.assertEqual(product.currency, "INR")
        self.assertEqual(product.categories, ("food", "delivery"))
        self.assertEqual(product.icon_preview, "data:image/png;base64,AAA")
        self.assertEqual(product.logo_preview, "")

    def test_missing_rating_defaults_to_zero(self) -> None:
        """Absent or negative ratings clamp to zero."""
        product = RawProduct.from_api({"_id": "x", "_ratingValue": -2})
        self.assertEqual(product.rating_value, 0.0)
        self.assertEqual(product.review_count, 0)
        self.assertEqual(product.categories, ())

    def test_non_finite_review_count_defaults(self) -> None:
        """Infinity or NaN counts fall back to zero instead of raising."""
        for raw in (float("inf"), "Infinity", float("nan")):
            with self.subTest(raw=raw):
                product = RawProduct.from_api(
                    {"_id": "x", "_reviewCount": raw, "_ratingValue": raw}
                )
                self.assertEqual(product.review_count, 0)
                self.assertEqual(product.rating_value, 0.0)

    def test_string_categories_kept_whole(self) -> None:
        """A bare category string is one category, not its characters."""
        product = RawProduct.from_api({"_id": "x", "categories": "food"})
        self.assertEqual(product.categories, ("food",))
        product = RawProduct.from_api({"_id": "x", "categories": 42})
        self.assertEqual(product.categories, ())

    def test_is_immutable(self) -> None:
        """Products cannot be modified after parsing."""
        product = RawProduct.from_api(CATALOG_ITEM)
        with self.assertRaises(FrozenInstanceError):
            product.name = "Other"  # type: ignore[misc]


class TestPackage(unittest.TestCase):
    """Package.from_api mapping."""

    def test_face_value_from_numeric_amount(self) -> None:
        """Face value ignores the free-text label."""
        pkg = Package.from_api(
            {"value": "500 + 50 bonus", "amount": 500, "usdPrice": 5.7},
            "INR",
        )
        self.assertEqual(pkg.face_value, 500.0)
        self.assertEqual(pkg.label, "500 + 50 bonus")
        self.assertEqual(pkg.usd_price, 5.7)

    def test_missing_amount_is_none(self) -> None:
        """Without a numeric amount the face value is unknown."""
        pkg = Package.from_api({"value": "100", "usdPrice": 1.2}, "INR")
        self.assertIsNone(pkg.face_value)

    def test_missing_usd_price_is_none(self) -> None:
        """An absent USD price is unknown rather than zero."""
        pkg = Package.from_api({"value": "100", "amount": 100}, "INR")
        self.assertIsNone(pkg.usd_price)

    def test_local_price_read_from_currency_field(self) -> None:
        """``inrPrice`` is picked up as the minor-unit local price."""
        pkg = Package.from_api(
            {"amount": 100, "usdPrice": 1.2, "inrPrice": 10120}, "INR"
        )
        self.assertEqual(pkg.local_price_minor, 10120.0)

    def test_local_price_absent(self) -> None:
        """No local price field leaves it as None."""
        pkg = Package.from_api({"amount": 100, "usdPrice": 1.2}, "INR")
        self.assertIsNone(pkg.local_price_minor)


class TestProductDetail(unittest.TestCase):
    """ProductDetail.from_api mapping."""

    def test_parses_packages_and_stock(self) -> None:
        """Packages are parsed in order; outOfStock is a bool."""
        detail = ProductDetail.from_api(
            {
                "_id": "zomato-india",
                "currency": "INR",
                "outOfStock": True,
                "packages": [
                    {"amount": 100, "usdPrice": 1.15},
                    {"amount": 500, "usdPrice": 5.66},
                    "garbage",
                ],
            },
            "INR",
        )
        self.assertEqual(detail.product_id, "zomato-india")
        self.assertTrue(detail.out_of_stock)
        self.assertEqual(
            [p.face_value for p in detail.packages], [100.0, 500.0]
        )

    def test_missing_packages(self) -> None:
        """A detail without packages has an empty tuple."""
        detail = ProductDetail.from_api({"_id": "x"}, "INR")
        self.assertEqual(detail.packages, ())
        self.assertFalse(detail.out_of_stock)


if __name__ == "__main__":
    unittest.main()
