# tests/test_commission_calculator.py

"""Tests for per-package commission derivation."""

import unittest

from src.models.commission import (
    UNKNOWN,
    PerPackageCommission,
    UniformCommission,
)
from src.models.product import Package, ProductDetail
from src.processing.commission_calculator import CommissionCalculator

LOCAL_PER_USD = 80.0


def _detail(*packages: Package) -> ProductDetail:
    """Wrap packages in a minimal ProductDetail."""
    return ProductDetail(product_id="p1", packages=packages)


class TestCalculate(unittest.TestCase):
    """CommissionCalculator.calculate behaviour."""

    def test_no_detail_is_unknown(self) -> None:
        """Absent detail yields the Unknown sentinel, not zero."""
        self.assertIs(
            CommissionCalculator.calculate(None, LOCAL_PER_USD), UNKNOWN
        )

    def test_empty_packages_is_unknown(self) -> None:
        """A detail without packages yields Unknown."""
        self.assertIs(
            CommissionCalculator.calculate(_detail(), LOCAL_PER_USD),
            UNKNOWN,
        )

    def test_all_packages_excluded_is_unknown(self) -> None:
        """Only non-positive face values leaves no usable data."""
        result = CommissionCalculator.calculate(
            _detail(
                Package(face_value=0, usd_price=1.0),
                Package(face_value=None, usd_price=1.0),
            ),
            LOCAL_PER_USD,
        )
        self.assertIs(result, UNKNOWN)

    def test_uniform_rate_collapses(self) -> None:
        """Identical rates collapse to a single value."""
        result = CommissionCalculator.calculate(
            _detail(
                Package(face_value=100, usd_price=1.5),
                Package(face_value=200, usd_price=3.0),
            ),
            LOCAL_PER_USD,
        )
        self.assertEqual(result, UniformCommission(rate=20.0))

    def test_at_cost_is_zero_not_unknown(self) -> None:
        """A computed 0% is distinct from Unknown."""
        result = CommissionCalculator.calculate(
            _detail(Package(face_value=100, usd_price=1.25)),
            LOCAL_PER_USD,
        )
        self.assertEqual(result, UniformCommission(rate=0.0))

    def test_differing_rates_listed_by_face_value(self) -> None:
        """Different rates give entries sorted by ascending face value."""
        result = CommissionCalculator.calculate(
            _detail(
                Package(face_value=500, usd_price=6.3),
                Package(face_value=100, usd_price=1.5),
            ),
            LOCAL_PER_USD,
        )
        assert isinstance(result, PerPackageCommission)
        self.assertEqual(
            [e.face_value for e in result.entries], [100, 500]
        )
        self.assertEqual(result.entries[0].commission_rate, 20.0)
        self.assertEqual(result.entries[0].cost_in_local, 120.0)
        self.assertEqual(result.entries[1].commission_rate, 0.8)
        self.assertEqual(result.entries[1].cost_in_local, 504.0)

    def test_non_positive_face_values_excluded(self) -> None:
        """Excluded packages shrink the entry list."""
        packages = (
            Package(face_value=0, usd_price=1.0),
            Package(face_value=-5, usd_price=1.0),
            Package(face_value=100, usd_price=1.5),
            Package(face_value=500, usd_price=6.3),
        )
        result = CommissionCalculator.calculate(
            _detail(*packages), LOCAL_PER_USD
        )
        assert isinstance(result, PerPackageCommission)
        self.assertEqual(len(result.entries), 2)
        self.assertLess(len(result.entries), len(packages))

    def test_negative_commission_for_discount(self) -> None:
        """Cost under face value gives a negative rate."""
        result = CommissionCalculator.calculate(
            _detail(Package(face_value=100, usd_price=1.2)),
            LOCAL_PER_USD,
        )
        self.assertEqual(result, UniformCommission(rate=-4.0))

    def test_local_price_preferred_over_usd(self) -> None:
        """A direct minor-unit local price beats the USD conversion."""
        result = CommissionCalculator.calculate(
            _detail(
                Package(
                    face_value=100,
                    usd_price=999.0,
                    local_price_minor=10120,
                )
            ),
            LOCAL_PER_USD,
        )
        self.assertEqual(result, UniformCommission(rate=1.2))

    def test_unpriced_packages_excluded(self) -> None:
        """A package with no USD or local price is skipped, not free."""
        detail = ProductDetail.from_api(
            {"packages": [{"value": "100", "amount": 100}]}, "INR"
        )
        self.assertIs(
            CommissionCalculator.calculate(detail, LOCAL_PER_USD), UNKNOWN
        )

    def test_unpriced_package_dropped_from_list(self) -> None:
        """Priced packages still produce entries beside an unpriced one."""
        result = CommissionCalculator.calculate(
            _detail(
                Package(face_value=100, usd_price=None),
                Package(face_value=200, usd_price=0.0),
                Package(face_value=500, usd_price=6.3),
            ),
            LOCAL_PER_USD,
        )
        self.assertEqual(result, UniformCommission(rate=0.8))

    def test_input_not_mutated(self) -> None:
        """Package order on the detail is left untouched."""
        detail = _detail(
            Package(face_value=500, usd_price=6.3),
            Package(face_value=100, usd_price=1.5),
        )
        CommissionCalculator.calculate(detail, LOCAL_PER_USD)
        self.assertEqual(
            [p.face_value for p in detail.packages], [500, 100]
        )


class TestCostInLocal(unittest.TestCase):
    """CommissionCalculator.cost_in_local behaviour."""

    def test_minor_units_divided_by_hundred(self) -> None:
        """Paise are converted to rupees."""
        pkg = Package(face_value=100, usd_price=1.0, local_price_minor=10050)
        self.assertEqual(
            CommissionCalculator.cost_in_local(pkg, LOCAL_PER_USD), 100.5
        )

    def test_usd_price_converted(self) -> None:
        """Without a local price, USD is multiplied by the FX factor."""
        pkg = Package(face_value=100, usd_price=2.0)
        self.assertEqual(
            CommissionCalculator.cost_in_local(pkg, LOCAL_PER_USD), 160.0
        )

    def test_unpriced_package_returns_none(self) -> None:
        pkg = Package(face_value=100, usd_price=None)
        self.assertIsNone(
            CommissionCalculator.cost_in_local(pkg, LOCAL_PER_USD)
        )


if __name__ == "__main__":
    unittest.main()
