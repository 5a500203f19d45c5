# src/processing/formatting.py

"""Human-readable renderings of commission results."""

from src.config.settings import Settings
from src.models.commission import (
    Commission,
    CommissionEntry,
    PerPackageCommission,
    UniformCommission,
)

_CURRENCY_SYMBOLS: dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def _num(value: float) -> str:
    """Format without trailing zeros: 1.20 -> '1.2', 0.0 -> '0'."""
    text = f"{value + 0.0:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def currency_symbol(currency: str | None = None) -> str:
    code = currency or Settings.CURRENCY
    return _CURRENCY_SYMBOLS.get(code, code)


def format_package(
    entry: CommissionEntry,
    currency: str | None = None,
) -> str:
    """One package as ``500₹: 0%``."""
    symbol = currency_symbol(currency)
    return f"{_num(entry.face_value)}{symbol}: {_num(entry.commission_rate)}%"


def format_commission(
    commission: Commission,
    currency: str | None = None,
) -> str:
    """Short label: ``N/A``, ``1.2%`` or ``100₹: 1.2%, 500₹: 0%``."""
    if isinstance(commission, UniformCommission):
        return f"{_num(commission.rate)}%"
    if isinstance(commission, PerPackageCommission) and commission.entries:
        return ", ".join(
            format_package(e, currency) for e in commission.entries
        )
    return "N/A"


def commission_tooltip(
    commission: Commission,
    currency: str | None = None,
) -> str:
    """Multi-line per-package breakdown of cost versus face value."""
    if isinstance(commission, UniformCommission):
        return f"{_num(commission.rate)}%"
    if isinstance(commission, PerPackageCommission) and commission.entries:
        symbol = currency_symbol(currency)
        return "\n".join(
            f"{_num(e.face_value)}{symbol} package: "
            f"{_num(e.cost_in_local)}{symbol} "
            f"({_num(e.commission_rate)}% commission)"
            for e in commission.entries
        )
    return "No package data available"


def best_package(commission: Commission) -> CommissionEntry | None:
    """Lowest-commission package of a per-package result.

    Ties go to the smaller face value.
    """
    if not isinstance(commission, PerPackageCommission):
        return None
    if not commission.entries:
        return None
    return min(
        commission.entries,
        key=lambda e: (e.commission_rate, e.face_value),
    )
