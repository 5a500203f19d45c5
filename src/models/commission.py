# src/models/commission.py

"""Commission result variants: unknown, uniform, or per-package."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommissionEntry:
    """Markup of a single package over its face value."""

    face_value: float
    commission_rate: float
    cost_in_local: float


@dataclass(frozen=True)
class UnknownCommission:
    """No package data available (yet) for this product."""


@dataclass(frozen=True)
class UniformCommission:
    """Every package carries the same markup."""

    rate: float


@dataclass(frozen=True)
class PerPackageCommission:
    """Packages disagree; entries are ordered by ascending face value."""

    entries: tuple[CommissionEntry, ...]


Commission = UnknownCommission | UniformCommission | PerPackageCommission

UNKNOWN = UnknownCommission()
