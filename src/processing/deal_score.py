# src/processing/deal_score.py

"""Composite ranking score favouring low commission and high rating."""

from src.config.settings import Settings
from src.models.commission import (
    Commission,
    PerPackageCommission,
    UniformCommission,
)


class DealScoreCalculator:
    """Combine commission and rating into one scalar."""

    @staticmethod
    def representative_commission(commission: Commission) -> float:
        """Collapse a commission result to one comparable number.

        Unknown maps to the neutral default, a per-package result to
        the mean of its rates.
        """
        if isinstance(commission, UniformCommission):
            return commission.rate
        if isinstance(commission, PerPackageCommission) and commission.entries:
            rates = [e.commission_rate for e in commission.entries]
            return sum(rates) / len(rates)
        return Settings.NEUTRAL_COMMISSION

    @staticmethod
    def score(commission: Commission, rating_value: float) -> float:
        """Return the deal score rounded to 1 dp.

        Not capped: a negative commission (discount) pushes the score
        above the nominal 10.
        """
        value = DealScoreCalculator.representative_commission(commission)
        commission_part = (
            max(0.0, Settings.DEAL_COMMISSION_CEILING - value)
            * Settings.DEAL_COMMISSION_WEIGHT
        )
        rating_part = max(0.0, rating_value) * Settings.DEAL_RATING_WEIGHT
        return round(commission_part + rating_part, 1)
