"""Approximate APY from a position snapshot.

Rewards are treated as accrued over one day and divided by the number of
seconds in a day before annualising. The arithmetic is integer-only until the
final conversion, so results are truncated to two decimal places.
"""
from __future__ import annotations

from ..errors import UndefinedYieldError
from ..models import PositionSnapshot

SECONDS_PER_DAY = 86_400
DAYS_PER_YEAR = 365


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def estimate_apy(snapshot: PositionSnapshot) -> float:
    """Return the estimated APY of ``snapshot`` as a percentage.

    Raises:
        UndefinedYieldError: supplied equals borrowed.
    """
    net_position = snapshot.net_position
    if net_position == 0:
        raise UndefinedYieldError(
            f"Net position is zero (supplied={snapshot.supplied}, "
            f"borrowed={snapshot.borrowed})"
        )

    daily_rewards = snapshot.rewards // SECONDS_PER_DAY
    scaled = _div_trunc(daily_rewards * DAYS_PER_YEAR * 100, net_position)
    return scaled / 100
