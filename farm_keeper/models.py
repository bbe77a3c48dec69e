"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum


@dataclass(frozen=True)
class PositionSnapshot:
    """Position of one asset in the farm contract, in the asset's base units."""

    supplied: int
    borrowed: int
    rewards: int

    @property
    def net_position(self) -> int:
        return self.supplied - self.borrowed


class Action(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    HOLD = "hold"


@dataclass(frozen=True)
class AssetAction:
    """Outcome of evaluating a single asset."""

    symbol: str
    address: str
    apy: float
    action: Action
    amount: int = 0
    tx_hash: str = ""


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of one keeper invocation."""

    actions: tuple[AssetAction, ...] = ()
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_units(value: str, decimals: int) -> int:
    """Convert a decimal string such as ``"1000"`` to base units.

    >>> parse_units("1000", 6)
    1000000000
    >>> parse_units("0.5", 18)
    500000000000000000
    """
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")

    scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value!r} has more than {decimals} decimal places")
    return int(scaled)
