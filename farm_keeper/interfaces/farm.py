"""Farm contract protocol — the on-chain position and its two mutating calls."""
from typing import Protocol

from ..models import PositionSnapshot


class FarmContract(Protocol):
    """Abstract interface for the leveraged yield-farm contract."""

    async def get_position_info(self, asset_address: str) -> PositionSnapshot: ...

    async def deposit(self, asset_address: str, amount: int, leverage: int) -> str: ...

    async def withdraw(self, asset_address: str, amount: int) -> str: ...
