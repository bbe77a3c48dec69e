"""Leveraged yield-farm contract wrapper."""
from .contract import LeveragedYieldFarm, load_abi

__all__ = ["LeveragedYieldFarm", "load_abi"]
