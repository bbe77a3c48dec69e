"""Service modules"""
from .keeper import Keeper
from .yield_estimator import estimate_apy

__all__ = ["Keeper", "estimate_apy"]
