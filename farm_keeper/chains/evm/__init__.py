"""EVM connection and signer helpers."""
from .client import connect, derive_signer

__all__ = ["connect", "derive_signer"]
