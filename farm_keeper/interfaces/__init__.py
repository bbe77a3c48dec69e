"""Protocol interfaces for the farm keeper."""
from .farm import FarmContract
from .notifier import Notifier
from .secret_provider import SecretProvider

__all__ = ["FarmContract", "Notifier", "SecretProvider"]
