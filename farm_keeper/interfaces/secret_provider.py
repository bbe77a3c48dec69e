"""Secret provider protocol — named secret lookup."""
from typing import Protocol


class SecretProvider(Protocol):
    """Resolve a secret name to its value; raise SecretNotFound if absent."""

    def resolve(self, name: str) -> str: ...
