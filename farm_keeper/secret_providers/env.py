"""Environment-backed secret provider (.env aware)."""
import logging
import os

from dotenv import load_dotenv

from ..errors import SecretNotFound

logger = logging.getLogger(__name__)


class EnvSecretProvider:
    """Resolve secrets from the process environment.

    A ``.env`` file, when present, is loaded once at construction. Values
    already set in the environment win over the file.
    """

    def __init__(self, dotenv_path: str | None = None) -> None:
        load_dotenv(dotenv_path)

    def resolve(self, name: str) -> str:
        value = os.environ.get(name, "")
        if not value:
            raise SecretNotFound(f"Secret '{name}' is not set")
        logger.debug("Resolved secret %s", name)
        return value
