"""Secret providers."""
from ..config import SecretsConfig
from ..interfaces.secret_provider import SecretProvider
from .aws import AwsSecretsManagerProvider
from .env import EnvSecretProvider

__all__ = ["AwsSecretsManagerProvider", "EnvSecretProvider", "build_secret_provider"]


def build_secret_provider(config: SecretsConfig) -> SecretProvider:
    """Return the secret backend selected by ``secrets.provider``."""
    if config.provider == "aws":
        return AwsSecretsManagerProvider(config.region)
    return EnvSecretProvider()
