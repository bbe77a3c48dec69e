"""AWS Secrets Manager secret provider."""
from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ..errors import SecretNotFound

logger = logging.getLogger(__name__)


class AwsSecretsManagerProvider:
    """Resolve secrets by name from AWS Secrets Manager.

    ``SecretString`` is returned as is. Binary secrets are returned as text;
    boto3 has already base64-decoded ``SecretBinary``.
    """

    def __init__(self, region_name: str = "", client: Any = None) -> None:
        self._client = client or boto3.client(
            "secretsmanager", region_name=region_name or None
        )

    def resolve(self, name: str) -> str:
        try:
            response = self._client.get_secret_value(SecretId=name)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                raise SecretNotFound(f"Secret '{name}' not found in Secrets Manager") from e
            raise

        if response.get("SecretString"):
            value = response["SecretString"]
        else:
            value = response.get("SecretBinary", b"").decode("utf-8")

        if not value:
            raise SecretNotFound(f"Secret '{name}' is empty")
        logger.debug("Resolved secret %s from Secrets Manager", name)
        return value
