"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() runs once in the composition root, before AppSettings.from_env(),
so payment configuration (receivable address, facilitator URL, ...) can live in
a JSON secret instead of plain environment variables.
"""

import json
import logging
import os
from typing import Any, Optional

import boto3

from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes JSON secrets from AWS Secrets Manager."""

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        """Fetch a secret by ARN or name and parse its JSON SecretString.

        Raises:
            ValueError: if the secret is not a JSON object.
        """
        response = self._client.get_secret_value(SecretId=secret_id)
        secret = json.loads(response["SecretString"])
        if not isinstance(secret, dict):
            raise ValueError(f"Secret {secret_id!r} must be a JSON object of key-value pairs")
        return secret

    def load_into_env(self, secret_id: str, overwrite: bool = False) -> list[str]:
        """Copy the secret's key-value pairs into os.environ.

        Variables already present in the environment win unless *overwrite* is
        set, so a local .env can still shadow a deployed secret.

        Returns:
            The keys that were written.
        """
        written = []
        for key, value in self.get_secret(secret_id).items():
            if not overwrite and key in os.environ:
                continue
            os.environ[key] = str(value)
            written.append(key)
        logger.info("Loaded %d variable(s) from secret %s", len(written), secret_id)
        return written
