import logging
import os

import boto3
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def get_secrets_client(region_name: str | None = None):
    """Create Secrets Manager client."""
    region = region_name or os.environ.get("AWS_REGION")
    if region:
        return boto3.client("secretsmanager", region_name=region)
    return boto3.client("secretsmanager")


def fetch_secret(secret_id: str, region_name: str | None = None) -> bytes:
    """
    Fetch the latest version of a secret as raw bytes.

    Secrets Manager stores a payload either as SecretString or SecretBinary;
    both come back as bytes so callers decode the way they need.

    Args:
        secret_id: Secret name or ARN
        region_name: AWS region override (default: AWS_REGION or boto3 default)

    Returns:
        The secret payload
    """
    client = get_secrets_client(region_name)
    response = client.get_secret_value(SecretId=secret_id, VersionStage="AWSCURRENT")

    if "SecretBinary" in response:
        payload = response["SecretBinary"]
    else:
        payload = response["SecretString"].encode("utf-8")

    logger.info("Fetched secret %s", secret_id)
    return payload
