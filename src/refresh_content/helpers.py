"""Helper functions for the refresh_content entry points."""

from __future__ import annotations

import argparse
from typing import Any

from common.cli_helpers import parse_json_bool

TWITTER_CREDENTIAL_SEPARATOR = ";"


def parse_dry_run(event: Any) -> bool:
    '''Read the dryRun attribute of a trigger event; anything unreadable means False.'''

    if not isinstance(event, dict):
        return False
    attributes = event.get("attributes")
    if not isinstance(attributes, dict):
        return False
    return parse_json_bool(attributes.get("dryRun"), default=False)


def parse_github_token(payload: bytes) -> str:
    '''Decode the GitHub access token secret.'''

    token = payload.decode("utf-8").strip()
    if not token:
        raise ValueError("GitHub token secret is empty")
    return token


def parse_twitter_credentials(payload: bytes) -> tuple[str, str, str, str]:
    '''Split the Twitter secret into consumer key/secret and token/secret.'''

    parts = [part.strip() for part in payload.decode("utf-8").split(TWITTER_CREDENTIAL_SEPARATOR)]
    if len(parts) != 4 or not all(parts):
        raise ValueError(
            "Twitter secret must hold consumer_key;consumer_secret;token;token_secret"
        )
    consumer_key, consumer_secret, token, token_secret = parts
    return consumer_key, consumer_secret, token, token_secret


def parse_refresh_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for refresh_content.'''

    parser = argparse.ArgumentParser(
        description="Refresh generated site content from Twitter collections.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name or path (default: $REFRESH_CONFIG or prod).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the generated content instead of committing it.",
    )
    return parser.parse_args(argv)
