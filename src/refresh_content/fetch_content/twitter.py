"""Read posts from Twitter collections."""

import logging
from typing import Any

import requests
from requests_oauthlib import OAuth1

from refresh_content.models import Link, Post

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.twitter.com/1.1"
COLLECTION_ENTRIES_ENDPOINT = "collections/entries.json"
REQUEST_TIMEOUT = 30


class TwitterApiError(Exception):
    """Twitter answered with an error payload or status."""

    def __init__(self, errors: list[Any], status_code: int | None = None):
        self.errors = errors
        self.status_code = status_code
        super().__init__(f"Twitter API error (status {status_code}): {errors}")


def build_twitter_auth(
    consumer_key: str,
    consumer_secret: str,
    token: str,
    token_secret: str,
) -> OAuth1:
    """Build OAuth1 user-context auth for Twitter requests."""
    return OAuth1(
        consumer_key,
        client_secret=consumer_secret,
        resource_owner_key=token,
        resource_owner_secret=token_secret,
    )


def get_collection_entries(auth: OAuth1, collection_id: str, count: int) -> dict[str, Any]:
    """Fetch the raw collections/entries payload for a custom collection."""
    response = requests.get(
        f"{API_BASE_URL}/{COLLECTION_ENTRIES_ENDPOINT}",
        params={
            "id": f"custom-{collection_id}",
            "count": count,
            "tweet_mode": "extended",
        },
        auth=auth,
        timeout=REQUEST_TIMEOUT,
    )

    try:
        payload = response.json()
    except ValueError:
        payload = {}

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if errors or not response.ok:
        raise TwitterApiError(errors or [{"message": response.reason}], response.status_code)

    return payload


def parse_collection_entries(payload: dict[str, Any]) -> tuple[list[str], dict[str, Post]]:
    """Split a collections/entries payload into timeline order and post lookup.

    Returns:
        Tuple of (post ids in timeline order, {post id: Post})
    """
    timeline_entries = (payload.get("response") or {}).get("timeline") or []
    timeline = [str(entry["tweet"]["id"]) for entry in timeline_entries]

    tweets = (payload.get("objects") or {}).get("tweets") or {}
    posts = {}
    for tweet_id, tweet in tweets.items():
        urls = (tweet.get("entities") or {}).get("urls") or []
        links = [
            Link(short_url=url["url"], expanded_url=url.get("expanded_url") or url["url"])
            for url in urls
            if url.get("url")
        ]
        posts[str(tweet_id)] = Post(
            id=str(tweet_id),
            raw_text=tweet.get("full_text") or tweet.get("text") or "",
            links=links,
        )

    return timeline, posts


def fetch_collection(auth: OAuth1, collection_id: str, count: int) -> tuple[list[str], dict[str, Post]]:
    """Fetch up to count posts from a collection, newest timeline order preserved."""
    payload = get_collection_entries(auth, collection_id, count)
    timeline, posts = parse_collection_entries(payload)
    logger.info("Fetched %d posts from collection %s", len(timeline), collection_id)
    return timeline, posts
