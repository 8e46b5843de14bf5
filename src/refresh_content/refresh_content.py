"""Refresh generated site content from Twitter collections."""

import logging
from concurrent.futures import ThreadPoolExecutor

from requests_oauthlib import OAuth1

from common.aws import fetch_secret
from refresh_content.config import RefreshConfig, get_config
from refresh_content.fetch_content.github import GithubContentStore
from refresh_content.fetch_content.twitter import build_twitter_auth, fetch_collection
from refresh_content.helpers import parse_github_token, parse_twitter_credentials
from refresh_content.models import CollectionResult, Post, PublishOutcome, StoredArtifact
from refresh_content.process_collection import process_collection
from refresh_content.publish import publish

logger = logging.getLogger(__name__)


def fetch_credentials(config: RefreshConfig) -> tuple[str, tuple[str, str, str, str]]:
    """Fetch both secrets concurrently."""
    region = config.aws_region or None
    with ThreadPoolExecutor(max_workers=2) as executor:
        github_future = executor.submit(fetch_secret, config.github_secret, region)
        twitter_future = executor.submit(fetch_secret, config.twitter_secret, region)
        github_payload = github_future.result()
        twitter_payload = twitter_future.result()

    return parse_github_token(github_payload), parse_twitter_credentials(twitter_payload)


def fetch_inputs(
    config: RefreshConfig,
    auth: OAuth1,
    store: GithubContentStore,
) -> tuple[list[tuple[list[str], dict[str, Post]]], StoredArtifact]:
    """Fetch every collection and the published artifact concurrently.

    Returns:
        Tuple of ([(timeline, posts) per configured collection], stored artifact)
    """
    with ThreadPoolExecutor(max_workers=len(config.collections) + 1) as executor:
        collection_futures = [
            executor.submit(fetch_collection, auth, collection.collection_id, collection.count)
            for collection in config.collections
        ]
        artifact_future = executor.submit(store.read)

        collections = [future.result() for future in collection_futures]
        artifact = artifact_future.result()

    return collections, artifact


def process_collections(
    config: RefreshConfig,
    fetched: list[tuple[list[str], dict[str, Post]]],
) -> list[CollectionResult]:
    """Process collections one after another, in configured order."""
    return [
        process_collection(collection.name, collection.artifact_key, collection.kind, timeline, posts)
        for collection, (timeline, posts) in zip(config.collections, fetched)
    ]


def refresh_content(dry_run: bool = False, config: RefreshConfig | None = None) -> PublishOutcome:
    """Run one refresh: fetch, process, and publish if anything changed.

    Any collaborator failure propagates; nothing is published in that case.
    """
    config = config or get_config()
    logger.info("Refreshing %d collections (dry run: %s)", len(config.collections), dry_run)

    github_token, twitter_credentials = fetch_credentials(config)
    auth = build_twitter_auth(*twitter_credentials)
    store = GithubContentStore(github_token, config.github_owner, config.github_repo, config.github_path)

    fetched, previous = fetch_inputs(config, auth, store)
    results = process_collections(config, fetched)

    return publish(results, previous, store, dry_run=dry_run)
