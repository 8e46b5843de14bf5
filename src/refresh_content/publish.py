"""Decide whether to publish, and assemble the artifact."""

import json
import logging

from common.serialization import serialize_dataclass
from refresh_content.fetch_content.github import GithubContentStore
from refresh_content.models import CollectionResult, PublishOutcome, StoredArtifact

logger = logging.getLogger(__name__)

COMMIT_MESSAGE_PREFIX = "Generated content data: Updates in "


def updated_collections(results: list[CollectionResult], previous_digests: list[str]) -> list[str]:
    """Names of collections whose digest differs from the one stored at the same position."""
    updated = []
    for index, result in enumerate(results):
        previous = previous_digests[index] if index < len(previous_digests) else None
        if previous != result.digest:
            updated.append(result.name)
    return updated


def assemble_artifact(results: list[CollectionResult]) -> dict:
    """Build the artifact: records per collection, positional digests, errors per collection."""
    artifact = {}
    for result in results:
        artifact[result.artifact_key] = [serialize_dataclass(record) for record in result.records]
    artifact["digests"] = [result.digest for result in results]
    for result in results:
        artifact[result.errors_key] = [error.to_dict() for error in result.errors]
    return artifact


def build_commit_message(updated: list[str]) -> str:
    return COMMIT_MESSAGE_PREFIX + ", ".join(updated)


def publish(
    results: list[CollectionResult],
    previous: StoredArtifact,
    store: GithubContentStore,
    dry_run: bool = False,
) -> PublishOutcome:
    """Publish the artifact if any collection changed.

    A dry run assembles and logs the artifact without writing, whether or
    not anything changed. A real write is conditional on the version token
    read with previous; a stale token raises from the store.
    """
    updated = updated_collections(results, previous.digests)

    if not updated and not dry_run:
        logger.info("No collection updates")
        return PublishOutcome(updated=[])

    artifact = assemble_artifact(results)

    if dry_run:
        logger.info("%s", json.dumps(artifact, ensure_ascii=False))
        return PublishOutcome(updated=updated, artifact=artifact, dry_run=True)

    commit_sha = store.write(artifact, previous.sha, build_commit_message(updated))
    logger.info("Commit %s - Updates in %s", commit_sha[:7], ", ".join(updated))
    return PublishOutcome(updated=updated, artifact=artifact, commit_sha=commit_sha)
