"""Turn one collection's posts into records, errors and a digest."""

import logging
from typing import Iterable, Mapping

from common.hashing import CollectionDigest
from refresh_content.models import CollectionResult, Link, Post
from refresh_content.transform.continuation import resolve_continuation
from refresh_content.transform.parser import parse_post

logger = logging.getLogger(__name__)


def expand_links(text: str, links: Iterable[Link]) -> str:
    """Replace every occurrence of each shortened link with its expansion."""
    for link in links:
        if link.short_url:
            text = text.replace(link.short_url, link.expanded_url)
    return text


def process_collection(
    name: str,
    artifact_key: str,
    kind: str,
    timeline: list[str],
    posts: Mapping[str, Post],
) -> CollectionResult:
    """Process a collection's posts in timeline order.

    The digest is fed every post's raw text, before link expansion and
    whether or not the post parses. A post that fails to parse is recorded
    as an error and processing continues with the next one.

    Args:
        name: Collection name, used in logs and commit messages
        artifact_key: Key of the collection's records in the artifact
        kind: Record kind of every post in the collection
        timeline: Post ids in the order the source returned them
        posts: Post lookup by id

    Returns:
        CollectionResult with records, errors and hex digest
    """
    result = CollectionResult(name=name, artifact_key=artifact_key)
    digest = CollectionDigest()
    last_primary = None

    for post_id in timeline:
        post = posts[post_id]

        text = expand_links(post.raw_text, post.links)
        parsed = parse_post(post_id, text, kind)
        record, last_primary, error = resolve_continuation(parsed, last_primary, kind, post_id)

        if record is not None:
            result.records.append(record)
        if error is not None:
            result.errors.append(error)

        digest.update(post.raw_text)

    result.digest = digest.hexdigest()

    logger.info(
        "Processed %d posts from %s: %d records, %d errors",
        digest.count,
        name,
        len(result.records),
        len(result.errors),
    )
    return result
