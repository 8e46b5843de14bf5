"""Stitch continuation posts onto the record they continue."""

from typing import Optional

from refresh_content.models import (
    ErrorCategory,
    ErrorDescriptor,
    ParsedContinuation,
    ParsedPost,
    ParsedPrimary,
    Record,
)
from refresh_content.transform.errors import OrphanContinuationError, make_error

SEPARATOR = "\n\n"


def append_descriptive(record: Record, descriptive: str) -> None:
    """Append text to a record's descriptive body in place."""
    current = record.descriptive or ""
    separator = SEPARATOR if current and descriptive else ""
    record.descriptive = current + separator + descriptive


def resolve_continuation(
    parsed: ParsedPost,
    last_primary: Optional[Record],
    kind: str,
    post_id: str,
) -> tuple[Optional[Record], Optional[Record], Optional[ErrorDescriptor]]:
    """Turn a parsed post into (new record, last primary record, error).

    A primary record is both the new record and the new last primary. A
    continuation merges into last_primary and yields no new record. A
    failed post yields its error and clears last_primary, so a
    continuation after a rejected post cannot attach to an older record.
    """
    if isinstance(parsed, ParsedPrimary):
        return parsed.record, parsed.record, None

    if isinstance(parsed, ParsedContinuation):
        if last_primary is None:
            error = make_error(
                ErrorCategory.UNEXPECTED,
                kind,
                OrphanContinuationError("Continuation tweet with no primary"),
                post_id,
            )
            return None, None, error

        append_descriptive(last_primary, parsed.descriptive)
        return None, last_primary, None

    return None, None, parsed.error
