"""Per-post error descriptors."""

import logging
from typing import Optional

from refresh_content.models import ErrorCategory, ErrorDescriptor

logger = logging.getLogger(__name__)


class InvalidStructureError(ValueError):
    """Post decoded but does not describe a valid record."""


class OrphanContinuationError(RuntimeError):
    """Continuation post with no primary record before it."""


def make_error(
    category: ErrorCategory,
    kind: str,
    error: BaseException,
    post_id: Optional[str],
    reason: Optional[str] = None,
    mark: Optional[dict[str, int]] = None,
) -> ErrorDescriptor:
    """Build the descriptor for a rejected post and log it."""
    descriptor = ErrorDescriptor(
        category=category,
        kind=kind,
        type=type(error).__name__,
        reason=reason if reason is not None else str(error),
        post_id=post_id,
        mark=mark,
    )
    logger.error("Rejected %s post %s: %s", kind, post_id, descriptor.to_dict())
    return descriptor
