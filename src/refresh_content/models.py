"""Data models for the refresh_content pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from common.serialization import serialize_dataclass

ANNOUNCEMENT = "announcement"
EVENT = "event"
BULLETIN = "bulletin"

RECORD_KINDS = (ANNOUNCEMENT, EVENT, BULLETIN)


@dataclass
class Link:
    """Shortened link embedded in a post, with its expansion."""
    short_url: str
    expanded_url: str


@dataclass
class Post:
    """Post as returned by the collection source."""
    id: str
    raw_text: str
    links: list[Link] = field(default_factory=list)


@dataclass
class Announcement:
    title: str
    subtitle: Optional[str] = None
    color: Optional[str] = None
    youtube: Optional[str] = None
    tweet: Optional[str] = None
    descriptive: str = ""


@dataclass
class EventTime:
    """One occurrence of an event."""
    day: str
    time: str
    location: Optional[str] = None


@dataclass
class Event:
    title: str
    subtitle: Optional[str] = None
    color: Optional[str] = None
    location: Optional[str] = None
    times: list[EventTime] = field(default_factory=list)
    descriptive: str = ""


@dataclass
class Insert:
    """Linked document attached to a bulletin."""
    title: str
    link: str


@dataclass
class Bulletin:
    date: str
    title: str
    link: str
    subtitle: Optional[str] = None
    color: Optional[str] = None
    inserts: list[Insert] = field(default_factory=list)
    # Only continuations or desc add text; absent otherwise
    descriptive: Optional[str] = None


Record = Union[Announcement, Event, Bulletin]


class ErrorCategory(Enum):
    INVALID_SYNTAX = "Invalid YAML"
    INVALID_STRUCTURE = "Invalid structure"
    UNEXPECTED = "Unexpected error"


@dataclass
class ErrorDescriptor:
    """Why one post produced no record."""
    category: ErrorCategory
    kind: str
    type: str
    reason: str
    post_id: Optional[str] = None
    mark: Optional[dict[str, int]] = None

    def to_dict(self) -> dict[str, Any]:
        return serialize_dataclass(self, rename={"category": "error", "post_id": "tweetId"})


@dataclass
class ParsedPrimary:
    record: Record


@dataclass
class ParsedContinuation:
    """Post without a title whose text extends the previous record."""
    descriptive: str


@dataclass
class ParseFailure:
    error: ErrorDescriptor


ParsedPost = Union[ParsedPrimary, ParsedContinuation, ParseFailure]


@dataclass
class CollectionResult:
    """Outcome of processing one collection."""
    name: str
    artifact_key: str
    records: list[Record] = field(default_factory=list)
    errors: list[ErrorDescriptor] = field(default_factory=list)
    digest: str = ""

    @property
    def errors_key(self) -> str:
        return f"{self.artifact_key}Errors"


@dataclass
class PublishOutcome:
    """What a run decided to publish."""
    updated: list[str]
    artifact: Optional[dict[str, Any]] = None
    commit_sha: Optional[str] = None
    dry_run: bool = False


@dataclass
class StoredArtifact:
    """Published artifact as read from the content store."""
    content: dict[str, Any]
    sha: Optional[str]

    @property
    def digests(self) -> list[str]:
        digests = self.content.get("digests") or []
        return list(digests) if isinstance(digests, list) else []
