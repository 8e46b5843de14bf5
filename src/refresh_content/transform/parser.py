"""Parse post text into announcement, event and bulletin records.

Posts are small YAML documents, for example::

    title: Parish picnic
    sub: All welcome
    loc: Church hall
    times:
      - day: Sunday
        time: 12:30
    desc: Bring a dish to share.

Documents are decoded with PyYAML's BaseLoader, the failsafe schema: every
scalar stays a string and no tags are resolved, so post text can never
construct objects or be coerced into numbers, dates or booleans.

A post without its kind's required fields but with a `desc` is a
continuation of the previous record rather than a record of its own.
"""

from typing import Any, Optional
from urllib.parse import urlsplit

import yaml

from refresh_content.models import (
    ANNOUNCEMENT,
    BULLETIN,
    EVENT,
    Announcement,
    Bulletin,
    ErrorCategory,
    Event,
    EventTime,
    Insert,
    ParsedContinuation,
    ParsedPost,
    ParsedPrimary,
    ParseFailure,
)
from refresh_content.transform.errors import InvalidStructureError, make_error


REQUIRED_FIELDS = {
    ANNOUNCEMENT: ("title",),
    EVENT: ("title",),
    BULLETIN: ("date", "title"),
}


def decode_document(text: str) -> dict[str, Any]:
    """Decode post text into a mapping of strings, lists and mappings."""
    document = yaml.load(text, Loader=yaml.BaseLoader)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise InvalidStructureError("Document is not a mapping")
    return document


def is_absolute_url(value: Any) -> bool:
    """Check that value is a URL with a scheme and a host."""
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def _text(document: dict[str, Any], key: str) -> Optional[str]:
    value = document.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidStructureError(f"Field '{key}' must be text")
    return value


def _entries(document: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = document.get(key)
    # A blank key decodes to "" under the failsafe schema
    if value is None or value == "":
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise InvalidStructureError(f"Field '{key}' must be a list of mappings")
    return value


def _build_announcement(document: dict[str, Any], descriptive: str) -> Announcement:
    title = _text(document, "title")
    if not title:
        raise InvalidStructureError("Title missing")

    return Announcement(
        title=title,
        subtitle=_text(document, "sub"),
        color=_text(document, "color"),
        youtube=_text(document, "youtube"),
        tweet=_text(document, "tweet"),
        descriptive=descriptive,
    )


def _build_event(document: dict[str, Any], descriptive: str) -> Event:
    title = _text(document, "title")
    if not title:
        raise InvalidStructureError("Title missing")

    times = []
    for entry in _entries(document, "times"):
        day = _text(entry, "day")
        time = _text(entry, "time")
        if not day or not time:
            raise InvalidStructureError("Day/date or time missing")
        times.append(EventTime(day=day, time=time, location=_text(entry, "loc")))

    return Event(
        title=title,
        subtitle=_text(document, "sub"),
        color=_text(document, "color"),
        location=_text(document, "loc"),
        times=times,
        descriptive=descriptive,
    )


def _build_bulletin(document: dict[str, Any], descriptive: str) -> Bulletin:
    date = _text(document, "date")
    title = _text(document, "title")
    if not date or not title:
        raise InvalidStructureError("Bulletin date or title missing")

    link = document.get("link")
    if not is_absolute_url(link):
        raise InvalidStructureError("Bulletin link missing or invalid")

    inserts = []
    for entry in _entries(document, "inserts"):
        insert_title = _text(entry, "title")
        if not insert_title:
            raise InvalidStructureError("Insert title missing")
        insert_link = entry.get("link")
        if not is_absolute_url(insert_link):
            raise InvalidStructureError("Insert link missing or invalid")
        inserts.append(Insert(title=insert_title, link=insert_link))

    return Bulletin(
        date=date,
        title=title,
        link=link,
        subtitle=_text(document, "sub"),
        color=_text(document, "color"),
        inserts=inserts,
        descriptive=descriptive or None,
    )


_BUILDERS = {
    ANNOUNCEMENT: _build_announcement,
    EVENT: _build_event,
    BULLETIN: _build_bulletin,
}


def _syntax_failure(error: yaml.YAMLError, kind: str, post_id: str) -> ParseFailure:
    reason = getattr(error, "problem", None) or str(error)
    mark = None
    problem_mark = getattr(error, "problem_mark", None)
    if problem_mark is not None:
        mark = {"line": problem_mark.line, "column": problem_mark.column}
    return ParseFailure(
        make_error(ErrorCategory.INVALID_SYNTAX, kind, error, post_id, reason=reason, mark=mark)
    )


def parse_post(post_id: str, text: str, kind: str) -> ParsedPost:
    """Parse one post of the given record kind.

    Never raises: every failure comes back as a ParseFailure whose
    descriptor has already been logged.

    Args:
        post_id: Post identifier, copied into error descriptors
        text: Post text with shortened links already expanded
        kind: One of ANNOUNCEMENT, EVENT, BULLETIN

    Returns:
        ParsedPrimary, ParsedContinuation or ParseFailure
    """
    try:
        document = decode_document(text)

        descriptive = (_text(document, "desc") or "").strip()
        required = [_text(document, name) for name in REQUIRED_FIELDS[kind]]

        if not any(required) and descriptive:
            return ParsedContinuation(descriptive=descriptive)

        return ParsedPrimary(record=_BUILDERS[kind](document, descriptive))

    except yaml.YAMLError as e:
        return _syntax_failure(e, kind, post_id)

    except InvalidStructureError as e:
        return ParseFailure(make_error(ErrorCategory.INVALID_STRUCTURE, kind, e, post_id))

    except Exception as e:
        return ParseFailure(make_error(ErrorCategory.UNEXPECTED, kind, e, post_id))
