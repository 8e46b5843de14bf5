"""Serialization utilities."""

from dataclasses import asdict, fields, is_dataclass
from enum import Enum


def _prune(value):
    if isinstance(value, dict):
        return {k: _prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


def serialize_dataclass(obj, rename: dict[str, str] | None = None) -> dict:
    """Serialize a dataclass to a JSON-ready dict.

    Fields set to None are dropped at every nesting level so optional
    fields are absent rather than null. Enum values are replaced by their
    value.

    Args:
        obj: Dataclass instance
        rename: Optional mapping of top-level field name to output key
    """
    if not is_dataclass(obj):
        raise TypeError(f"Expected a dataclass instance, got {type(obj).__name__}")

    data = _prune(asdict(obj))
    if rename:
        names = [f.name for f in fields(obj)]
        data = {rename.get(name, name): data[name] for name in names if name in data}
    return data
