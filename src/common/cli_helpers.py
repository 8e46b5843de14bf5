"""Common CLI helper utilities."""

from __future__ import annotations

import json
import logging
from typing import Any


def setup_logging() -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_json_bool(value: Any, default: bool = False) -> bool:
    """Parse a JSON-encoded boolean option such as "true" or "false".

    Args:
        value: Raw option value. Strings are JSON-decoded, other values are
            used as-is.
        default: Value returned when the option cannot be decoded.

    Returns:
        Truthiness of the decoded value, or default on decode failure.
    """
    if value is None:
        return default
    if isinstance(value, (bytes, str)):
        try:
            value = json.loads(value)
        except ValueError:
            return default
    return bool(value)
