"""Utility helper functions."""

import re
from typing import Iterable

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z]+")


def parse_properties(pairs: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` project properties.

    Args:
        pairs: Strings such as ``flavor=production``

    Returns:
        Mapping of key to value; later pairs override earlier ones

    Raises:
        ValueError: If a pair has no ``=`` or an empty key
    """
    properties: dict[str, str] = {}

    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid property '{pair}', expected key=value")
        properties[key] = value

    return properties


def to_constant_name(key: str) -> str:
    """Convert a setting key to an UPPER_SNAKE constant name.

    Examples:
        displayName -> DISPLAY_NAME
        apiBaseURL -> API_BASE_URL
        firebase.project-id -> FIREBASE_PROJECT_ID
    """
    words = _CAMEL_BOUNDARY.sub("_", key)
    name = _NON_IDENTIFIER.sub("_", words).strip("_").upper()
    if not name:
        raise ValueError(f"Cannot derive a constant name from '{key}'")
    if name[0].isdigit():
        name = f"_{name}"
    return name
