"""
Tolerant accessors for untyped OCR payloads.

Nothing in an extraction payload is guaranteed to exist or to have the
expected type. These helpers turn missing, null and wrong-typed values
into "absent" instead of raising.
"""

from collections.abc import Mapping
from typing import Any


def as_mapping(value: Any) -> dict[str, Any]:
    """Return a shallow dict copy of ``value`` or an empty dict."""
    if isinstance(value, Mapping):
        return {str(k): v for k, v in value.items()}
    return {}


def as_text(value: Any) -> str:
    """
    Coerce a scalar to stripped text.

    Strings are stripped; ints and floats are rendered; anything else
    (None, bools, containers) is absent and yields "".
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def as_int(value: Any, default: int = 0) -> int:
    """Coerce ints, integral floats and digit strings to int."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return default


def is_scalar(value: Any) -> bool:
    """True for values that are not containers (loose score values)."""
    return not isinstance(value, (Mapping, list, tuple, set))


def first_present(*values: Any) -> Any:
    """Return the first value that is not None and not an empty string."""
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None
