"""
Value Codec — conversion between state values and secret-store payloads.

The secret store only holds strings. In serialize mode every value is stored
as compact JSON; otherwise strings are stored verbatim and scalars by their
textual form.
"""
import math
from typing import Any

import orjson

from .exceptions import DecodeError, EncodeError


def _dumps(value: Any) -> str:
    try:
        return orjson.dumps(value).decode("utf-8")
    except (orjson.JSONEncodeError, TypeError) as err:
        raise EncodeError(
            f"Cannot encode value of type {type(value).__name__}: {err}"
        ) from err


def _number_text(value: Any) -> str:
    """Textual form of a number, matching JavaScript ``String(number)``."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def encode(value: Any, serialize: bool) -> str:
    """Return the string stored in the secret store for ``value``.

    Args:
        value: Value taken from the state.
        serialize: Store the JSON representation of ``value``.

    Raises:
        EncodeError: If ``value`` has no JSON representation.
    """
    if serialize:
        return _dumps(value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_text(value)
    # None, mappings and sequences have no plain text form.
    return _dumps(value)


def decode(stored: str, serialize: bool) -> Any:
    """Return the state value for a payload read from the secret store.

    Raises:
        DecodeError: If ``serialize`` is set and ``stored`` is not JSON.
    """
    if not serialize:
        return stored
    try:
        return orjson.loads(stored)
    except orjson.JSONDecodeError as err:
        raise DecodeError(f"Stored secret is not valid JSON: {err}") from err
