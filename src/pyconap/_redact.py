"""Masking of backend traffic for DEBUG logs.

Request and response bodies carry bearer tokens, passwords typed into the
user and ranger forms, and evidence photos inlined as base64 ``data:`` URIs.
:func:`redact_for_log` hides the first two and collapses the third so a
trace line stays readable.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

# Matched against the lower-cased key with "_" and "-" removed.
_SECRET_KEY_PARTS: tuple[str, ...] = ("password", "contrasena", "contraseña", "token", "authorization", "cookie")

_MAX_DEPTH = 20
_MASK = "<redacted>"


def _is_secret_key(key: str) -> bool:
    folded = key.lower().replace("_", "").replace("-", "")
    return any(part in folded for part in _SECRET_KEY_PARTS)


def _redact_text(text: str, max_string: int) -> str:
    if text.startswith("data:"):
        return f"<data-uri:{len(text)}c>"
    if len(text) <= max_string:
        return text
    return f"{text[:max_string]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Copy of *value* with secrets masked and bulky strings shortened.

    Pydantic models are dumped by alias first, so a form can be logged the
    way it is sent.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    match value:
        case None | bool() | int() | float():
            return value
        case str():
            return _redact_text(value, max_string)
        case bytes() | bytearray():
            return f"<bytes:{len(value)}b>"
        case BaseModel():
            return redact_for_log(value.model_dump(mode="json", by_alias=True), max_string=max_string, _depth=_depth + 1)
        case Mapping():
            return {
                str(key): _MASK
                if _is_secret_key(str(key))
                else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
                for key, item in value.items()
            }
        case Sequence():
            return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
        case _:
            return repr(value)
