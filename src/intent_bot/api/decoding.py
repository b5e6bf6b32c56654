"""Strict percent-decoding of raw query-string parameters."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import unquote_to_bytes

from intent_bot.errors import DecodingError

_BAD_ESCAPE_RE = re.compile(rb"%(?![0-9A-Fa-f]{2})")


def decode_component(raw: bytes) -> str:
    """
    Decode one ``application/x-www-form-urlencoded`` value.

    Unlike the lenient decoding the framework applies, a ``%`` that is not
    followed by two hex digits, or escapes that do not form valid UTF-8,
    raise DecodingError ("URI malformed").
    """
    if _BAD_ESCAPE_RE.search(raw):
        raise DecodingError("URI malformed")
    try:
        return unquote_to_bytes(raw.replace(b"+", b" ")).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodingError(f"URI malformed: {e.reason}") from e


def raw_query_param(query_string: bytes, name: str) -> Optional[str]:
    """First value of ``name`` in a raw query string, decoded strictly."""
    key = name.encode("ascii")
    for pair in query_string.split(b"&"):
        if not pair:
            continue
        field, _, value = pair.partition(b"=")
        if field == key:
            return decode_component(value)
    return None
