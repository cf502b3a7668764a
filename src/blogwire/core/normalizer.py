"""Helpers that turn loosely-typed server responses into canonical field values.

Every dialect reader is built from these. Checks that can fail run before a
reader writes into its target, so a ParsingError leaves the target untouched.
"""

from __future__ import annotations

import re
import xmlrpc.client
from datetime import datetime, timezone
from typing import Any, Mapping, NamedTuple

from blogwire.core.category_cache import CategoryCache
from blogwire.errors import ParsingError

COMPACT_DATETIME_FORMAT = "%Y%m%dT%H:%M:%S"

_TITLE_MARKER = re.compile(r"<title>([^<]*)</title>")
_CATEGORY_MARKER = re.compile(r"<category>([^<]*)</category>")


class EmbeddedMarkup(NamedTuple):
    content: str
    title: str | None
    categories: list[str]


def parse_datetime(value: Any) -> datetime | None:
    """Parse a date field into an aware datetime; None if absent or invalid.

    Naive values are taken to be UTC, which is what XML-RPC servers send.
    """
    if value is None or value == "":
        return None
    if isinstance(value, xmlrpc.client.DateTime):
        value = value.value
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        parsed = None
        for candidate in (text, text.removesuffix("Z")):
            try:
                parsed = datetime.strptime(candidate, COMPACT_DATETIME_FORMAT)
                break
            except ValueError:
                pass
        if parsed is None:
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_utc(value: datetime | None) -> datetime | None:
    """Naive UTC datetime for XML-RPC marshalling, which has no zone field."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_compact(value: datetime | None) -> str:
    """``YYYYMMDDTHH:MM:SS`` in UTC, or an empty string."""
    utc = to_utc(value)
    return utc.strftime(COMPACT_DATETIME_FORMAT) if utc else ""


def decode_text(value: Any) -> str:
    """Text from a field that may arrive as str, bytes or an XML-RPC base64 blob."""
    if value is None:
        return ""
    if isinstance(value, xmlrpc.client.Binary):
        value = value.data
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def as_flag(value: Any, default: bool = False) -> bool:
    """Boolean from 0/1, "0"/"1", "true"/"false" or a real bool."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "open"):
            return True
        if text in ("false", "no", "closed"):
            return False
        try:
            return bool(int(text))
        except ValueError:
            return default
    return bool(value)


def as_string_list(value: Any) -> list[str]:
    """List of strings from a list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [decode_text(item) for item in value if decode_text(item)]
    text = decode_text(value)
    return [part.strip() for part in text.split(",") if part.strip()]


def pick_id(info: Mapping[str, Any], primary: str, secondary: str) -> str:
    """Read an id stored under either of two keys, preferring ``primary``."""
    value = decode_text(info.get(primary))
    if value:
        return value
    return decode_text(info.get(secondary))


def extract_embedded_markup(content: str) -> EmbeddedMarkup:
    """Strip ``<title>``/``<category>`` markers some servers embed in the body."""
    title_match = _TITLE_MARKER.search(content)
    categories = _CATEGORY_MARKER.findall(content)
    stripped = _CATEGORY_MARKER.sub("", _TITLE_MARKER.sub("", content))
    return EmbeddedMarkup(
        content=stripped,
        title=title_match.group(1) if title_match else None,
        categories=categories,
    )


def embed_markup(title: str, categories: list[str], content: str) -> str:
    """Inverse of :func:`extract_embedded_markup`."""
    markers = [f"<title>{title}</title>"]
    markers.extend(f"<category>{name}</category>" for name in categories)
    return "".join(markers) + content


def resolve_category_names(values: list[str], cache: CategoryCache) -> list[str]:
    """Map names or server ids to names; values the cache doesn't know are dropped."""
    names = []
    for value in values:
        name = cache.name_for(value)
        if name is not None:
            names.append(name)
    return names


def require_map(payload: Any, message: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ParsingError(message)
    return payload


def require_list(payload: Any, message: str) -> list[Any]:
    if not isinstance(payload, (list, tuple)):
        raise ParsingError(message)
    return list(payload)


def require_id(payload: Any, message: str) -> str:
    """Server id from a reply that must be a string or an integer."""
    if isinstance(payload, bool) or not isinstance(payload, (str, int)):
        raise ParsingError(message)
    return str(payload)


def require_flag(payload: Any, message: str) -> bool:
    """Reply that must be a boolean (integers are accepted too)."""
    if not isinstance(payload, (bool, int)):
        raise ParsingError(message)
    return bool(payload)
