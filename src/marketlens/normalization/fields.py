"""Per-field coercion policies. Each policy is total: it never raises."""

import logging
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import unquote

from marketlens.models.sentinel import Sentinel

logger = logging.getLogger(__name__)

_SCHEMES = ("http://", "https://")


def string_or_array(value: Any) -> str:
    """
    Canonical string for fields the generator returns as either a string or a list.
    Lists are joined with ", " over truthy entries; anything else is "N/A".
    """
    if isinstance(value, str) and value:
        return value
    if isinstance(value, list):
        joined = ", ".join(str(v) for v in value if v)
        return joined or Sentinel.NOT_AVAILABLE.value
    return Sentinel.NOT_AVAILABLE.value


def string_array(value: Any) -> list[str]:
    """List of non-empty strings; anything that is not a list becomes []."""
    if not isinstance(value, list):
        return []
    items: list[str] = []
    for v in value:
        if v is None or isinstance(v, (Mapping, list)):
            continue
        s = v if isinstance(v, str) else str(v)
        if s:
            items.append(s)
    return items


def normalize_categories(value: Any) -> list[str]:
    """Lower-case, trim, drop empties and dedupe (first occurrence wins)."""
    if not isinstance(value, list):
        return []
    seen: set[str] = set()
    out: list[str] = []
    for v in value:
        if not isinstance(v, str):
            continue
        c = v.strip().lower()
        if c and c not in seen:
            seen.add(c)
            out.append(c)
    return out


def _percent_decode(url: str) -> str:
    """
    Decode until nothing changes, so a canonical URL decodes to itself.
    Any decode failure keeps the input as given.
    """
    decoded = url
    while "%" in decoded:
        try:
            step = unquote(decoded, errors="strict")
        except UnicodeDecodeError:
            logger.warning("Failed to decode URL: %s", url)
            return url
        if step == decoded:
            break
        decoded = step
    return decoded


def canonicalize_url(value: Any) -> Optional[str]:
    """
    Absolute https URL for a website/profile field, or None when empty.
    A value that fails percent-decoding is kept as trimmed; it never fails the record.
    """
    if not value or not isinstance(value, str):
        return None
    url = value.strip()
    if not url:
        return None
    url = _percent_decode(url)
    if url.startswith(_SCHEMES):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    return f"https://{url}"


def pick(record: Mapping, *keys: str) -> Any:
    """First present, non-None value among alternative spellings of a key."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def strings_from(value: Any) -> list[str]:
    """Trimmed non-empty strings from a list, or a lone string as a one-item list."""
    if isinstance(value, list):
        return [v.strip() for v in value if isinstance(v, str) and v.strip()]
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    return []
