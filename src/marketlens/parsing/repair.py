"""Strict-then-repaired JSON parsing that never raises."""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Union

from .unwrap import unwrap_payload

logger = logging.getLogger(__name__)

INVALID_JSON = "Invalid JSON"

_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_LITERAL_NEWLINE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ParsedJson:
    """Successfully decoded provider payload."""

    value: Any


@dataclass(frozen=True)
class ParseError:
    """Payload that stayed invalid after every repair."""

    raw: str
    error: str = INVALID_JSON
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "raw": self.raw, **self.details}


ParseResult = Union[ParsedJson, ParseError]


def repair_json_text(text: str) -> str:
    """Apply the fixed repair sequence: drop trailing commas, then flatten newlines."""
    fixed = _TRAILING_COMMA.sub(r"\1", text)
    return _LITERAL_NEWLINE.sub(" ", fixed)


def parse_with_repair(text: Any) -> ParseResult:
    """
    Parse text as JSON, retrying once on a repaired copy.
    Returns ParsedJson or ParseError; valid JSON is returned untouched.
    """
    if not isinstance(text, str):
        if text is None:
            return ParseError(raw="")
        # Already decoded upstream (e.g. response.json())
        return ParsedJson(text)
    try:
        return ParsedJson(json.loads(text))
    except (json.JSONDecodeError, RecursionError):
        pass
    try:
        return ParsedJson(json.loads(repair_json_text(text)))
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Provider JSON still invalid after repair (%s). Raw text: %s", e, text[:2000])
        return ParseError(raw=text)


def extract_json(value: Any) -> ParseResult:
    """
    Unwrap then parse. A list that only appears after decoding (e.g. a fenced
    '[{...}]') is unwrapped once more so callers see the single record.
    """
    result = parse_with_repair(unwrap_payload(value))
    if isinstance(result, ParsedJson) and isinstance(result.value, list):
        return ParsedJson(unwrap_payload(result.value))
    return result
