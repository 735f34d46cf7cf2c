"""Unwrapping and best-effort JSON repair for provider payloads."""

from .repair import ParseError, ParsedJson, ParseResult, extract_json, parse_with_repair
from .unwrap import unwrap_payload

__all__ = [
    "ParseError",
    "ParseResult",
    "ParsedJson",
    "extract_json",
    "parse_with_repair",
    "unwrap_payload",
]
