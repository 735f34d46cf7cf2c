"""Strip wrapping (code fences, prose, singleton arrays) around a provider payload."""

import re
from typing import Any

# Leading fence line, with or without a language tag (```json)
_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*(?:\r?\n|$)")
_FENCE_CLOSE = re.compile(r"(?:\r?\n)?```[ \t]*$")


def strip_code_fence(text: str) -> str:
    """Remove the opening and closing markdown fence lines if text starts with one."""
    if not text.startswith("```"):
        return text
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def extract_brace_span(text: str) -> str | None:
    """Greedy span from the first '{' to the last '}', or None if there is none."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def unwrap_payload(value: Any) -> Any:
    """
    Reduce a raw payload to a single JSON candidate.

    Text: fenced -> fence lines removed; otherwise the greedy {...} span if
    present; otherwise the trimmed text. Parsed list: its first element
    (providers wrap singleton results). Anything else is returned unchanged.
    Never raises; an empty string stays empty and fails later at parse time.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ""
        if text.startswith("```"):
            return strip_code_fence(text)
        span = extract_brace_span(text)
        if span is not None:
            return span.strip()
        return text
    if isinstance(value, list) and value:
        return value[0]
    return value
