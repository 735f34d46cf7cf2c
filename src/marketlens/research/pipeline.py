"""Glue from a raw provider payload to normalized records.

    raw payload -> unwrap -> repair/parse -> normalize

Nothing here raises for a malformed payload; failures come back as
fallback records carrying an error.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from marketlens.models.analysis import StrategicAnalysis
from marketlens.models.competitor import NormalizedCompetitor
from marketlens.models.raw import RawProviderPayload
from marketlens.normalization import (
    fallback_competitor,
    normalize_analysis,
    normalize_competitor,
    normalize_competitors,
)
from marketlens.parsing import ParseError, extract_json


def _body(raw: Any) -> Any:
    return raw.body if isinstance(raw, RawProviderPayload) else raw


@dataclass
class ResearchPayload:
    """Normalized competitor-research webhook output."""

    competitors: list[NormalizedCompetitor] = field(default_factory=list)
    summary: Optional[str] = None
    error: Optional[str] = None
    has_competitor_list: bool = False


def process_competitor_payload(raw: Any) -> NormalizedCompetitor:
    """Single competitor record, or a fallback competitor when the payload is unusable."""
    return normalize_competitor(extract_json(_body(raw)))


def process_analysis_payload(raw: Any) -> StrategicAnalysis:
    """Strategic analysis, or a fallback analysis when the payload is unusable."""
    return normalize_analysis(extract_json(_body(raw)))


def process_research_payload(raw: Any, *, client_name: Optional[str] = None) -> ResearchPayload:
    """
    Webhook envelope {"competitors": [...], "summary_competitor": "..."}.
    Client rows and unusable (unnamed) rows are dropped from the competitors.
    """
    parsed = extract_json(_body(raw))
    if isinstance(parsed, ParseError):
        return ResearchPayload(error=parsed.error)
    data = parsed.value
    if not isinstance(data, Mapping):
        return ResearchPayload(error="Unexpected response shape")
    summary = data.get("summary_competitor")
    competitors = data.get("competitors")
    return ResearchPayload(
        competitors=normalize_competitors(competitors, exclude_client=client_name),
        summary=summary if isinstance(summary, str) and summary else None,
        has_competitor_list=isinstance(competitors, list),
    )


def run_pipeline(raw: Any, *, client_name: Optional[str] = None) -> list[NormalizedCompetitor]:
    """
    End-to-end flow for a raw competitor payload.

    A research envelope yields its filtered competitor list; a single record
    (bare, fenced or array-wrapped) yields one competitor, or none when it has
    no usable name. An unusable payload yields a one-element list holding a
    fallback competitor.
    """
    parsed = extract_json(_body(raw))
    if isinstance(parsed, ParseError):
        return [fallback_competitor(parsed.error)]
    value = parsed.value
    if isinstance(value, Mapping) and isinstance(value.get("competitors"), list):
        return normalize_competitors(value["competitors"], exclude_client=client_name)
    comp = normalize_competitor(value)
    if comp.is_placeholder and not comp.error:
        return []
    return [comp]
