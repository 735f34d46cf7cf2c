"""Normalize generated SWOT/strategy analyses."""

from collections.abc import Mapping
from typing import Any

from marketlens.models.analysis import ANALYSIS_LIST_FIELDS, StrategicAnalysis
from marketlens.parsing import ParsedJson, ParseError

from .fallback import fallback_analysis
from .fields import pick, string_array, string_or_array


def _chunks(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [dict(c) for c in value if isinstance(c, Mapping)]


def normalize_analysis(record: Any) -> StrategicAnalysis:
    """
    Build a StrategicAnalysis with canonical field types.
    Error shapes (ParseError, or a mapping with "error") become a fallback analysis.
    """
    if isinstance(record, ParseError):
        return fallback_analysis(record.error)
    if isinstance(record, ParsedJson):
        record = record.value
    if isinstance(record, StrategicAnalysis):
        record = record.model_dump()
    if not isinstance(record, Mapping):
        return fallback_analysis("Unexpected analysis payload")

    error = record.get("error")
    if isinstance(error, str) and error:
        return fallback_analysis(error)

    data: dict[str, Any] = {name: string_array(record.get(name)) for name in ANALYSIS_LIST_FIELDS}
    data["summary"] = string_or_array(record.get("summary"))
    data["news_insights"] = string_array(pick(record, "news_insights", "newsInsights"))
    data["grounding_chunks"] = _chunks(pick(record, "grounding_chunks", "groundingChunks"))
    return StrategicAnalysis(**data)
