"""Normalize competitor records from webhook or generator output."""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union
from uuid import uuid4

from marketlens.models.competitor import BrandPerception, NormalizedCompetitor
from marketlens.models.sentinel import Sentinel
from marketlens.parsing import ParsedJson, ParseError

from .fallback import fallback_competitor
from .fields import canonicalize_url, normalize_categories, pick, string_array, string_or_array

logger = logging.getLogger(__name__)


def _name(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return Sentinel.UNKNOWN_COMPETITOR.value


def _perception(record: Mapping) -> BrandPerception:
    """Nested brandPerception object, or the flat positive/negativePerception columns."""
    nested = pick(record, "brandPerception", "brand_perception")
    if isinstance(nested, Mapping):
        positive = nested.get("positive")
        negative = nested.get("negative")
    else:
        positive = pick(record, "positivePerception", "positive_perception")
        negative = pick(record, "negativePerception", "negative_perception")
    return BrandPerception(positive=string_or_array(positive), negative=string_or_array(negative))


def normalize_competitor(
    record: Union[Mapping, NormalizedCompetitor, ParsedJson, ParseError, Any],
) -> NormalizedCompetitor:
    """
    Build a NormalizedCompetitor from a loosely typed record.

    Accepts camelCase (wire) and snake_case keys, or a parse result. A
    ParseError, or a record already carrying an "error", becomes a fallback
    competitor.
    Normalizing the output again yields an equal record.
    """
    if isinstance(record, ParseError):
        return fallback_competitor(record.error)
    if isinstance(record, ParsedJson):
        record = record.value
    if isinstance(record, NormalizedCompetitor):
        record = record.model_dump(by_alias=True)
    if not isinstance(record, Mapping):
        record = {}

    record_id = record.get("id")
    if not isinstance(record_id, str) or not record_id:
        record_id = str(uuid4())

    error = record.get("error")
    if isinstance(error, str) and error:
        return fallback_competitor(error, id=record_id)

    return NormalizedCompetitor(
        id=record_id,
        name=_name(record.get("name")),
        website=canonicalize_url(record.get("website")),
        facebook_url=canonicalize_url(pick(record, "facebookUrl", "facebook_url")),
        services=string_array(record.get("services")),
        service_categories=normalize_categories(pick(record, "serviceCategories", "service_categories")),
        features=string_array(record.get("features")),
        strengths=string_array(record.get("strengths")),
        weaknesses=string_array(record.get("weaknesses")),
        complaints=string_array(record.get("complaints")),
        ad_themes=string_array(pick(record, "adThemes", "ad_themes")),
        pricing=string_or_array(record.get("pricing")),
        specialty=string_or_array(record.get("specialty")),
        target_audience=string_or_array(pick(record, "targetAudience", "target_audience")),
        brand_tone=string_or_array(pick(record, "brandTone", "brand_tone")),
        usp=string_or_array(record.get("usp")),
        brand_perception=_perception(record),
    )


def is_client_row(name: str, client_name: Optional[str]) -> bool:
    """True if a competitor row is really the client (case-insensitive containment either way)."""
    if not client_name or not name:
        return False
    a, b = name.lower(), client_name.lower()
    return b in a or a in b


def normalize_competitors(
    records: Iterable[Any] | Any,
    *,
    exclude_client: Optional[str] = None,
) -> list[NormalizedCompetitor]:
    """
    Normalize a competitor collection.
    Rows naming the client and rows left with the placeholder name are dropped.
    """
    if not isinstance(records, (list, tuple)):
        return []
    out: list[NormalizedCompetitor] = []
    for raw in records:
        comp = normalize_competitor(raw)
        if comp.error or comp.is_placeholder:
            continue
        if is_client_row(comp.name, exclude_client):
            logger.info("Found client data in competitors: %s", comp.name)
            continue
        out.append(comp)
    return out
