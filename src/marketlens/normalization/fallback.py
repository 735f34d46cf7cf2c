"""Canonically shaped records standing in for failed results."""

from typing import Optional
from uuid import uuid4

from marketlens.models.analysis import StrategicAnalysis
from marketlens.models.competitor import BrandPerception, NormalizedCompetitor
from marketlens.models.sentinel import Sentinel

_NO_DATA = Sentinel.NO_DATA.value


def fallback_analysis(message: str) -> StrategicAnalysis:
    """Analysis with every informational field set to the no-data sentinel."""
    return StrategicAnalysis(
        strengths=[_NO_DATA],
        weaknesses=[_NO_DATA],
        shared_patterns=[_NO_DATA],
        market_gaps=[_NO_DATA],
        differentiation_strategies=[_NO_DATA],
        summary=Sentinel.NO_SUMMARY.value,
        research=[_NO_DATA],
        error=message,
    )


def fallback_competitor(message: str, *, id: Optional[str] = None) -> NormalizedCompetitor:
    """Competitor with sentinel values; the placeholder name keeps it out of result lists."""
    return NormalizedCompetitor(
        id=id or str(uuid4()),
        name=Sentinel.UNKNOWN_COMPETITOR.value,
        services=[_NO_DATA],
        service_categories=[_NO_DATA.lower()],
        features=[_NO_DATA],
        strengths=[_NO_DATA],
        weaknesses=[_NO_DATA],
        complaints=[_NO_DATA],
        ad_themes=[_NO_DATA],
        pricing=_NO_DATA,
        specialty=_NO_DATA,
        target_audience=_NO_DATA,
        brand_tone=_NO_DATA,
        usp=_NO_DATA,
        brand_perception=BrandPerception(positive=_NO_DATA, negative=_NO_DATA),
        error=message,
    )
