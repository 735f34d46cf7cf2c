"""Strategic (SWOT-style) analysis record."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from marketlens.models.sentinel import Sentinel

# Informational fields shared by successful and fallback analyses
ANALYSIS_LIST_FIELDS = (
    "strengths",
    "weaknesses",
    "shared_patterns",
    "market_gaps",
    "differentiation_strategies",
    "research",
)


class StrategicAnalysis(BaseModel):
    """Client-focused analysis assembled from generated SWOT, trends and news."""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    shared_patterns: list[str] = Field(default_factory=list, description="Threats / shared patterns")
    market_gaps: list[str] = Field(default_factory=list, description="Opportunities")
    differentiation_strategies: list[str] = Field(default_factory=list)
    summary: str = Sentinel.NOT_AVAILABLE.value
    research: list[str] = Field(default_factory=list)

    news_insights: list[str] = Field(default_factory=list)
    grounding_chunks: list[dict[str, Any]] = Field(default_factory=list)

    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.error is not None
