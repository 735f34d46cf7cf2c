"""Normalized competitor record."""

from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from marketlens.models.sentinel import Sentinel


class BrandPerception(BaseModel):
    """How customers talk about a brand, good and bad."""

    positive: str = Sentinel.NOT_AVAILABLE.value
    negative: str = Sentinel.NOT_AVAILABLE.value


class NormalizedCompetitor(BaseModel):
    """
    Canonical competitor record. Every field has a fixed type no matter how
    the upstream generator shaped it: string fields fall back to "N/A",
    array fields to [], URL fields to None.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Sentinel.UNKNOWN_COMPETITOR.value
    website: Optional[str] = None
    facebook_url: Optional[str] = Field(default=None, alias="facebookUrl")

    services: list[str] = Field(default_factory=list)
    service_categories: list[str] = Field(default_factory=list, alias="serviceCategories")
    features: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    complaints: list[str] = Field(default_factory=list)
    ad_themes: list[str] = Field(default_factory=list, alias="adThemes")

    pricing: str = Sentinel.NOT_AVAILABLE.value
    specialty: str = Sentinel.NOT_AVAILABLE.value
    target_audience: str = Field(default=Sentinel.NOT_AVAILABLE.value, alias="targetAudience")
    brand_tone: str = Field(default=Sentinel.NOT_AVAILABLE.value, alias="brandTone")
    usp: str = Sentinel.NOT_AVAILABLE.value
    brand_perception: BrandPerception = Field(
        default_factory=BrandPerception, alias="brandPerception"
    )

    error: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        """True when no usable name survived normalization."""
        return self.name == Sentinel.UNKNOWN_COMPETITOR.value

    def to_row(self, analysis_run_id: Optional[str] = None) -> dict:
        """Flatten into the Competitor table row shape."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"brand_perception", "error"})
        data["analysisRunId"] = analysis_run_id
        data["positivePerception"] = self.brand_perception.positive
        data["negativePerception"] = self.brand_perception.negative
        return data
