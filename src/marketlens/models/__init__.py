"""Data models for provider payloads, competitors and analyses."""

from marketlens.models.analysis import StrategicAnalysis
from marketlens.models.competitor import BrandPerception, NormalizedCompetitor
from marketlens.models.raw import RawProviderPayload
from marketlens.models.request import ResearchRequest
from marketlens.models.sentinel import Sentinel

__all__ = [
    "BrandPerception",
    "NormalizedCompetitor",
    "RawProviderPayload",
    "ResearchRequest",
    "Sentinel",
    "StrategicAnalysis",
]
