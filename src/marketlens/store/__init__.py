"""Local persistence for analysis runs, competitors and market analyses."""

from marketlens.store.repository import (
    ANALYSIS_RUN,
    COMPETITOR,
    RESEARCH_MARKET,
    ResearchRepository,
)
from marketlens.store.row_store import RowStore

__all__ = [
    "ANALYSIS_RUN",
    "COMPETITOR",
    "RESEARCH_MARKET",
    "ResearchRepository",
    "RowStore",
]
