"""Domain persistence for analysis runs, competitors and market analyses."""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional
from uuid import uuid4

from marketlens.models.analysis import StrategicAnalysis
from marketlens.models.competitor import NormalizedCompetitor
from marketlens.models.request import ResearchRequest

from .row_store import RowStore

logger = logging.getLogger(__name__)

ANALYSIS_RUN = "AnalysisRun"
COMPETITOR = "Competitor"
RESEARCH_MARKET = "research_market"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResearchRepository:
    """Research-specific reads and writes on top of a RowStore."""

    def __init__(self, store: RowStore):
        self.store = store

    def save_analysis_run(self, request: ResearchRequest) -> dict[str, Any]:
        """Insert the AnalysisRun row describing what was researched."""
        now = _now()
        row = {
            "id": str(uuid4()),
            "clientName": request.client_name,
            "clientWebsiteUrl": request.website_url,
            "clientFacebookUrl": request.facebook_url,
            "market": request.market,
            "productFocus": request.product_focus,
            "additionalInfo": request.additional_info,
            "ad_account_id": request.ad_account_id,
            "timestamp": now,
            "updatedAt": now,
        }
        return self.store.insert(ANALYSIS_RUN, row)[0]

    def update_competitor_summary(self, run_id: str, summary: str) -> bool:
        """Attach a generated competitor summary to a run. Returns False if the run is missing."""
        count = self.store.update(
            ANALYSIS_RUN,
            {"competitor_summary": summary, "competitor_summary_generated_at": _now()},
            id=run_id,
        )
        return count > 0

    def save_competitors(self, run_id: str, competitors: Iterable[NormalizedCompetitor]) -> int:
        rows = [c.to_row(run_id) for c in competitors]
        if not rows:
            return 0
        return len(self.store.insert(COMPETITOR, rows))

    def get_run(self, run_id: str) -> Optional[dict[str, Any]]:
        return self.store.get(ANALYSIS_RUN, run_id)

    def list_runs(self, client_name: Optional[str] = None) -> list[dict[str, Any]]:
        if client_name:
            return self.store.select(ANALYSIS_RUN, clientName=client_name)
        return self.store.select(ANALYSIS_RUN)

    def competitors_for_run(self, run_id: str) -> list[dict[str, Any]]:
        return self.store.select(COMPETITOR, analysisRunId=run_id)

    def competitors_for_client(self, client_name: str) -> list[dict[str, Any]]:
        """Competitors across every run for a client."""
        run_ids = [r["id"] for r in self.store.select(ANALYSIS_RUN, clientName=client_name)]
        if not run_ids:
            return []
        return self.store.select_in(COMPETITOR, "analysisRunId", run_ids)

    def find_competitors(
        self,
        client_name: str,
        product_focus: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> tuple[list[dict[str, Any]], Optional[str]]:
        """
        Competitor rows for a client/product. Returns (rows, run_id).
        Lookup order: explicit run_id; run by client + product focus, also
        trying the product focus with a trailing comma as older runs stored it;
        then competitors from every run of the client.
        """
        if run_id:
            return self.competitors_for_run(run_id), run_id

        runs = self.store.select(ANALYSIS_RUN, limit=1, clientName=client_name, productFocus=product_focus)
        if not runs and product_focus:
            runs = self.store.select(
                ANALYSIS_RUN, limit=1, clientName=client_name, productFocus=f"{product_focus},"
            )
        if not runs:
            return [], None

        found_run_id = runs[0]["id"]
        rows = self.competitors_for_run(found_run_id)
        if not rows:
            rows = self.competitors_for_client(client_name)
        return rows, found_run_id

    def product_focus_for_client(self, client_name: str) -> Optional[str]:
        runs = self.store.select(ANALYSIS_RUN, limit=1, clientName=client_name)
        return runs[0].get("productFocus") if runs else None

    def add_competitor(self, run_id: str, competitor: NormalizedCompetitor) -> dict[str, Any]:
        return self.store.insert(COMPETITOR, competitor.to_row(run_id))[0]

    def save_market_analysis(
        self,
        client_name: str,
        product_focus: str,
        analysis: StrategicAnalysis,
    ) -> dict[str, Any]:
        """Replace the stored analysis for client + product (delete, then insert)."""
        data = {
            "analysis": analysis.model_dump(
                include={
                    "strengths",
                    "weaknesses",
                    "shared_patterns",
                    "market_gaps",
                    "differentiation_strategies",
                    "summary",
                    "research",
                }
            ),
            "news_insights": analysis.news_insights,
            "groundingMetadata": {"groundingChunks": analysis.grounding_chunks},
        }
        logger.info("Saving analysis for %s - %s", client_name, product_focus)
        self.store.delete(RESEARCH_MARKET, client_name=client_name, product_focus=product_focus)
        return self.store.insert(
            RESEARCH_MARKET,
            {
                "client_name": client_name,
                "product_focus": product_focus,
                "analysis_data": data,
                "created_at": _now(),
            },
        )[0]

    def saved_analyses(self, client_name: Optional[str] = None) -> list[dict[str, Any]]:
        if client_name:
            return self.store.select(RESEARCH_MARKET, client_name=client_name)
        return self.store.select(RESEARCH_MARKET)
