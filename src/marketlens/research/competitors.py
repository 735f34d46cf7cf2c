"""Competitor research, single-competitor enrichment and competitor summaries."""

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Optional

from marketlens.connectors.base import BaseConnector, TextGenerator
from marketlens.errors import MissingFieldError, NotFoundError, PayloadFieldError
from marketlens.models.competitor import NormalizedCompetitor
from marketlens.models.request import ResearchRequest
from marketlens.normalization import fallback_competitor, normalize_competitor
from marketlens.parsing import ParseError, extract_json
from marketlens.store import ResearchRepository

from .pipeline import process_research_payload
from .prompts import competitor_research_prompt, competitor_summary_prompt

logger = logging.getLogger(__name__)


@dataclass
class CompetitorResearchResult:
    """Outcome of one competitor-research run."""

    competitors: list[NormalizedCompetitor] = field(default_factory=list)
    analysis_run_id: Optional[str] = None
    summary: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.error is None,
            "competitors": [c.model_dump(mode="json", by_alias=True) for c in self.competitors],
            "analysisRunId": self.analysis_run_id,
        }
        if self.summary:
            data["summary_competitor"] = self.summary
        if self.error:
            data["error"] = self.error
        return data


def webhook_payload(request: ResearchRequest) -> dict[str, Any]:
    """Body sent to the competitor-research workflow."""
    return {
        "clientName": request.client_name,
        "productFocus": request.product_focus,
        "market": request.market,
        "additionalInfo": request.additional_info,
        "website": request.website_url,
    }


def run_competitor_research(
    request: ResearchRequest,
    webhook: BaseConnector,
    repository: Optional[ResearchRepository] = None,
) -> CompetitorResearchResult:
    """
    Ask the research workflow for competitors, normalize them and persist the run.

    Raises MissingFieldError without a client name or market, UpstreamError
    when the workflow call fails, and PayloadFieldError when the response has
    no competitors list. A response that is not JSON at all yields a result
    with error set and nothing persisted.
    """
    if not request.client_name or not request.market:
        raise MissingFieldError(
            "client_name", "market", message="Client name and target market are required"
        )

    raw = webhook.fetch(webhook_payload(request))
    payload = process_research_payload(raw, client_name=request.client_name)
    if payload.error:
        logger.warning("Competitor research returned an unusable payload: %s", payload.error)
        return CompetitorResearchResult(error=payload.error)
    if not payload.has_competitor_list:
        raise PayloadFieldError("competitors", message="Research workflow response has no competitors list")

    logger.info("Processed %d competitors.", len(payload.competitors))
    result = CompetitorResearchResult(competitors=payload.competitors, summary=payload.summary)
    if repository is None:
        return result

    run = repository.save_analysis_run(request)
    result.analysis_run_id = run["id"]
    logger.info("Saved AnalysisRun %s", run["id"])

    if payload.summary:
        try:
            repository.update_competitor_summary(run["id"], payload.summary)
        except sqlite3.Error as e:
            logger.error("Failed to save competitor summary: %s", e)

    if payload.competitors:
        saved = repository.save_competitors(run["id"], payload.competitors)
        logger.info("Saved %d competitors.", saved)
    else:
        logger.info("No competitors processed, skipping competitor insert.")
    return result


def add_competitor(
    run_id: str,
    competitor_name: str,
    generator: TextGenerator,
    repository: ResearchRepository,
    *,
    client_name: Optional[str] = None,
    product_focus: Optional[str] = None,
    website: Optional[str] = None,
    description: Optional[str] = None,
) -> NormalizedCompetitor:
    """
    Research one named competitor with web-search grounding and store it under run_id.
    An unparseable answer returns a fallback competitor (error set) and stores nothing.
    """
    if not run_id or not competitor_name:
        raise MissingFieldError(
            "run_id", "competitor_name", message="Client ID and competitor name are required"
        )

    prompt = competitor_research_prompt(competitor_name, client_name, product_focus, website, description)
    logger.info("Researching %s with grounding...", competitor_name)
    generated = generator.generate(prompt, grounding=True, temperature=0.7, json_mode=True)
    logger.debug("First 200 chars of response: %s", generated.text[:200])

    parsed = extract_json(generated.text)
    if isinstance(parsed, ParseError) or not isinstance(parsed.value, dict):
        return fallback_competitor("Failed to parse competitor data")

    record = dict(parsed.value)
    record["name"] = record.get("name") or competitor_name
    record["website"] = record.get("website") or website
    competitor = normalize_competitor(record)
    repository.add_competitor(run_id, competitor)
    logger.info("Added competitor: %s", competitor.name)
    return competitor


def generate_competitor_summary(
    run_id: str,
    generator: TextGenerator,
    repository: ResearchRepository,
    *,
    client_name: Optional[str] = None,
    product_focus: Optional[str] = None,
) -> str:
    """One-paragraph competitor summary, saved onto the run when possible."""
    if not run_id:
        raise MissingFieldError("run_id", message="Client ID is required")
    competitors = repository.competitors_for_run(run_id)
    if not competitors:
        raise NotFoundError("No competitor data found")

    prompt = competitor_summary_prompt(client_name, product_focus, competitors)
    summary = generator.generate(prompt, temperature=0.7).text.strip()
    try:
        if not repository.update_competitor_summary(run_id, summary):
            logger.warning("Run %s not found; summary not saved", run_id)
    except sqlite3.Error as e:
        logger.error("Failed to save summary to database: %s", e)
    return summary
