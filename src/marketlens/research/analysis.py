"""Strategic SWOT analysis enriched with grounded market trends and news."""

import logging
import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from marketlens.connectors.base import TextGenerator
from marketlens.errors import MarketLensError, MissingFieldError
from marketlens.models.analysis import StrategicAnalysis
from marketlens.normalization import fallback_analysis, normalize_analysis, string_array
from marketlens.parsing import ParsedJson, extract_json
from marketlens.store import ResearchRepository

from .prompts import direct_analysis_prompt, market_trends_prompt, news_prompt, swot_prompt

logger = logging.getLogger(__name__)

NOT_JSON = "Gemini response was not valid JSON"


@dataclass
class MarketTrends:
    """Combined output of the trends and news calls."""

    trends: list[str] = field(default_factory=list)
    news: list[str] = field(default_factory=list)
    grounding_chunks: list[dict[str, Any]] = field(default_factory=list)

    @property
    def research(self) -> list[str]:
        return self.trends + self.news


def _research_list(text: str, label: str) -> list[str]:
    parsed = extract_json(text)
    if isinstance(parsed, ParsedJson) and isinstance(parsed.value, Mapping):
        return string_array(parsed.value.get("research"))
    logger.warning("%s response was not valid JSON", label)
    return []


def fetch_market_trends(
    client_name: str,
    generator: TextGenerator,
    *,
    competitors: Optional[list[dict[str, Any]]] = None,
    product_focus: Optional[str] = None,
    repository: Optional[ResearchRepository] = None,
) -> MarketTrends:
    """
    Two grounded calls issued one after the other: market trends, then news.
    When no competitors are given they are looked up across the client's runs.
    """
    if not competitors and repository is not None:
        competitors = repository.competitors_for_client(client_name)
        if competitors:
            logger.info("Found %d stored competitors for %s", len(competitors), client_name)
    names = [c["name"] for c in competitors or [] if c.get("name")]

    logger.info("Fetching market trends for %s...", client_name)
    trends = generator.generate(market_trends_prompt(client_name), grounding=True)
    logger.info("Fetching news insights for %s...", client_name)
    news = generator.generate(news_prompt(client_name, names, product_focus), grounding=True)

    return MarketTrends(
        trends=_research_list(trends.text, "Market trends"),
        news=_research_list(news.text, "News insights"),
        grounding_chunks=trends.grounding_chunks + news.grounding_chunks,
    )


def analyze_market(
    client_name: str,
    product_focus: str,
    generator: TextGenerator,
    repository: ResearchRepository,
    *,
    run_id: Optional[str] = None,
) -> StrategicAnalysis:
    """
    SWOT for a client/product, enriched with trends and news, saved to research_market.

    With stored competitors the SWOT is client-focused and limited to them;
    without, a direct landscape analysis is requested instead. A primary
    answer that is not JSON yields a fallback analysis (not saved). A failed
    enrichment only leaves research empty.
    """
    if not client_name or not product_focus:
        raise MissingFieldError(
            "client_name", "product_focus", message="Both clientName and productFocus are required"
        )

    competitors, _ = repository.find_competitors(client_name, product_focus, run_id)
    if competitors:
        logger.info("Analysing %s against %d competitors", client_name, len(competitors))
        prompt = swot_prompt(client_name, competitors)
    else:
        logger.info("No stored competitors for %s; requesting direct analysis", client_name)
        prompt = direct_analysis_prompt(client_name, product_focus)

    generated = generator.generate(prompt)
    analysis = normalize_analysis(extract_json(generated.text))
    if analysis.is_fallback:
        return fallback_analysis(NOT_JSON)

    try:
        trends = fetch_market_trends(
            client_name,
            generator,
            competitors=competitors,
            product_focus=product_focus,
            repository=repository,
        )
    except MarketLensError as e:
        logger.warning("Market trends enrichment failed for %s: %s", client_name, e)
        trends = MarketTrends()

    analysis = analysis.model_copy(
        update={
            "research": trends.research,
            "news_insights": trends.news,
            "grounding_chunks": trends.grounding_chunks,
        }
    )

    try:
        repository.save_market_analysis(client_name, product_focus, analysis)
    except sqlite3.Error as e:
        logger.error("Error saving analysis for %s - %s: %s", client_name, product_focus, e)
    return analysis


def analysis_error_response(error: Exception) -> StrategicAnalysis:
    """Fallback analysis reported when the primary call fails outright."""
    return fallback_analysis(str(error) or "Unknown error")
