"""Research services built on the fetch -> parse -> normalize -> persist pipeline."""

from .analysis import MarketTrends, analysis_error_response, analyze_market, fetch_market_trends
from .competitors import (
    CompetitorResearchResult,
    add_competitor,
    generate_competitor_summary,
    run_competitor_research,
)
from .facebook import FacebookPageAnalysis, analyze_facebook_page
from .pipeline import (
    ResearchPayload,
    process_analysis_payload,
    process_competitor_payload,
    process_research_payload,
    run_pipeline,
)

__all__ = [
    "CompetitorResearchResult",
    "FacebookPageAnalysis",
    "MarketTrends",
    "ResearchPayload",
    "add_competitor",
    "analysis_error_response",
    "analyze_facebook_page",
    "analyze_market",
    "fetch_market_trends",
    "generate_competitor_summary",
    "process_analysis_payload",
    "process_competitor_payload",
    "process_research_payload",
    "run_competitor_research",
    "run_pipeline",
]
