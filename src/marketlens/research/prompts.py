"""Prompt templates for the text-generation provider.

Every template asks for bare JSON; the repair parser still copes when the
model wraps it in fences or prose anyway.
"""

import json
from datetime import date
from typing import Any, Optional

RESPONSE_LANGUAGE = "Thai"

_JSON_ONLY = (
    "Return ONLY the JSON structure below. No introduction, no headings, "
    "no markdown, no code fences."
)


def competitor_digest(competitors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Compact view of stored competitor rows for inclusion in a prompt."""
    return [
        {
            "name": c.get("name") or "Unnamed Competitor",
            "services": c.get("services") or [],
            "pricing": c.get("pricing") or "N/A",
            "strengths": c.get("strengths") or [],
            "weaknesses": c.get("weaknesses") or [],
            "targetAudience": c.get("targetAudience") or "N/A",
            "adThemes": c.get("adThemes") or [],
            "usp": c.get("usp") or "N/A",
            "brandTone": c.get("brandTone") or "N/A",
            "positivePerception": c.get("positivePerception") or "N/A",
            "negativePerception": c.get("negativePerception") or "N/A",
        }
        for c in competitors
    ]


def swot_prompt(client_name: str, competitors: list[dict[str, Any]]) -> str:
    """Client-focused SWOT using only the given competitors as context."""
    data = json.dumps(competitor_digest(competitors), ensure_ascii=False, indent=2)
    return f"""You are a marketing strategy expert. Produce a SWOT analysis for {client_name},
using only the competitors listed below as context.

Competitors:
{data}

Rules:
1. Analyse {client_name} first and foremost.
2. Do not add competitors that are not listed.
3. Answer in {RESPONSE_LANGUAGE}; loanwords are fine.
4. Keep every point short and to the point.

{_JSON_ONLY}
{{
  "strengths": ["..."],
  "weaknesses": ["..."],
  "shared_patterns": ["threats to {client_name}"],
  "market_gaps": ["opportunities for {client_name}"],
  "differentiation_strategies": ["..."],
  "summary": "one-paragraph SWOT summary"
}}"""


def direct_analysis_prompt(client_name: str, product_focus: str) -> str:
    """Landscape analysis when no competitor rows are stored for the client."""
    return f"""As an expert marketing analyst, analyse the competitors of {client_name}
in the {product_focus} space.

{_JSON_ONLY}
{{
  "strengths": ["key strengths of competitors in this market"],
  "weaknesses": ["key weaknesses of competitors in this market"],
  "shared_patterns": ["shared marketing patterns or themes"],
  "market_gaps": ["market gaps or unmet needs"],
  "differentiation_strategies": ["actionable differentiation strategies"],
  "summary": "one-paragraph summary of the competitive landscape"
}}"""


def market_trends_prompt(client_name: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"""Find current information, news and trends related to the business category of
{client_name} in Thailand, as of {today.isoformat()}. Give at least 20 useful bullet points:
- understand the business as a real customer would (prices, fees, promotions, key features);
- daily news around the {client_name} business that can spark new ideas (Facebook, Pantip, social media);
- back every point with numbers where possible.
Answer in {RESPONSE_LANGUAGE}.

{_JSON_ONLY}
{{
  "research": ["point 1", "point 2", "..."]
}}"""


def news_prompt(
    client_name: str,
    competitor_names: list[str],
    product_focus: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    today = today or date.today()
    if competitor_names:
        competitors = f"key competitors: {', '.join(competitor_names)}"
    else:
        competitors = "no clear competitor data"
    return f"""List the latest news related to the business of {client_name} ({competitors})
or to {product_focus or 'its'} products, for use in advertising content.
Headlines with a short summary, Thai news from trustworthy outlets only, at least 10 items,
latest as of {today.isoformat()}. Answer in {RESPONSE_LANGUAGE}.

{_JSON_ONLY}
{{
  "research": ["headline 1: summary", "headline 2: summary", "..."]
}}"""


def competitor_research_prompt(
    competitor_name: str,
    client_name: Optional[str],
    product_focus: Optional[str],
    website: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """Single-competitor research with web-search grounding."""
    context = ""
    if website:
        context += f"Competitor website: {website}\n"
    if description:
        context += f"Additional context: {description}\n"
    return f"""You are a market research expert. Research the competitor "{competitor_name}"
for client "{client_name or 'the client'}" in the {product_focus or 'business'} industry.
{context}
Use web search for current, factual information. If something is unknown use null for
strings and [] for arrays.

{_JSON_ONLY}
{{
  "name": "{competitor_name}",
  "website": "competitor website URL",
  "facebookUrl": "Facebook page URL if found",
  "services": ["..."],
  "serviceCategories": ["..."],
  "features": ["..."],
  "pricing": "pricing information or model",
  "strengths": ["..."],
  "weaknesses": ["..."],
  "specialty": "main specialty",
  "targetAudience": "target customer description",
  "brandTone": "brand personality and communication style",
  "positivePerception": "positive feedback or reputation",
  "negativePerception": "negative feedback or challenges",
  "adThemes": ["..."],
  "usp": "unique selling proposition"
}}"""


def competitor_summary_prompt(
    client_name: Optional[str],
    product_focus: Optional[str],
    competitors: list[dict[str, Any]],
) -> str:
    """One flowing paragraph summarising the stored competitors."""
    lines = []
    for c in competitors:
        lines.append(
            f"**{c.get('name')}**\n"
            f"- services: {c.get('services') or 'N/A'}\n"
            f"- pricing: {c.get('pricing') or 'N/A'}\n"
            f"- strengths: {c.get('strengths') or 'N/A'}\n"
            f"- weaknesses: {c.get('weaknesses') or 'N/A'}\n"
            f"- target audience: {c.get('targetAudience') or 'N/A'}\n"
            f"- brand tone: {c.get('brandTone') or 'N/A'}"
        )
    body = "\n".join(lines)
    return f"""You are a competitive marketing analyst. Summarise the competitors of
{client_name or 'the client'} in the {product_focus or 'given'} business.

Competitor data:
{body}

Write a single continuous paragraph in {RESPONSE_LANGUAGE} covering the market overview and
main competitors, their overall strengths and weaknesses, market gaps, differentiation
opportunities and strategic recommendations. No bullet points or headings."""
