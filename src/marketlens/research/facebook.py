"""Client discovery from a Facebook page via the research workflow."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from marketlens.connectors.base import BaseConnector
from marketlens.errors import MissingFieldError
from marketlens.normalization.fields import strings_from
from marketlens.parsing import ParseError, extract_json

logger = logging.getLogger(__name__)

DEFAULT_PAGE_NAME = "Facebook Page"


@dataclass
class FacebookPageAnalysis:
    client_name: str = DEFAULT_PAGE_NAME
    products: list[str] = field(default_factory=list)
    summary: str = ""
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        if self.error:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "data": {"clientName": self.client_name, "products": self.products, "summary": self.summary},
        }


def analyze_facebook_page(facebook_url: str, webhook: BaseConnector) -> FacebookPageAnalysis:
    """
    Ask the workflow to analyse a Facebook page and read the client off its answer.

    The first row of the returned competitors list is taken to be the page
    owner itself; its services and categories become the product candidates.
    """
    if not facebook_url:
        raise MissingFieldError("facebook_url", message="Facebook URL is required")

    logger.info("Calling workflow for Facebook analysis of %s", facebook_url)
    parsed = extract_json(webhook.fetch({"facebook_url": facebook_url}).body)
    if isinstance(parsed, ParseError) or not isinstance(parsed.value, Mapping):
        return FacebookPageAnalysis(error="Invalid response format from analysis service")

    data = parsed.value
    summary = data.get("summary_competitor")
    competitors = data.get("competitors")
    primary = competitors[0] if isinstance(competitors, list) and competitors else {}
    if not isinstance(primary, Mapping):
        primary = {}

    name = primary.get("name")
    return FacebookPageAnalysis(
        client_name=name if isinstance(name, str) else DEFAULT_PAGE_NAME,
        products=strings_from(primary.get("services")) + strings_from(primary.get("serviceCategories")),
        summary=summary if isinstance(summary, str) else "",
    )
