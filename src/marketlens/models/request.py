"""Operator request describing which client and product to research."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ResearchRequest(BaseModel):
    """Client/product focus submitted by the operator."""

    client_name: Optional[str] = Field(default=None, description="Brand being analysed")
    market: Optional[str] = None
    product_focus: Optional[str] = None
    website_url: Optional[str] = None
    facebook_url: Optional[str] = None
    additional_info: Optional[str] = None
    user_competitors: list[str] = Field(default_factory=list)
    ad_account_id: Optional[str] = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ResearchRequest":
        """Load a request from YAML. Accepts a nested `client:` block or a flat mapping."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        client = data.get("client", {})

        def _get(key: str, default=None):
            return client.get(key, data.get(key, default))

        return cls.model_validate(
            {
                "client_name": _get("client_name") or _get("name"),
                "market": _get("market"),
                "product_focus": _get("product_focus"),
                "website_url": _get("website_url"),
                "facebook_url": _get("facebook_url"),
                "additional_info": _get("additional_info"),
                "user_competitors": _get("user_competitors") or [],
                "ad_account_id": _get("ad_account_id"),
            }
        )
