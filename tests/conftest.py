"""Pytest fixtures for marketlens tests."""

import tempfile
from pathlib import Path
from typing import Any, Union

import pytest

from marketlens.connectors.base import BaseConnector, GenerationResult, TextGenerator
from marketlens.models.raw import RawProviderPayload
from marketlens.store import ResearchRepository, RowStore


class FakeGenerator(TextGenerator):
    """Text generator that replays queued answers and records every call."""

    provider = "fake"

    def __init__(self, *responses: Union[str, GenerationResult, Exception]):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def generate(self, prompt, *, grounding=False, temperature=None, json_mode=False) -> GenerationResult:
        self.calls.append(
            {"prompt": prompt, "grounding": grounding, "temperature": temperature, "json_mode": json_mode}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, GenerationResult):
            return response
        return GenerationResult(text=response)


class FakeWebhook(BaseConnector):
    """Webhook connector returning a fixed body."""

    provider = "webhook"

    def __init__(self, body: Any):
        self.body = body
        self.payloads: list[dict[str, Any]] = []

    def fetch(self, payload: dict[str, Any]) -> RawProviderPayload:
        self.payloads.append(payload)
        if isinstance(self.body, Exception):
            raise self.body
        return RawProviderPayload(provider=self.provider, body=self.body, status_code=200)


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def row_store(temp_db: Path) -> RowStore:
    """RowStore with temporary database."""
    return RowStore(temp_db)


@pytest.fixture
def repository(row_store: RowStore) -> ResearchRepository:
    """ResearchRepository over the temporary store."""
    return ResearchRepository(row_store)


@pytest.fixture
def acme_fenced_payload() -> str:
    """Fenced, array-wrapped competitor record with an array-valued pricing field."""
    return '```json\n[{"name":"Acme","pricing":["฿100","฿200"]}]\n```'


@pytest.fixture
def research_envelope() -> dict[str, Any]:
    """Competitor-research workflow response, client row first."""
    return {
        "competitors": [
            {
                "name": "Siam Clinic",
                "website": "siamclinic.co.th",
                "services": ["Botox", "Filler"],
                "serviceCategories": ["Aesthetics", " aesthetics ", "Skin"],
                "pricing": "฿3,000 - ฿15,000",
            },
            {
                "name": "Bangkok Beauty Co",
                "website": "https://bkkbeauty.com",
                "facebookUrl": "//facebook.com/bkkbeauty",
                "services": ["Laser"],
                "strengths": ["Central location"],
                "pricing": ["฿2,500", "฿9,000"],
                "targetAudience": ["Women 25-40", "Office workers"],
                "brandPerception": {"positive": "Friendly staff", "negative": "Long waits"},
            },
            {"services": ["Unnamed row"]},
            {
                "name": "Glow Aesthetic",
                "website": "glowaesthetic.com",
                "usp": "Doctor-led treatments",
                "positivePerception": "Natural results",
            },
        ],
        "summary_competitor": "Three clinics compete mostly on price.",
    }


@pytest.fixture
def make_generator():
    """Factory for FakeGenerator instances."""
    return FakeGenerator


@pytest.fixture
def make_webhook():
    """Factory for FakeWebhook instances."""
    return FakeWebhook
