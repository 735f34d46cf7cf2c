"""Abstract base class for outbound provider connectors."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from marketlens.models.raw import RawProviderPayload
from marketlens.parsing import ParseResult, extract_json


@dataclass
class GenerationResult:
    """Free text extracted from a text-generation envelope."""

    text: str
    grounding_chunks: list[dict[str, Any]] = field(default_factory=list)
    model: Optional[str] = None


class BaseConnector(ABC):
    """
    Standard interface for external AI/workflow services.
    fetch() issues one outbound call and returns whatever came back;
    fetch_json() runs the unwrap + repair stages on it.
    """

    provider: str = ""

    @abstractmethod
    def fetch(self, payload: dict[str, Any]) -> RawProviderPayload:
        """Issue the outbound call. Raises UpstreamError on transport failure or non-2xx."""
        pass

    def fetch_json(self, payload: dict[str, Any]) -> ParseResult:
        """Fetch, then unwrap and parse the body. Malformed bodies come back as ParseError."""
        raw = self.fetch(payload)
        return extract_json(raw.body)


class TextGenerator(BaseConnector):
    """Connector for a text-generation API that answers a single prompt."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        *,
        grounding: bool = False,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> GenerationResult:
        """Send one prompt and return the extracted text."""
        pass

    def fetch(self, payload: dict[str, Any]) -> RawProviderPayload:
        result = self.generate(
            payload["prompt"],
            grounding=bool(payload.get("grounding")),
            temperature=payload.get("temperature"),
            json_mode=bool(payload.get("json_mode")),
        )
        return RawProviderPayload(
            provider=self.provider,
            body=result.text,
            grounding_chunks=result.grounding_chunks,
        )
