"""Client for the Gemini generateContent REST endpoint."""

import logging
from typing import Any, Optional

import httpx

from marketlens.connectors.base import GenerationResult, TextGenerator
from marketlens.connectors.retry import call_with_retry
from marketlens.errors import MarketLensError, UpstreamError

logger = logging.getLogger(__name__)


def extract_generation(envelope: Any) -> GenerationResult:
    """Pull candidates[0] text and grounding chunks out of a response envelope."""
    if not isinstance(envelope, dict):
        return GenerationResult(text="")
    candidates = envelope.get("candidates") or []
    first = candidates[0] if candidates and isinstance(candidates[0], dict) else {}
    parts = (first.get("content") or {}).get("parts") or []
    text = ""
    if parts and isinstance(parts[0], dict):
        text = parts[0].get("text") or ""
    chunks = (first.get("groundingMetadata") or {}).get("groundingChunks") or []
    return GenerationResult(
        text=text,
        grounding_chunks=[c for c in chunks if isinstance(c, dict)],
        model=envelope.get("modelVersion"),
    )


class GeminiClient(TextGenerator):
    """
    Text generation through Gemini. grounding=True adds the google_search tool
    so the model can augment its answer with web search results.
    """

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        temperature: float = 1.0,
        client: Optional[httpx.Client] = None,
        timeout: float = 120.0,
        retry_attempts: int = 1,
        retry_backoff_max: float = 8.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self._client = client or httpx.Client(timeout=timeout)
        self._retry_attempts = retry_attempts
        self._retry_backoff_max = retry_backoff_max

    def build_body(
        self,
        prompt: str,
        *,
        grounding: bool = False,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> dict[str, Any]:
        """Request body for generateContent."""
        config: dict[str, Any] = {
            "temperature": self.temperature if temperature is None else temperature,
        }
        if json_mode:
            config["response_mime_type"] = "application/json"
        body: dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": config,
        }
        if grounding:
            body["tools"] = [{"google_search": {}}]
        return body

    def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        try:
            response = self._client.post(url, params={"key": self.api_key}, json=body)
        except httpx.RequestError as e:
            raise UpstreamError(self.provider, str(e)) from e
        if response.is_error:
            text = response.text
            raise UpstreamError(self.provider, text[:200], upstream_status=response.status_code, body=text)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(self.provider, "Response envelope was not JSON") from e

    def generate(
        self,
        prompt: str,
        *,
        grounding: bool = False,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> GenerationResult:
        if not self.api_key:
            raise MarketLensError("Missing GEMINI_API_KEY environment variable")
        body = self.build_body(prompt, grounding=grounding, temperature=temperature, json_mode=json_mode)
        if grounding:
            logger.info("Using Google grounding search for %s call", self.model)
        envelope = call_with_retry(
            lambda: self._post(body),
            attempts=self._retry_attempts,
            backoff_max=self._retry_backoff_max,
        )
        result = extract_generation(envelope)
        logger.debug("Grounding chunks: %s", result.grounding_chunks)
        return result
