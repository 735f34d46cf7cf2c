"""Text generation through the OpenAI chat completions API."""

import logging
from typing import Optional

import openai
from openai import OpenAI

from marketlens.connectors.base import GenerationResult, TextGenerator
from marketlens.connectors.retry import call_with_retry
from marketlens.errors import MarketLensError, UpstreamError

logger = logging.getLogger(__name__)


class OpenAIClient(TextGenerator):
    """Alternative to Gemini. Web-search grounding is not available and is ignored."""

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gpt-4o-mini",
        temperature: float = 1.0,
        client: Optional[OpenAI] = None,
        retry_attempts: int = 1,
        retry_backoff_max: float = 8.0,
    ):
        if not api_key and client is None:
            raise MarketLensError("Missing OPENAI_API_KEY environment variable")
        self.model = model
        self.temperature = temperature
        self._client = client or OpenAI(api_key=api_key)
        self._retry_attempts = retry_attempts
        self._retry_backoff_max = retry_backoff_max

    def _complete(self, prompt: str, temperature: float, json_mode: bool) -> str:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                **kwargs,
            )
        except openai.APIStatusError as e:
            raise UpstreamError(self.provider, e.message, upstream_status=e.status_code) from e
        except openai.OpenAIError as e:
            raise UpstreamError(self.provider, str(e)) from e
        return response.choices[0].message.content or ""

    def generate(
        self,
        prompt: str,
        *,
        grounding: bool = False,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> GenerationResult:
        if grounding:
            logger.debug("Grounding requested but not supported by %s; ignoring", self.provider)
        temp = self.temperature if temperature is None else temperature
        text = call_with_retry(
            lambda: self._complete(prompt, temp, json_mode),
            attempts=self._retry_attempts,
            backoff_max=self._retry_backoff_max,
        )
        return GenerationResult(text=text, model=self.model)
