"""Connector for workflow-automation (n8n-style) webhooks.

The workflow receives a JSON body with client/brand identifiers and returns
either one JSON object or a one-element array holding it. Some workflows
return the object as a JSON string, or as text with prose around it, so the
body is kept as text whenever it does not decode.
"""

import logging
from typing import Any, Optional

import httpx

from marketlens.connectors.base import BaseConnector
from marketlens.connectors.retry import call_with_retry
from marketlens.errors import UpstreamError
from marketlens.models.raw import RawProviderPayload

logger = logging.getLogger(__name__)


class WorkflowWebhookConnector(BaseConnector):
    """POSTs a JSON payload to one webhook URL and returns the raw response body."""

    provider = "webhook"

    DEFAULT_HEADERS = {
        "User-Agent": "marketlens/0.1",
        "Content-Type": "application/json",
        "Accept": "application/json, text/plain, */*",
    }

    def __init__(
        self,
        url: str,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 180.0,
        retry_attempts: int = 1,
        retry_backoff_max: float = 8.0,
    ):
        if not url:
            raise ValueError("Webhook URL is not configured")
        self.url = url
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._retry_attempts = retry_attempts
        self._retry_backoff_max = retry_backoff_max

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = self._client.post(self.url, json=payload)
        except httpx.RequestError as e:
            logger.error("Webhook request to %s failed: %s", self.url, e)
            raise UpstreamError(self.provider, str(e)) from e
        if response.is_error:
            body = response.text
            logger.error("Webhook error response: %s - %s", response.status_code, body[:500])
            raise UpstreamError(
                self.provider,
                body[:200],
                upstream_status=response.status_code,
                body=body,
            )
        return response

    def fetch(self, payload: dict[str, Any]) -> RawProviderPayload:
        """POST payload; decode JSON when possible, otherwise keep the text."""
        logger.info("Calling webhook %s", self.url)
        response = call_with_retry(
            lambda: self._post(payload),
            attempts=self._retry_attempts,
            backoff_max=self._retry_backoff_max,
        )
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text
        return RawProviderPayload(provider=self.provider, body=body, status_code=response.status_code)
