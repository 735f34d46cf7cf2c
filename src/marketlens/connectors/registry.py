"""Registry for discovering and instantiating connectors."""

from typing import Type

from marketlens.config import Settings
from marketlens.connectors.base import BaseConnector, TextGenerator
from marketlens.connectors.gemini import GeminiClient
from marketlens.connectors.openai_chat import OpenAIClient
from marketlens.connectors.webhook import WorkflowWebhookConnector


class ConnectorRegistry:
    """Discovers and provides provider connectors."""

    _connectors: dict[str, Type[BaseConnector]] = {
        "webhook": WorkflowWebhookConnector,
        "gemini": GeminiClient,
        "openai": OpenAIClient,
    }

    @classmethod
    def get(cls, provider: str, **kwargs) -> BaseConnector:
        """Get a connector instance for the given provider. kwargs passed to connector __init__."""
        connector_cls = cls._connectors.get(provider.lower())
        if not connector_cls:
            raise ValueError(f"Unknown provider: {provider}. Available: {list(cls._connectors.keys())}")
        return connector_cls(**kwargs)

    @classmethod
    def available_providers(cls) -> list[str]:
        """Return list of available provider identifiers."""
        return list(cls._connectors.keys())

    @classmethod
    def text_generator(cls, settings: Settings) -> TextGenerator:
        """Text provider selected by settings.text_provider."""
        retry = {
            "retry_attempts": settings.retry_attempts,
            "retry_backoff_max": settings.retry_backoff_max,
        }
        if settings.text_provider.lower() == "openai":
            return OpenAIClient(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
                temperature=settings.temperature,
                **retry,
            )
        return GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            temperature=settings.temperature,
            timeout=settings.http_timeout,
            **retry,
        )

    @classmethod
    def webhook(cls, url: str, settings: Settings) -> WorkflowWebhookConnector:
        """Webhook connector for one workflow URL with the configured timeout and retry policy."""
        return WorkflowWebhookConnector(
            url,
            timeout=settings.http_timeout,
            retry_attempts=settings.retry_attempts,
            retry_backoff_max=settings.retry_backoff_max,
        )
