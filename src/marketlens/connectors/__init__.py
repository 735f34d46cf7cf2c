"""Outbound connectors for workflow webhooks and text-generation APIs."""

from marketlens.connectors.base import BaseConnector, GenerationResult, TextGenerator
from marketlens.connectors.registry import ConnectorRegistry

__all__ = ["BaseConnector", "ConnectorRegistry", "GenerationResult", "TextGenerator"]
