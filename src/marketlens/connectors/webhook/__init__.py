"""Workflow-automation webhook connector."""

from .connector import WorkflowWebhookConnector

__all__ = ["WorkflowWebhookConnector"]
