"""OpenAI chat-completions text provider."""

from .client import OpenAIClient

__all__ = ["OpenAIClient"]
