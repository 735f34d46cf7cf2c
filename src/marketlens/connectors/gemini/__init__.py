"""Generative-language API client."""

from .client import GeminiClient

__all__ = ["GeminiClient"]
