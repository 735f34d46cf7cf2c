"""Competitor research and strategic insight pipeline for marketing operations."""

__version__ = "0.1.0"
