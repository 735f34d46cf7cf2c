"""CLI for marketlens."""
