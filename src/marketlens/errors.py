"""Exceptions raised across the research pipeline.

Malformed provider payloads are not represented here: they travel as
ParseError values and fallback records instead of exceptions.
"""

from typing import Optional


class MarketLensError(Exception):
    """Base class. status_code is the HTTP status an outer surface should report."""

    status_code: int = 500


class UpstreamError(MarketLensError):
    """An external AI/workflow call failed at the transport level or returned non-2xx."""

    status_code = 502

    def __init__(self, provider: str, message: str, *, upstream_status: Optional[int] = None, body: str = ""):
        self.provider = provider
        self.upstream_status = upstream_status
        self.body = body[:200]
        detail = f"{provider} error"
        if upstream_status is not None:
            detail += f": {upstream_status}"
        super().__init__(f"{detail} - {message}" if message else detail)


class MissingFieldError(MarketLensError):
    """A required business field is absent from the request or an otherwise valid payload."""

    status_code = 400

    def __init__(self, *fields: str, message: Optional[str] = None):
        self.fields = fields
        super().__init__(message or f"Missing required field(s): {', '.join(fields)}")


class NotFoundError(MarketLensError):
    """Stored data the operation depends on does not exist."""

    status_code = 404


class PayloadFieldError(MissingFieldError):
    """An upstream payload parsed fine but lacks a field the operation cannot do without."""

    status_code = 502
