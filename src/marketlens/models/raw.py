"""Raw provider payload before unwrapping and repair."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class RawProviderPayload(BaseModel):
    """
    Whatever an external AI/workflow call returned.
    body is response text or an already-decoded JSON value; nothing about
    its shape is guaranteed.
    """

    model_config = ConfigDict(extra="allow")

    provider: str = ""
    body: Any = None
    status_code: Optional[int] = None
