from __future__ import annotations

from pydantic import BaseModel


class EndpointConfig(BaseModel):
    url: str = ""


class EndpointConfigOut(EndpointConfig):
    configured: bool
    trusted: bool
