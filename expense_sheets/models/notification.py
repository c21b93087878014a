from __future__ import annotations
from typing import Literal

from pydantic import BaseModel


class Notification(BaseModel):
    message: str
    type: Literal["success", "error"]


class NotificationOut(Notification):
    """Notification as exposed by the API, with the time left before expiry."""

    expires_in: float
