"""Single active notification with a fixed lifetime.

Expiry is evaluated lazily against an injectable monotonic clock: a
notification set at ``t`` is visible while ``clock() - t <= ttl``. Showing a
new one restarts the timer; dismissing clears it for good.
"""

from __future__ import annotations
import time
from typing import Callable, Optional

from expense_sheets.models.notification import Notification

DEFAULT_TTL_SECONDS = 5.0


class NotificationCenter:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._active: Optional[Notification] = None
        self._set_at: float = 0.0

    def show(self, message: str, type: str) -> Notification:
        self._active = Notification(message=message, type=type)
        self._set_at = self._clock()
        return self._active

    def success(self, message: str) -> Notification:
        return self.show(message, "success")

    def error(self, message: str) -> Notification:
        return self.show(message, "error")

    def current(self) -> Optional[Notification]:
        if self._active is None:
            return None
        if self._clock() - self._set_at > self.ttl_seconds:
            self._active = None
        return self._active

    def remaining_seconds(self) -> float:
        if self.current() is None:
            return 0.0
        return max(0.0, self.ttl_seconds - (self._clock() - self._set_at))

    def dismiss(self) -> None:
        self._active = None


__all__ = ["NotificationCenter", "DEFAULT_TTL_SECONDS"]
