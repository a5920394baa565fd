from __future__ import annotations

import time
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .keys import KeyEvent


class Clock(Protocol):
    """Monotonic clock abstraction.

    The decision engine schedules every deadline against this interface rather
    than reading real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class InputSource(Protocol):
    """Bounded-wait source of key events."""

    def poll(self, timeout_s: float) -> KeyEvent | None:
        """Block up to ``timeout_s`` and return the next key, or None on timeout."""
