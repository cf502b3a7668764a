"""Short-lived bearer token used by the GData dialect."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from blogwire.errors import ErrorKind


@dataclass(frozen=True)
class AuthWaiter:
    """An operation parked until the token is renewed."""

    on_ready: Callable[[str], None]
    on_error: Callable[[ErrorKind, str], None]


class AuthSession:
    """Holds the current token and the operations waiting for a new one."""

    def __init__(self, ttl: float = 600, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self.token = ""
        self.acquired_at: float | None = None
        self._waiters: list[AuthWaiter] = []

    def needs_renewal(self) -> bool:
        if not self.token or self.acquired_at is None:
            return True
        return self.clock() - self.acquired_at > self.ttl

    @property
    def renewing(self) -> bool:
        return bool(self._waiters)

    def wait(self, waiter: AuthWaiter) -> bool:
        """Park ``waiter``. Returns True if the caller must start the exchange."""
        first = not self._waiters
        self._waiters.append(waiter)
        return first

    def renew(self, token: str) -> None:
        """Store a fresh token and run every parked operation."""
        self.token = token
        self.acquired_at = self.clock()
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            waiter.on_ready(token)

    def fail(self, message: str) -> None:
        """Drop the token and fail every parked operation."""
        self.invalidate()
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            waiter.on_error(ErrorKind.AUTHENTICATION, message)

    def invalidate(self) -> None:
        self.token = ""
        self.acquired_at = None
