"""Correlation of outstanding calls with the objects they concern."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from blogwire.errors import ErrorKind


class FlowState(str, Enum):
    """Stage of a multi-step publish flow a pending call belongs to."""

    AWAITING_CATEGORIES = "awaiting_categories"
    AWAITING_POST_WRITE = "awaiting_post_write"
    AWAITING_CATEGORY_ASSIGNMENT = "awaiting_category_assignment"
    AWAITING_PUBLISH_WRITE = "awaiting_publish_write"


# handler(entry, payload)
Handler = Callable[["PendingCall", Any], None]
# error_handler(entry, kind, message)
ErrorHandler = Callable[["PendingCall", ErrorKind, str], None]


@dataclass
class PendingCall:
    """One outstanding call.

    ``target`` is the Post, Media or Comment the call concerns, or None for
    account-level calls. ``post`` holds the owning post of a comment call.
    ``error_handler`` replaces the default error event when set.
    """

    token: int
    handler: Handler
    operation: str
    target: Any = None
    post: Any = None
    publish_after_categories: bool = False
    assign_categories: bool = False
    creating: bool = False
    state: FlowState | None = None
    error_handler: ErrorHandler | None = None
    context: dict[str, Any] = field(default_factory=dict)


class CallRegistry:
    """Issues correlation tokens and hands each entry back exactly once."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._pending: dict[int, PendingCall] = {}

    def register(
        self,
        handler: Handler,
        operation: str,
        target: Any = None,
        **aux: Any,
    ) -> PendingCall:
        """Record a new call and return its entry with a fresh token."""
        entry = PendingCall(
            token=next(self._counter),
            handler=handler,
            operation=operation,
            target=target,
            **aux,
        )
        self._pending[entry.token] = entry
        return entry

    def resolve(self, token: int) -> PendingCall | None:
        """Remove and return the entry for ``token``; None if unknown or already consumed."""
        return self._pending.pop(token, None)

    def clear(self) -> None:
        self._pending.clear()

    def __contains__(self, token: object) -> bool:
        return token in self._pending

    def __len__(self) -> int:
        return len(self._pending)
