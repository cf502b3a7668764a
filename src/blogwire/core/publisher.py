"""Category-aware create/modify/fetch for the Movable Type family.

A post carrying categories is written in three steps: a private write, an
``mt.setPostCategories`` call, then a publishing write if the post is meant
to be public. Operations that need category ids before the first category
listing are parked and replayed once the list arrives.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any

from blogwire.core.category_cache import CategoryCache
from blogwire.core.normalizer import require_flag
from blogwire.core.registry import FlowState, PendingCall
from blogwire.dialects.base import Operation
from blogwire.dialects.metaweblog import metaweblog_args
from blogwire.dialects.movabletype import category_assignment
from blogwire.errors import ErrorKind
from blogwire.models.post import Post, PostStatus
from blogwire.utils.logging import get_logger

if TYPE_CHECKING:
    from blogwire.client import XmlRpcBlog

logger = get_logger(__name__)


class DeferredOperation(str, Enum):
    CREATE = "create"
    MODIFY = "modify"
    FETCH = "fetch"


class PublishOrchestrator:
    """Drives the silent-creation flow for one adapter."""

    def __init__(self, client: "XmlRpcBlog"):
        self.client = client
        self._deferred: dict[DeferredOperation, deque[Post]] = {
            operation: deque() for operation in DeferredOperation
        }
        self._categories_in_flight = False
        self._categories_listed = False

    @property
    def cache(self) -> CategoryCache:
        return self.client.categories

    @property
    def categories_in_flight(self) -> bool:
        return self._categories_in_flight

    def deferred(self, operation: DeferredOperation) -> list[Post]:
        return list(self._deferred[operation])

    def create_post(self, post: Post) -> None:
        if self._needs_categories(post):
            self._defer(DeferredOperation.CREATE, post)
            return
        self._start_write(post, creating=True)

    def modify_post(self, post: Post) -> None:
        if self._needs_categories(post):
            self._defer(DeferredOperation.MODIFY, post)
            return
        self._start_write(post, creating=False)

    def fetch_post(self, post: Post) -> None:
        # category ids in the reply are resolved through the cache
        if self._needs_categories(post):
            self._defer(DeferredOperation.FETCH, post)
            return
        self.client._fetch_post(post)

    def categories_listed(self) -> None:
        """Replay everything parked while the category list was outstanding."""
        self._categories_in_flight = False
        self._categories_listed = True
        for operation in DeferredOperation:
            queue = self._deferred[operation]
            while queue:
                post = queue.popleft()
                logger.debug(f"Replaying deferred {operation.value} for '{post.title}'")
                if operation is DeferredOperation.CREATE:
                    self.create_post(post)
                elif operation is DeferredOperation.MODIFY:
                    self.modify_post(post)
                else:
                    self.fetch_post(post)

    def categories_failed(self, kind: ErrorKind, message: str) -> None:
        """Fail every parked operation with the listing error."""
        self._categories_in_flight = False
        for queue in self._deferred.values():
            while queue:
                self.client._report(kind, message, queue.popleft())

    def _needs_categories(self, post: Post) -> bool:
        self.cache.load()
        if not self.cache.is_empty() or self._categories_listed:
            return False
        return bool(post.categories)

    def _defer(self, operation: DeferredOperation, post: Post) -> None:
        self._deferred[operation].append(post)
        logger.debug(f"Deferring {operation.value} until the categories are listed")
        if not self._categories_in_flight:
            self._categories_in_flight = True
            self.client._request_categories(state=FlowState.AWAITING_CATEGORIES)

    def _start_write(self, post: Post, *, creating: bool) -> None:
        silent = bool(post.categories)
        publish = not post.private
        operation = Operation.CREATE_POST if creating else Operation.MODIFY_POST

        # the first write keeps the post hidden until its categories are set
        visibility = post.private
        if silent:
            post.private = True
        try:
            self.client._send_post_write(
                post,
                operation,
                self._on_post_written,
                state=FlowState.AWAITING_POST_WRITE,
                assign_categories=silent,
                publish_after_categories=silent and publish,
                creating=creating,
            )
        finally:
            post.private = visibility

    def _on_post_written(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        result = self.client._read_write_reply(entry, payload)

        if entry.state is FlowState.AWAITING_PUBLISH_WRITE:
            self._finish(entry)
            return
        if entry.creating:
            post.post_id = str(result)
        if entry.assign_categories:
            self._assign_categories(entry)
        else:
            self._finish(entry)

    def _assign_categories(self, entry: PendingCall) -> None:
        post: Post = entry.target
        assignment = category_assignment(post.categories, self.cache)
        self.client._issue_call(
            "mt.setPostCategories",
            metaweblog_args(self.client.credentials, post.post_id) + [assignment],
            self._on_categories_assigned,
            "set_post_categories",
            target=post,
            state=FlowState.AWAITING_CATEGORY_ASSIGNMENT,
            publish_after_categories=entry.publish_after_categories,
            creating=entry.creating,
        )

    def _on_categories_assigned(self, entry: PendingCall, payload: Any) -> None:
        require_flag(
            payload, "Could not read the result - is not a boolean value. Category setting failed."
        )
        if not entry.publish_after_categories:
            self._finish(entry)
            return
        self.client._send_post_write(
            entry.target,
            Operation.MODIFY_POST,
            self._on_post_written,
            state=FlowState.AWAITING_PUBLISH_WRITE,
            creating=entry.creating,
        )

    def _finish(self, entry: PendingCall) -> None:
        post: Post = entry.target
        if entry.creating:
            post.status = PostStatus.CREATED
            self.client.listener.created_post(post)
        else:
            post.status = PostStatus.MODIFIED
            self.client.listener.modified_post(post)
