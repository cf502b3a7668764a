"""Blog adapters: XML-RPC dialects and the GData Atom API."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping
from urllib.parse import urlencode, urlparse

from blogwire.config import Settings, get_settings
from blogwire.core.auth import AuthSession, AuthWaiter
from blogwire.core.category_cache import CacheKey, CategoryCache, CategoryStore
from blogwire.core.normalizer import (
    decode_text,
    require_flag,
    require_id,
    require_list,
    require_map,
)
from blogwire.core.publisher import PublishOrchestrator
from blogwire.core.registry import CallRegistry, FlowState, Handler, PendingCall
from blogwire.dialects import Dialect, get_dialect
from blogwire.dialects.base import Credentials, Operation
from blogwire.dialects.blogger1 import blogger1_args
from blogwire.dialects.gdata import (
    ATOM_HEADERS,
    comment_entry,
    entry_to_comment,
    entry_to_post,
    parse_feed,
    post_entry,
    read_auth_token,
    read_entry_reply,
    read_profile_id,
)
from blogwire.dialects.metaweblog import media_args, metaweblog_args, read_categories, read_media_url
from blogwire.dialects.movabletype import read_post_categories, read_trackback_pings
from blogwire.errors import BlogError, ErrorKind, ParsingError
from blogwire.events import BlogListener
from blogwire.models import (
    BlogInfo,
    Comment,
    CommentStatus,
    Media,
    MediaStatus,
    Post,
    PostStatus,
    UserInfo,
)
from blogwire.transport import HttpTransport, Transport
from blogwire.utils.logging import get_logger

logger = get_logger(__name__)

GDATA_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class BlogClient:
    """Shared plumbing of every adapter.

    Owns the call registry, receives completions from the transport and
    turns them into exactly one listener event per public operation.
    Operations a dialect does not implement report ``NOT_SUPPORTED``.
    """

    interface_name = ""

    def __init__(
        self,
        url: str,
        transport: Transport,
        *,
        listener: BlogListener | None = None,
        username: str = "",
        password: str = "",
        blog_id: str = "",
        settings: Settings | None = None,
        owns_transport: bool = False,
    ):
        self.url = url
        self.username = username
        self.password = password
        self.blog_id = blog_id
        self.settings = settings or get_settings()
        self.listener = listener or BlogListener()
        self.transport = transport
        self._owns_transport = owns_transport
        self._registry = CallRegistry()
        self._closed = False
        transport.bind(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def host(self) -> str:
        return urlparse(self.url).hostname or ""

    @property
    def pending(self) -> int:
        """Number of calls still waiting for a completion."""
        return len(self._registry)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Stop listening to the transport and forget every pending call."""
        if self._closed:
            return
        self._closed = True
        self.transport.bind(None)
        self._registry.clear()

    async def aclose(self) -> None:
        """Let an owned transport finish its requests, then close."""
        if self._owns_transport and isinstance(self.transport, HttpTransport):
            await self.transport.aclose()
        self.close()

    # Public operations every adapter answers, if only with NOT_SUPPORTED

    def fetch_user_info(self) -> None:
        self._not_supported("fetch_user_info")

    def fetch_profile_id(self) -> None:
        self._not_supported("fetch_profile_id")

    def list_blogs(self) -> None:
        self._not_supported("list_blogs")

    def list_categories(self) -> None:
        self._not_supported("list_categories")

    def create_media(self, media: Media) -> None:
        if media is None:
            self._reject("Media is a null pointer.")
            return
        self._not_supported("create_media", media)

    def list_trackback_pings(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        self._not_supported("list_trackback_pings", post)

    def list_comments(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        self._not_supported("list_comments", post)

    def list_all_comments(self) -> None:
        self._not_supported("list_all_comments")

    def create_comment(self, post: Post, comment: Comment) -> None:
        if post is None or comment is None:
            self._reject("Post or comment is a null pointer.")
            return
        self._not_supported("create_comment", comment, post)

    def remove_comment(self, post: Post, comment: Comment) -> None:
        if post is None or comment is None:
            self._reject("Post or comment is a null pointer.")
            return
        self._not_supported("remove_comment", comment, post)

    # Transport listener

    def on_success(self, token: int, payload: Any) -> None:
        entry = self._take(token)
        if entry is None:
            return
        logger.debug(f"Completed {entry.operation} #{token}")
        try:
            entry.handler(entry, payload)
        except BlogError as exc:
            self._fail(entry, exc.kind, exc.message)

    def on_failure(self, token: int, code: int, message: str) -> None:
        entry = self._take(token)
        if entry is None:
            return
        self._fail(entry, ErrorKind.TRANSPORT, f"{message} (code {code})")

    def _take(self, token: int) -> PendingCall | None:
        if self._closed:
            logger.debug(f"Ignoring completion #{token} after close")
            return None
        entry = self._registry.resolve(token)
        if entry is None:
            self._report(ErrorKind.OTHER, f"No pending call for token {token}.")
        return entry

    # Issuing calls

    def _register(
        self, handler: Handler, operation: str, target: Any = None, **aux: Any
    ) -> PendingCall:
        entry = self._registry.register(handler, operation, target, **aux)
        logger.debug(f"Issuing {operation} #{entry.token}")
        return entry

    def _issue_call(
        self,
        method: str,
        args: list[Any],
        handler: Handler,
        operation: str,
        target: Any = None,
        **aux: Any,
    ) -> PendingCall:
        entry = self._register(handler, operation, target, **aux)
        self.transport.call(method, args, entry.token)
        return entry

    def _issue_post(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
        handler: Handler,
        operation: str,
        target: Any = None,
        **aux: Any,
    ) -> PendingCall:
        entry = self._register(handler, operation, target, **aux)
        self.transport.post(url, body, headers, entry.token)
        return entry

    def _issue_get(
        self, url: str, handler: Handler, operation: str, target: Any = None, **aux: Any
    ) -> PendingCall:
        entry = self._register(handler, operation, target, **aux)
        self.transport.get(url, entry.token)
        return entry

    # Error events

    def _fail(self, entry: PendingCall, kind: ErrorKind, message: str) -> None:
        if entry.error_handler is not None:
            entry.error_handler(entry, kind, message)
            return
        self._report(kind, message, entry.target, entry.post)

    def _report(
        self,
        kind: ErrorKind,
        message: str,
        target: Post | Media | Comment | None = None,
        post: Post | None = None,
    ) -> None:
        """Emit the error event matching the kind of object involved."""
        logger.error(f"{kind.value}: {message}")
        if isinstance(target, Post):
            target.mark_error(message)
            self.listener.error_post(kind, message, target)
        elif isinstance(target, Media):
            target.mark_error(message)
            self.listener.error_media(kind, message, target)
        elif isinstance(target, Comment):
            target.mark_error(message)
            self.listener.error_comment(kind, message, post, target)
        else:
            self.listener.error(kind, message)

    def _reject(self, message: str) -> None:
        self._report(ErrorKind.OTHER, message)

    def _not_supported(
        self,
        operation: str,
        target: Post | Media | Comment | None = None,
        post: Post | None = None,
    ) -> None:
        name = self.interface_name or type(self).__name__
        self._report(ErrorKind.NOT_SUPPORTED, f"{name} does not support {operation}.", target, post)


class XmlRpcBlog(BlogClient):
    """Blogger 1.0, MetaWeblog, Movable Type and WordPress over XML-RPC.

    The wire format comes from the ``dialect``. Category-aware dialects route
    create, modify and fetch through a :class:`PublishOrchestrator`.
    """

    def __init__(
        self,
        url: str,
        dialect: Dialect | str,
        transport: Transport | None = None,
        *,
        listener: BlogListener | None = None,
        username: str = "",
        password: str = "",
        blog_id: str = "",
        store: CategoryStore | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        owns_transport = transport is None
        if transport is None:
            transport = HttpTransport(url, settings=settings)
        super().__init__(
            url,
            transport,
            listener=listener,
            username=username,
            password=password,
            blog_id=blog_id,
            settings=settings,
            owns_transport=owns_transport,
        )
        self.dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect
        self.categories = CategoryCache(
            store if store is not None else CategoryStore(settings.categories_dir),
            CacheKey(self.host, blog_id, username),
        )
        self.publisher = PublishOrchestrator(self) if self.dialect.category_aware else None

    @property
    def interface_name(self) -> str:
        return self.dialect.interface_name

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            blog_id=self.blog_id,
            username=self.username,
            password=self.password,
            app_key=self.settings.blogger_app_key,
        )

    # Account

    def fetch_user_info(self) -> None:
        self._issue_call(
            "blogger.getUserInfo",
            blogger1_args(self.credentials),
            self._on_user_info,
            "fetch_user_info",
        )

    def list_blogs(self) -> None:
        self._issue_call(
            "blogger.getUsersBlogs",
            blogger1_args(self.credentials),
            self._on_blogs,
            "list_blogs",
        )

    def _on_user_info(self, entry: PendingCall, payload: Any) -> None:
        info = require_map(payload, "Could not fetch user's info out of the result from the server.")
        self.listener.fetched_user_info(
            UserInfo(
                userid=decode_text(info.get("userid")),
                nickname=decode_text(info.get("nickname")),
                firstname=decode_text(info.get("firstname")),
                lastname=decode_text(info.get("lastname")),
                email=decode_text(info.get("email")),
                url=decode_text(info.get("url")),
            )
        )

    def _on_blogs(self, entry: PendingCall, payload: Any) -> None:
        items = require_list(payload, "Could not fetch list of blogs out of the result from the server.")
        blogs = []
        for item in items:
            if not isinstance(item, Mapping):
                logger.warning("Skipping a blog entry that is not a map")
                continue
            blogs.append(
                BlogInfo(
                    id=decode_text(item.get("blogid")),
                    title=decode_text(item.get("blogName")),
                    url=decode_text(item.get("url")),
                    api_url=decode_text(item.get("xmlrpc")),
                )
            )
        self.listener.listed_blogs(blogs)

    # Posts

    def list_recent_posts(self, number: int = 10) -> None:
        creds = self.credentials
        self._issue_call(
            self.dialect.method(Operation.RECENT_POSTS),
            self.dialect.builder.default_args(creds, creds.blog_id) + [number],
            self._on_recent_posts,
            "list_recent_posts",
            context={"number": number},
        )

    def _on_recent_posts(self, entry: PendingCall, payload: Any) -> None:
        items = require_list(payload, "Could not fetch list of posts out of the result from the server.")
        self.categories.load()
        number = entry.context["number"]
        posts = []
        for item in items:
            if number > 0 and len(posts) >= number:
                break
            if not isinstance(item, Mapping):
                logger.warning("Skipping a post that is not a map")
                continue
            post = Post()
            self.dialect.reader.read_post(post, item, self.categories)
            post.status = PostStatus.FETCHED
            posts.append(post)
        logger.debug(f"Read {len(posts)} recent posts")
        self.listener.listed_recent_posts(posts)

    def fetch_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        if self.publisher is not None:
            self.publisher.fetch_post(post)
        else:
            self._fetch_post(post)

    def create_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        if self.publisher is not None:
            self.publisher.create_post(post)
        else:
            self._send_post_write(
                post, Operation.CREATE_POST, self._on_post_written, creating=True
            )

    def modify_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        if self.publisher is not None:
            self.publisher.modify_post(post)
        else:
            self._send_post_write(post, Operation.MODIFY_POST, self._on_post_written)

    def remove_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        self._issue_call(
            "blogger.deletePost",
            blogger1_args(self.credentials, post.post_id) + [True],
            self._on_post_removed,
            "remove_post",
            target=post,
        )

    def _fetch_post(self, post: Post) -> None:
        self._issue_call(
            self.dialect.method(Operation.FETCH_POST),
            self.dialect.builder.default_args(self.credentials, post.post_id),
            self._on_post_fetched,
            "fetch_post",
            target=post,
        )

    def _send_post_write(
        self, post: Post, operation: Operation, handler: Handler, **aux: Any
    ) -> PendingCall:
        """Build and issue a create or modify of ``post`` as it is right now."""
        creds = self.credentials
        name = operation.value
        context = {"write": operation}
        writer = self.dialect.raw_writer
        if writer is not None:
            request = writer.build(creds, post, operation)
            return self._issue_post(
                self.url, request.body, request.headers, handler, name,
                target=post, context=context, **aux,
            )

        object_id = creds.blog_id if operation is Operation.CREATE_POST else post.post_id
        args = self.dialect.builder.default_args(creds, object_id)
        args += self.dialect.builder.post_args(post)
        return self._issue_call(
            self.dialect.method(operation), args, handler, name,
            target=post, context=context, **aux,
        )

    def _read_write_reply(self, entry: PendingCall, payload: Any) -> str | bool:
        """Server id for a create, the success flag for a modify."""
        operation: Operation = entry.context["write"]
        writer = self.dialect.raw_writer
        if writer is not None:
            return writer.read_reply(decode_text(payload), operation)
        if operation is Operation.CREATE_POST:
            return require_id(payload, "Could not read the postId, not a string.")
        return require_flag(payload, "Could not read the result, not a boolean.")

    def _on_post_written(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        result = self._read_write_reply(entry, payload)
        if entry.creating:
            post.post_id = str(result)
            post.status = PostStatus.CREATED
            self.listener.created_post(post)
        else:
            post.status = PostStatus.MODIFIED
            self.listener.modified_post(post)

    def _on_post_fetched(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        info = require_map(payload, "Could not fetch post out of the result from the server.")
        categories = self.dialect.reader.read_post(post, info, self.categories)
        if self.dialect.category_aware and not categories:
            self._issue_call(
                "mt.getPostCategories",
                metaweblog_args(self.credentials, post.post_id),
                self._on_post_categories,
                "fetch_post_categories",
                target=post,
            )
            return
        post.status = PostStatus.FETCHED
        self.listener.fetched_post(post)

    def _on_post_categories(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        try:
            post.categories = read_post_categories(payload)
        except ParsingError as exc:
            # the post itself was read; report it without categories
            logger.warning(f"Could not read categories of post {post.post_id}: {exc.message}")
        post.status = PostStatus.FETCHED
        self.listener.fetched_post(post)

    def _on_post_removed(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        require_flag(payload, "Could not read the result, not a boolean.")
        post.status = PostStatus.REMOVED
        self.listener.removed_post(post)

    # Categories

    def list_categories(self) -> None:
        if not self.dialect.supports_categories:
            self._not_supported("list_categories")
            return
        self._request_categories()

    def _request_categories(self, state: FlowState | None = None) -> PendingCall:
        return self._issue_call(
            "metaWeblog.getCategories",
            metaweblog_args(self.credentials, self.blog_id),
            self._on_categories,
            "list_categories",
            state=state,
            error_handler=self._on_categories_failed,
        )

    def _on_categories(self, entry: PendingCall, payload: Any) -> None:
        categories = read_categories(payload)
        self.categories.replace(categories)
        self.categories.save()
        logger.debug(f"Listed {len(categories)} categories")
        self.listener.listed_categories(categories)
        if self._orchestrated(entry):
            self.publisher.categories_listed()

    def _on_categories_failed(self, entry: PendingCall, kind: ErrorKind, message: str) -> None:
        self._report(kind, message)
        if self._orchestrated(entry):
            self.publisher.categories_failed(kind, message)

    def _orchestrated(self, entry: PendingCall) -> bool:
        # a caller-issued listing never drives the deferred queues
        return self.publisher is not None and entry.state is FlowState.AWAITING_CATEGORIES

    # Media

    def create_media(self, media: Media) -> None:
        if media is None:
            self._reject("Media is a null pointer.")
            return
        if not self.dialect.supports_media:
            self._not_supported("create_media", media)
            return
        self._issue_call(
            "metaWeblog.newMediaObject",
            media_args(self.credentials, media),
            self._on_media_created,
            "create_media",
            target=media,
        )

    def _on_media_created(self, entry: PendingCall, payload: Any) -> None:
        media: Media = entry.target
        media.url = read_media_url(payload)
        media.status = MediaStatus.CREATED
        self.listener.created_media(media)

    # Trackbacks

    def list_trackback_pings(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        if not self.dialect.supports_trackbacks:
            self._not_supported("list_trackback_pings", post)
            return
        self._issue_call(
            "mt.getTrackbackPings",
            [post.post_id],
            self._on_trackback_pings,
            "list_trackback_pings",
            target=post,
        )

    def _on_trackback_pings(self, entry: PendingCall, payload: Any) -> None:
        self.listener.listed_trackback_pings(entry.target, read_trackback_pings(payload))


class GDataBlog(BlogClient):
    """Blogger's GData API: Atom feeds for reads, Atom entries for writes.

    Writes need a ClientLogin token, which is renewed transparently once it
    is older than ``settings.auth_ttl_seconds``.
    """

    interface_name = "GData"

    def __init__(
        self,
        url: str,
        transport: Transport | None = None,
        *,
        listener: BlogListener | None = None,
        username: str = "",
        password: str = "",
        blog_id: str = "",
        profile_id: str = "",
        full_name: str = "",
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        settings = settings or get_settings()
        owns_transport = transport is None
        if transport is None:
            transport = HttpTransport(url, settings=settings)
        super().__init__(
            url,
            transport,
            listener=listener,
            username=username,
            password=password,
            blog_id=blog_id,
            settings=settings,
            owns_transport=owns_transport,
        )
        self.profile_id = profile_id
        self.full_name = full_name
        self.auth = AuthSession(ttl=settings.auth_ttl_seconds, clock=clock)

    def _feed_url(self, *parts: str) -> str:
        return "/".join([self.settings.gdata_feed_base.rstrip("/"), *parts])

    def _posts_url(self, post_id: str = "") -> str:
        url = self._feed_url(self.blog_id, "posts", "default")
        return f"{url}/{post_id}" if post_id else url

    def _comments_url(self, post_id: str, comment_id: str = "") -> str:
        url = self._feed_url(self.blog_id, post_id, "comments", "default")
        return f"{url}/{comment_id}" if comment_id else url

    # Authentication

    def _authenticated(
        self,
        continuation: Callable[[str], None],
        target: Post | Comment | None = None,
        post: Post | None = None,
    ) -> None:
        """Run ``continuation`` with a valid token, logging in first if needed."""
        if not self.auth.needs_renewal():
            continuation(self.auth.token)
            return
        waiter = AuthWaiter(
            on_ready=continuation,
            on_error=lambda kind, message: self._report(kind, message, target, post),
        )
        if self.auth.wait(waiter):
            self._request_token()

    def _request_token(self) -> None:
        self.auth.invalidate()
        body = urlencode(
            {
                "Email": self.username,
                "Passwd": self.password,
                "source": self.settings.user_agent,
                "service": "blogger",
            }
        )
        self._issue_post(
            self.settings.gdata_auth_url,
            body.encode("utf-8"),
            {"Content-Type": "application/x-www-form-urlencoded"},
            self._on_token,
            "authenticate",
            error_handler=self._on_token_failed,
        )

    def _on_token(self, entry: PendingCall, payload: Any) -> None:
        self.auth.renew(read_auth_token(payload))
        logger.debug("Authenticated")

    def _on_token_failed(self, entry: PendingCall, kind: ErrorKind, message: str) -> None:
        logger.error(f"Authentication failed: {message}")
        self.auth.fail(message)

    def _auth_headers(self, token: str, method_override: str = "") -> dict[str, str]:
        headers = dict(ATOM_HEADERS)
        headers["Authorization"] = f"GoogleLogin auth={token}"
        if method_override:
            headers["X-HTTP-Method-Override"] = method_override
        return headers

    # Account

    def fetch_profile_id(self) -> None:
        self._issue_get(self.url, self._on_profile_id, "fetch_profile_id")

    def _on_profile_id(self, entry: PendingCall, payload: Any) -> None:
        self.profile_id = read_profile_id(payload)
        self.listener.fetched_profile_id(self.profile_id)

    def list_blogs(self) -> None:
        self._issue_get(self._feed_url(self.profile_id, "blogs"), self._on_blogs, "list_blogs")

    def _on_blogs(self, entry: PendingCall, payload: Any) -> None:
        blogs = []
        for item in parse_feed(payload):
            if item.blog_id is None:
                logger.warning(f"Could not regexp the blog id out of {item.id}")
                continue
            blogs.append(
                BlogInfo(id=item.blog_id, title=item.title, url=item.link, summary=item.summary)
            )
        self.listener.listed_blogs(blogs)

    # Posts

    def list_recent_posts(
        self,
        number: int = 10,
        labels: list[str] | None = None,
        updated_min: datetime | None = None,
        updated_max: datetime | None = None,
        published_min: datetime | None = None,
        published_max: datetime | None = None,
    ) -> None:
        url = self._posts_url()
        if labels:
            url += "/-/" + "/".join(labels)
        query = {
            name: _format_query_time(value)
            for name, value in (
                ("updated-min", updated_min),
                ("updated-max", updated_max),
                ("published-min", published_min),
                ("published-max", published_max),
            )
            if value is not None
        }
        if query:
            url += "?" + urlencode(query)
        self._issue_get(url, self._on_recent_posts, "list_recent_posts", context={"number": number})

    def _on_recent_posts(self, entry: PendingCall, payload: Any) -> None:
        number = entry.context["number"]
        posts = []
        for item in parse_feed(payload):
            if number > 0 and len(posts) >= number:
                break
            post = Post()
            entry_to_post(item, post)
            post.status = PostStatus.FETCHED
            posts.append(post)
        self.listener.listed_recent_posts(posts)

    def fetch_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        self._issue_get(self._posts_url(), self._on_post_fetched, "fetch_post", target=post)

    def _on_post_fetched(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        for item in parse_feed(payload):
            if item.post_id == post.post_id:
                entry_to_post(item, post)
                post.status = PostStatus.FETCHED
                self.listener.fetched_post(post)
                return
        raise BlogError("Could not find the post in the feed.", operation=entry.operation)

    def create_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return

        def send(token: str) -> None:
            body = post_entry(post, username=self.username, full_name=self.full_name)
            self._issue_post(
                self._posts_url(),
                body.encode("utf-8"),
                self._auth_headers(token),
                self._on_post_written,
                "create_post",
                target=post,
                creating=True,
            )

        self._authenticated(send, post)

    def modify_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return

        def send(token: str) -> None:
            body = post_entry(
                post,
                username=self.username,
                full_name=self.full_name,
                blog_id=self.blog_id,
                include_identity=True,
            )
            self._issue_post(
                self._posts_url(post.post_id),
                body.encode("utf-8"),
                self._auth_headers(token, "PUT"),
                self._on_post_written,
                "modify_post",
                target=post,
            )

        self._authenticated(send, post)

    def remove_post(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return

        def send(token: str) -> None:
            self._issue_post(
                self._posts_url(post.post_id),
                b"",
                self._auth_headers(token, "DELETE"),
                self._on_post_removed,
                "remove_post",
                target=post,
            )

        self._authenticated(send, post)

    def _on_post_written(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        reply = read_entry_reply(payload)
        post.post_id = reply.id
        if reply.published is not None:
            post.creation_datetime = reply.published
        if reply.updated is not None:
            post.modification_datetime = reply.updated
        if entry.creating:
            post.status = PostStatus.CREATED
            self.listener.created_post(post)
        else:
            post.status = PostStatus.MODIFIED
            self.listener.modified_post(post)

    def _on_post_removed(self, entry: PendingCall, payload: Any) -> None:
        post: Post = entry.target
        post.status = PostStatus.REMOVED
        self.listener.removed_post(post)

    # Comments

    def list_comments(self, post: Post) -> None:
        if post is None:
            self._reject("Post is a null pointer.")
            return
        self._issue_get(
            self._comments_url(post.post_id), self._on_comments, "list_comments", target=post
        )

    def _on_comments(self, entry: PendingCall, payload: Any) -> None:
        comments = _read_comments(payload)
        self.listener.listed_comments(entry.target, comments)

    def list_all_comments(self) -> None:
        self._issue_get(
            self._feed_url(self.blog_id, "comments", "default"),
            self._on_all_comments,
            "list_all_comments",
        )

    def _on_all_comments(self, entry: PendingCall, payload: Any) -> None:
        self.listener.listed_all_comments(_read_comments(payload))

    def create_comment(self, post: Post, comment: Comment) -> None:
        if post is None or comment is None:
            self._reject("Post or comment is a null pointer.")
            return

        def send(token: str) -> None:
            self._issue_post(
                self._comments_url(post.post_id),
                comment_entry(comment).encode("utf-8"),
                self._auth_headers(token),
                self._on_comment_created,
                "create_comment",
                target=comment,
                post=post,
            )

        self._authenticated(send, comment, post)

    def _on_comment_created(self, entry: PendingCall, payload: Any) -> None:
        comment: Comment = entry.target
        reply = read_entry_reply(payload)
        comment.comment_id = reply.id
        if reply.published is not None:
            comment.creation_datetime = reply.published
        if reply.updated is not None:
            comment.modification_datetime = reply.updated
        comment.status = CommentStatus.CREATED
        self.listener.created_comment(entry.post, comment)

    def remove_comment(self, post: Post, comment: Comment) -> None:
        if post is None or comment is None:
            self._reject("Post or comment is a null pointer.")
            return

        def send(token: str) -> None:
            self._issue_post(
                self._comments_url(post.post_id, comment.comment_id),
                b"",
                self._auth_headers(token, "DELETE"),
                self._on_comment_removed,
                "remove_comment",
                target=comment,
                post=post,
            )

        self._authenticated(send, comment, post)

    def _on_comment_removed(self, entry: PendingCall, payload: Any) -> None:
        comment: Comment = entry.target
        comment.status = CommentStatus.REMOVED
        self.listener.removed_comment(entry.post, comment)


def _read_comments(payload: Any) -> list[Comment]:
    comments = []
    for item in parse_feed(payload):
        comment = entry_to_comment(item)
        comment.status = CommentStatus.FETCHED
        comments.append(comment)
    return comments


def _format_query_time(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(GDATA_TIME_FORMAT)
