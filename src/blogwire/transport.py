"""Fire-and-forget transports that report completions through callbacks."""

from __future__ import annotations

import asyncio
import xmlrpc.client
from typing import Any, Coroutine, Mapping, Protocol
from xml.parsers.expat import ExpatError

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from blogwire.config import Settings, get_settings
from blogwire.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

# failure codes for errors that never reached the server's protocol layer
NETWORK_ERROR = -1
MALFORMED_RESPONSE = -2


class TransportListener(Protocol):
    def on_success(self, token: int, payload: Any) -> None:
        ...

    def on_failure(self, token: int, code: int, message: str) -> None:
        ...


class Transport(Protocol):
    """Issues requests and later calls back the bound listener with the same token."""

    def bind(self, listener: TransportListener | None) -> None:
        ...

    def call(self, method: str, args: list[Any], token: int) -> int:
        ...

    def post(self, url: str, body: bytes, headers: Mapping[str, str], token: int) -> int:
        ...

    def get(self, url: str, token: int) -> int:
        ...


class HttpTransport:
    """httpx-based transport for XML-RPC and plain HTTP calls.

    Each request runs as a task on the running event loop; XML-RPC replies
    are decoded with ``xmlrpc.client`` and the first parameter is delivered.
    Raw ``post``/``get`` deliver the response text.
    """

    def __init__(
        self,
        endpoint: str = "",
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.endpoint = endpoint
        self._client = client
        self._listener: TransportListener | None = None
        self._tasks: set[asyncio.Task] = set()

    async def __aenter__(self) -> "HttpTransport":
        """Enter async context."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client instance, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.request_timeout),
                headers={"User-Agent": self.settings.user_agent},
            )
        return self._client

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def bind(self, listener: TransportListener | None) -> None:
        self._listener = listener

    def call(self, method: str, args: list[Any], token: int) -> int:
        body = xmlrpc.client.dumps(tuple(args), methodname=method, encoding="utf-8")
        self._spawn(self._run_call(method, body.encode("utf-8"), token))
        return token

    def post(self, url: str, body: bytes, headers: Mapping[str, str], token: int) -> int:
        self._spawn(self._run_raw("POST", url, token, content=body, headers=dict(headers)))
        return token

    def get(self, url: str, token: int) -> int:
        self._spawn(self._run_raw("GET", url, token))
        return token

    async def drain(self) -> None:
        """Wait until every request issued so far has delivered its completion.

        Requests issued by completion callbacks are waited for too. An exception
        raised by the listener is re-raised here.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        try:
            await self.drain()
        finally:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request with retry logic."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True,
        ):
            with attempt:
                response = await self.client.request(method, url, **kwargs)
                response.raise_for_status()
        return response

    async def _run_call(self, method: str, body: bytes, token: int) -> None:
        try:
            with LogContext(logger, method, token):
                response = await self._request(
                    "POST",
                    self.endpoint,
                    content=body,
                    headers={"Content-Type": "text/xml; charset=utf-8"},
                )
                params, _ = xmlrpc.client.loads(response.content, use_builtin_types=True)
        except xmlrpc.client.Fault as exc:
            self._fail(token, exc.faultCode, exc.faultString)
        except httpx.HTTPStatusError as exc:
            self._fail(token, exc.response.status_code, _describe_status(exc.response))
        except httpx.HTTPError as exc:
            self._fail(token, NETWORK_ERROR, str(exc) or type(exc).__name__)
        except (ExpatError, xmlrpc.client.ResponseError, ValueError) as exc:
            self._fail(token, MALFORMED_RESPONSE, f"Malformed XML-RPC response: {exc}")
        else:
            self._deliver(token, params[0] if params else None)

    async def _run_raw(self, method: str, url: str, token: int, **kwargs: Any) -> None:
        try:
            with LogContext(logger, f"{method} {url}", token):
                response = await self._request(method, url, **kwargs)
        except httpx.HTTPStatusError as exc:
            self._fail(token, exc.response.status_code, _describe_status(exc.response))
        except httpx.HTTPError as exc:
            self._fail(token, NETWORK_ERROR, str(exc) or type(exc).__name__)
        else:
            self._deliver(token, response.text)

    def _deliver(self, token: int, payload: Any) -> None:
        if self._listener is None:
            logger.debug(f"Dropping reply #{token}: no listener bound")
            return
        self._listener.on_success(token, payload)

    def _fail(self, token: int, code: int, message: str) -> None:
        if self._listener is None:
            logger.debug(f"Dropping failure #{token}: no listener bound")
            return
        self._listener.on_failure(token, code, message)


def _describe_status(response: httpx.Response) -> str:
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()
