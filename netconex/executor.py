import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Type, TypeVar

import requests

from . import json_codec
from .common.errors import ApiConnectionError, ApiRequestError, RequestFailedError
from .config import RequesterConfig
from .http.client import RequestsHttpClient
from .interfaces import IHttpClient

if TYPE_CHECKING:
    from .methods.delete import Delete
    from .methods.get import Get
    from .methods.post import Post
    from .methods.put import Put

logger = logging.getLogger(__name__)

T = TypeVar("T")

HTTP_OK = 200
JSON_CONTENT_TYPE = "application/json"
VERBS = ("GET", "POST", "PUT", "DELETE")

_shared_pools: Dict[int, ThreadPoolExecutor] = {}
_shared_pool_lock = threading.Lock()


def shared_pool(max_workers: int = 8) -> ThreadPoolExecutor:
    """
    Process-wide worker pool for async sends, created on first use. One pool
    exists per distinct max_workers, so executors configured with different
    sizes do not share a pool.
    """
    with _shared_pool_lock:
        pool = _shared_pools.get(max_workers)
        if pool is None:
            pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"netconex-{max_workers}")
            _shared_pools[max_workers] = pool
        return pool


def _join_lines(text: str) -> str:
    # Line breaks are dropped, not replaced: multi-line JSON comes back on one line.
    return text.replace("\r", "").replace("\n", "")


@dataclass(frozen=True)
class PreparedCall:
    """A fully configured request, ready to hand to an IHttpClient."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Optional[Tuple[float, float]] = None

    def with_json_body(self) -> "PreparedCall":
        headers = dict(self.headers)
        headers["Content-Type"] = JSON_CONTENT_TYPE
        return PreparedCall(self.method, self.url, headers, self.timeout)


class RequestExecutor:
    """
    Owns the base URL, headers and timeout, and performs one request at a time.

    Verb adapters take a snapshot of this configuration when they are built,
    so later set_header()/set_timeout() calls only affect adapters created
    afterwards.
    """

    def __init__(
        self,
        base_url: str,
        timeout_ms: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        http_client: Optional[IHttpClient] = None,
        pool: Optional[Executor] = None,
        max_workers: int = 8,
    ):
        self._base_url = base_url
        self._headers: Dict[str, str] = dict(headers or {})
        self._timeout_ms: Optional[int] = None
        self.set_timeout(timeout_ms)
        self.http_client = http_client or RequestsHttpClient()
        self._pool = pool
        self._max_workers = max_workers

    @classmethod
    def from_config(
        cls,
        config: RequesterConfig,
        http_client: Optional[IHttpClient] = None,
        pool: Optional[Executor] = None,
    ) -> "RequestExecutor":
        return cls(
            config.base_url,
            timeout_ms=config.timeout_ms,
            headers=config.headers,
            http_client=http_client,
            pool=pool,
            max_workers=config.max_workers,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def timeout_ms(self) -> Optional[int]:
        return self._timeout_ms

    def set_header(self, key: str, value: str) -> None:
        self._headers[key] = value

    def set_timeout(self, timeout_ms: Optional[int]) -> None:
        if timeout_ms is not None and timeout_ms < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout_ms}")
        self._timeout_ms = timeout_ms

    def snapshot(self) -> "RequestExecutor":
        """Copy of this executor's configuration sharing its transport and pool."""
        return RequestExecutor(
            self._base_url,
            timeout_ms=self._timeout_ms,
            headers=self._headers,
            http_client=self.http_client,
            pool=self._pool,
            max_workers=self._max_workers,
        )

    def _transport_timeout(self) -> Optional[Tuple[float, float]]:
        if not self._timeout_ms:
            return None
        seconds = self._timeout_ms / 1000.0
        return (seconds, seconds)

    def build_connection(self, path: str, verb: str) -> PreparedCall:
        verb = verb.upper()
        if verb not in VERBS:
            raise ValueError(f"Unsupported HTTP method: {verb}")

        url = self._base_url + path
        try:
            requests.PreparedRequest().prepare_url(url, None)
        except requests.RequestException as exc:
            raise ApiConnectionError(f"Invalid URL for {verb} request: {url!r}", original_exception=exc) from exc

        return PreparedCall(verb, url, dict(self._headers), self._transport_timeout())

    def send_sync(self, path: str, verb: str, body: Any = None) -> str:
        call = self.build_connection(path, verb)
        payload: Optional[bytes] = None
        if body is not None:
            payload = json_codec.serialize(body).encode("utf-8")
            call = call.with_json_body()

        logger.debug("%s %s", call.method, call.url)
        try:
            response = self.http_client.request(
                call.method,
                call.url,
                headers=call.headers,
                data=payload,
                timeout=call.timeout,
            )
        except (requests.RequestException, UnicodeError, ValueError) as exc:
            # http.client raises UnicodeEncodeError for header values outside latin-1.
            logger.warning("%s %s failed: %s", call.method, call.url, exc)
            raise ApiConnectionError(f"Error executing {call.method} request", original_exception=exc) from exc

        with closing(response):
            if response.status_code != HTTP_OK:
                logger.warning("%s %s returned %d", call.method, call.url, response.status_code)
                raise RequestFailedError(call.method, response.status_code)
            return _join_lines(response.content.decode("utf-8", errors="replace"))

    def send_async(self, path: str, verb: str, body: Any = None) -> "Future[str]":
        pool = self._pool or shared_pool(self._max_workers)
        try:
            return pool.submit(self.send_sync, path, verb, body)
        except RuntimeError as exc:
            # Pool already shut down: report it through the future like any other failure.
            future: "Future[str]" = Future()
            future.set_exception(
                ApiRequestError(f"Cannot schedule {verb.upper()} request", original_exception=exc)
            )
            return future

    def deserialize(self, text: str, target_type: Type[T]) -> T:
        return json_codec.deserialize(text, target_type)

    def pretty_print(self, text: str) -> str:
        return json_codec.pretty_print(text)

    def to_field_map(self, obj: Any) -> Dict[str, Any]:
        return json_codec.to_field_map(obj)

    def get(self) -> "Get":
        from .methods.get import Get

        return Get(self)

    def post(self) -> "Post":
        from .methods.post import Post

        return Post(self)

    def put(self) -> "Put":
        from .methods.put import Put

        return Put(self)

    def delete(self) -> "Delete":
        from .methods.delete import Delete

        return Delete(self)

    def close(self) -> None:
        self.http_client.close()

