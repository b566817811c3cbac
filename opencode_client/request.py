"""
Request execution with retries.

:class:`RequestExecutor` is the single path every endpoint goes through:

1. resolve per-call :class:`RequestOptions` over the client's
   :class:`~opencode_client.config.ClientConfig`;
2. build the URL (base URL query merged with call query) and JSON body;
3. send through ``requests`` inside a per-call ``tenacity.Retrying`` loop
   (429 / 5xx / connection failures are retried with backoff, everything
   else is raised at once);
4. decode the 2xx body into the requested type with pydantic, or raise the
   structured :class:`~opencode_client.errors.APIError`.
"""

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from functools import lru_cache, partial
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, TypeVar

import requests
from pydantic import TypeAdapter, ValidationError
from requests.structures import CaseInsensitiveDict
from tenacity import Retrying, before_sleep_log, retry_if_exception, stop_after_attempt

from opencode_client.config import (
    VERSION,
    ClientConfig,
    validate_base_url,
    validate_http_client,
    validate_max_retries,
    validate_timeout,
)
from opencode_client.errors import (
    APIConnectionError,
    APIError,
    DeadlineExceededError,
    OpencodeError,
    RequestCancelledError,
    ResponseDecodeError,
    api_error_from_response,
)
from opencode_client.params import to_jsonable
from opencode_client.query import build_url
from opencode_client.retry import RetryPolicy, check_cancelled, interruptible_sleep, should_retry
from opencode_client.streaming import Stream
from opencode_client.unions import RawJSONUnion

logger = logging.getLogger(__name__)

T = TypeVar("T")

USER_AGENT = f"Opencode/Python {VERSION}"

_BODYLESS_METHODS = frozenset({"GET", "DELETE"})


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides.  Unset (``None``) fields keep the client default.

    Several options may be passed to one call; later ones win, and their
    ``headers`` are merged (a later value replaces an earlier one with the
    same name, case-insensitively).

    Attributes
    ----------
    base_url : str, optional
        Server root for this call.
    http_client : requests.Session, optional
        Transport for this call.
    headers : mapping
        Extra request headers.  Setting ``User-Agent`` replaces the default.
    timeout : float, optional
        Overall deadline in seconds, retries included.
    max_retries : int, optional
        Retry budget, 0 to 10.
    cancel_event : threading.Event, optional
        Setting the event aborts the call before its next attempt or
        during a backoff sleep.
    """

    base_url: Optional[str] = None
    http_client: Optional[requests.Session] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    max_retries: Optional[int] = None
    cancel_event: Optional[threading.Event] = None


@dataclass
class _ResolvedOptions:
    base_url: str
    http_client: requests.Session
    headers: CaseInsensitiveDict
    timeout: float
    max_retries: int
    cancel_event: Optional[threading.Event]
    retry_policy: RetryPolicy


@lru_cache(maxsize=256)
def _adapter(cast_to: Any) -> TypeAdapter:
    return TypeAdapter(cast_to)


def _query_values(query: Any) -> Optional[Mapping[str, Any]]:
    if query is None:
        return None
    if hasattr(query, "url_query"):
        return query.url_query()
    if isinstance(query, Mapping):
        return query
    raise TypeError(f"cannot encode {type(query).__name__} as query parameters")


def _body_values(body: Any) -> Any:
    if body is None:
        return None
    if hasattr(body, "json_body"):
        return body.json_body()
    return to_jsonable(body)


class RequestExecutor:
    """Stateless request runner shared by every resource of one client.

    Parameters
    ----------
    config : ClientConfig
        Client-wide defaults.
    session : requests.Session
        Default transport (``config.http_client`` or a client-owned session).
    """

    def __init__(self, config: ClientConfig, session: requests.Session):
        self._config = config
        self._session = session

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def resolve_options(self, options: Sequence[RequestOptions]) -> _ResolvedOptions:
        """Fold *options* over the client defaults, validating overrides."""
        resolved = _ResolvedOptions(
            base_url=self._config.base_url,
            http_client=self._session,
            headers=CaseInsensitiveDict(self._config.headers),
            timeout=self._config.timeout,
            max_retries=self._config.max_retries,
            cancel_event=None,
            retry_policy=self._config.retry_policy,
        )
        for option in options:
            if option is None:
                continue
            if option.base_url is not None:
                resolved.base_url = validate_base_url(option.base_url)
            if option.http_client is not None:
                validate_http_client(option.http_client)
                resolved.http_client = option.http_client
            if option.timeout is not None:
                validate_timeout(option.timeout)
                resolved.timeout = option.timeout
            if option.max_retries is not None:
                validate_max_retries(option.max_retries)
                resolved.max_retries = option.max_retries
            if option.cancel_event is not None:
                resolved.cancel_event = option.cancel_event
            resolved.headers.update(option.headers)
        return resolved

    def _headers(self, opts: _ResolvedOptions, accept: str, has_body: bool) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict({"Accept": accept, "User-Agent": USER_AGENT})
        if has_body:
            headers["Content-Type"] = "application/json"
        headers.update(opts.headers)
        return headers

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(
        self,
        method: str,
        path: str,
        query: Any = None,
        body: Any = None,
        cast_to: Any = None,
        *options: RequestOptions,
    ) -> Any:
        """Send one request (with retries) and decode its response.

        Parameters
        ----------
        method : str
            HTTP verb.
        path : str
            Path relative to the base URL (e.g. ``session/abc``).
        query : object, optional
            Mapping or object with ``url_query()``.
        body : object, optional
            Object with ``json_body()``, pydantic model, or mapping.  Ignored
            for GET and DELETE.
        cast_to : type, optional
            Result type understood by ``pydantic.TypeAdapter``; ``None``
            discards the body.
        *options : RequestOptions
            Per-call overrides, applied in order.

        Returns
        -------
        object
            The decoded body, or None.

        Raises
        ------
        APIError
            On a non-2xx response (after retries, where applicable).
        APIConnectionError
            When no response was received; :class:`RequestCancelledError` and
            :class:`DeadlineExceededError` for cancellation and timeouts.
        ResponseDecodeError
            When a 2xx body does not match *cast_to*.
        """
        method = method.upper()
        opts = self.resolve_options(options)
        url = build_url(opts.base_url, path, _query_values(query))
        data = None
        if method not in _BODYLESS_METHODS and body is not None:
            data = json.dumps(_body_values(body)).encode("utf-8")
        headers = self._headers(opts, "application/json", data is not None)

        deadline = time.monotonic() + opts.timeout
        resp = self._send_with_retries(method, url, headers, data, opts, deadline)
        try:
            return self._decode(resp, method, path, cast_to)
        finally:
            resp.close()

    def stream(
        self,
        method: str,
        path: str,
        query: Any = None,
        decode: Optional[Callable[[str], T]] = None,
        *options: RequestOptions,
    ) -> Stream[T]:
        """Open a server-sent event stream.

        Never raises for request failures: a failed connection or a non-2xx
        status is stored as the stream's error (see :meth:`Stream.err`).
        Streams are opened with a single attempt.
        """
        method = method.upper()
        try:
            opts = self.resolve_options(options)
            opts.max_retries = 0
            url = build_url(opts.base_url, path, _query_values(query))
            headers = self._headers(opts, "text/event-stream", False)
            deadline = time.monotonic() + opts.timeout
            resp = self._send_with_retries(method, url, headers, None, opts, deadline, streaming=True)
        except OpencodeError as exc:
            return Stream(error=exc)
        logger.debug("OpenCode event stream opened: %s %s", method, path)
        return Stream(resp, decode, cancel_event=opts.cancel_event)

    def _send_with_retries(
        self,
        method: str,
        url: str,
        headers: CaseInsensitiveDict,
        data: Optional[bytes],
        opts: _ResolvedOptions,
        deadline: float,
        streaming: bool = False,
    ) -> requests.Response:
        retrying = Retrying(
            stop=stop_after_attempt(opts.max_retries + 1),
            wait=opts.retry_policy,
            retry=retry_if_exception(should_retry),
            sleep=partial(interruptible_sleep, opts.cancel_event, deadline),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            return retrying(
                self._attempt, method, url, headers, data, opts, deadline, streaming
            )
        except APIError as exc:
            logger.error(
                "OpenCode API error: %s %s -> %s %s",
                method,
                url,
                exc.status_code,
                exc.message[:500],
            )
            raise
        except APIConnectionError as exc:
            logger.error("OpenCode request failed: %s %s -> %s", method, url, exc)
            raise

    def _attempt(
        self,
        method: str,
        url: str,
        headers: CaseInsensitiveDict,
        data: Optional[bytes],
        opts: _ResolvedOptions,
        deadline: float,
        streaming: bool,
    ) -> requests.Response:
        check_cancelled(opts.cancel_event, deadline)
        remaining = deadline - time.monotonic()
        if streaming:
            # Connect within the deadline, then read for as long as events arrive.
            timeout: Tuple[float, Optional[float]] = (
                min(remaining, self._config.sse_connect_timeout),
                None,
            )
        else:
            timeout = (remaining, remaining)
        logger.debug("OpenCode request: %s %s", method, url)
        try:
            resp = opts.http_client.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=timeout,
                stream=True,
            )
        except requests.Timeout as exc:
            if time.monotonic() >= deadline:
                raise DeadlineExceededError(f"{method} {url}: {exc}") from exc
            raise APIConnectionError(f"{method} {url}: {exc}") from exc
        except requests.ConnectionError as exc:
            check_cancelled(opts.cancel_event, deadline)
            raise APIConnectionError(f"{method} {url}: {exc}", retryable=True) from exc
        except requests.RequestException as exc:
            raise APIConnectionError(f"{method} {url}: {exc}") from exc

        if opts.cancel_event is not None and opts.cancel_event.is_set():
            resp.close()
            raise RequestCancelledError()
        if resp.status_code >= 400:
            raise api_error_from_response(resp)
        return resp

    def _decode(self, resp: requests.Response, method: str, path: str, cast_to: Any) -> Any:
        if cast_to is None:
            for _ in resp.iter_content(chunk_size=64 * 1024):
                pass
            return None
        try:
            content = resp.content
        except requests.RequestException as exc:
            raise APIConnectionError(f"read {method} {path} response: {exc}") from exc
        if not content.strip():
            return None
        if isinstance(cast_to, type) and issubclass(cast_to, RawJSONUnion):
            # Keep the body byte for byte.
            return cast_to.decode(content)
        try:
            return _adapter(cast_to).validate_json(content)
        except ValidationError as exc:
            raise ResponseDecodeError(f"decode {method} {path} response: {exc}") from exc
