"""
Exception hierarchy for the OpenCode client.

Everything raised by the library derives from :class:`OpencodeError`::

    OpencodeError
    ├── ConfigurationError           invalid client / request options
    ├── MissingParameterError        required id or params missing (no request sent)
    ├── APIConnectionError           no response received
    │   ├── RequestCancelledError    cancellation event was set
    │   └── DeadlineExceededError    overall timeout elapsed
    ├── APIError                     non-2xx response
    │   ├── NotFoundError            404
    │   ├── UnauthorizedError        401
    │   ├── ForbiddenError           403
    │   ├── RateLimitedError         429
    │   ├── InvalidRequestError      any other 4xx
    │   │   └── RequestTimeoutError  408
    │   └── InternalServerError      5xx
    ├── WrongVariantError            union accessor called for another variant
    └── DecodeError
        ├── UnionDecodeError         union tag matched, payload malformed
        └── ResponseDecodeError      2xx body did not match the expected type
"""

import json
import logging
import time
from email.utils import parsedate_to_datetime
from http import HTTPStatus
from typing import Any, Mapping, Optional, Type

import requests

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_SIZE = 1 << 20
MAX_ERROR_MESSAGE_LENGTH = 4096
MAX_RETRY_AFTER = 60.0


class OpencodeError(Exception):
    """Base class for every error raised by :mod:`opencode_client`."""


class ConfigurationError(OpencodeError, ValueError):
    pass


class MissingParameterError(OpencodeError, ValueError):
    pass


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class APIConnectionError(OpencodeError):
    """The request never produced a response.

    The underlying ``requests`` exception, if any, is available as
    ``__cause__``.  ``retryable`` is True for connection-level failures that a
    fresh attempt may fix.
    """

    def __init__(self, message: str, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class RequestCancelledError(APIConnectionError):
    def __init__(self, message: str = "request cancelled"):
        super().__init__(message, retryable=False)


class DeadlineExceededError(APIConnectionError):
    def __init__(self, message: str = "request deadline exceeded"):
        super().__init__(message, retryable=False)


# ---------------------------------------------------------------------------
# Structured API errors
# ---------------------------------------------------------------------------


class APIError(OpencodeError):
    """A non-2xx response from the server.

    Attributes
    ----------
    status_code : int
        HTTP status.
    message : str
        Human readable message derived from the body.
    request_id : str or None
        ``X-Request-Id`` response header.
    body : bytes
        Raw response body (at most 1 MiB).
    truncated : bool
        True when the body was cut at the size limit.
    retry_after : float or None
        Server-requested delay in seconds, from ``Retry-After-Ms`` or
        ``Retry-After``.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        request_id: Optional[str] = None,
        body: bytes = b"",
        truncated: bool = False,
        retry_after: Optional[float] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.request_id = request_id
        self.body = body
        self.truncated = truncated
        self.retry_after = retry_after
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.message} (status {self.status_code}, request {self.request_id})"
        return f"{self.message} (status {self.status_code})"

    @property
    def is_retryable(self) -> bool:
        return is_retryable_status(self.status_code)

    def json(self) -> Any:
        """Parse the body as JSON (raises ``ValueError`` when it is not)."""
        return json.loads(self.body)


class InvalidRequestError(APIError):
    pass


class NotFoundError(APIError):
    pass


class UnauthorizedError(APIError):
    pass


class ForbiddenError(APIError):
    pass


class RateLimitedError(APIError):
    pass


class RequestTimeoutError(InvalidRequestError):
    pass


class InternalServerError(APIError):
    pass


_SPECIFIC_STATUS = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    408: RequestTimeoutError,
    429: RateLimitedError,
}


def error_class_for_status(status_code: int) -> Optional[Type[APIError]]:
    """Map a status code to its error class; ``None`` for 1xx-3xx."""
    if status_code < 400:
        return None
    if status_code in _SPECIFIC_STATUS:
        return _SPECIFIC_STATUS[status_code]
    if status_code < 500:
        return InvalidRequestError
    if status_code < 600:
        return InternalServerError
    return APIError


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or 500 <= status_code < 600


# ---------------------------------------------------------------------------
# Union and decoding errors
# ---------------------------------------------------------------------------


class WrongVariantError(OpencodeError):
    """A union accessor was called for a variant the payload does not hold.

    This is a control-flow signal (try the next accessor), not a failure.
    """

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{expected}, got {actual or '<empty>'}: wrong union variant")


class DecodeError(OpencodeError, ValueError):
    pass


class UnionDecodeError(DecodeError):
    pass


class ResponseDecodeError(DecodeError):
    pass


# ---------------------------------------------------------------------------
# Building errors from responses
# ---------------------------------------------------------------------------


def read_limited(resp: requests.Response, limit: int = MAX_ERROR_BODY_SIZE):
    """Read at most *limit* bytes of the body.  Returns ``(body, truncated)``."""
    chunks = []
    size = 0
    truncated = False
    for chunk in resp.iter_content(chunk_size=64 * 1024):
        if size + len(chunk) > limit:
            chunks.append(chunk[: limit - size])
            truncated = True
            break
        chunks.append(chunk)
        size += len(chunk)
    return b"".join(chunks), truncated


def parse_retry_after(headers: Mapping[str, str]) -> Optional[float]:
    """Seconds the server asked us to wait, or None.

    ``Retry-After-Ms`` wins over ``Retry-After``.  Values outside
    ``[0, 60]`` seconds are ignored.
    """
    value = None
    raw_ms = headers.get("Retry-After-Ms")
    if raw_ms:
        try:
            value = float(raw_ms) / 1000.0
        except ValueError:
            value = None
    if value is None:
        raw = headers.get("Retry-After")
        if raw:
            try:
                value = float(raw)
            except ValueError:
                try:
                    value = parsedate_to_datetime(raw).timestamp() - time.time()
                except (TypeError, ValueError):
                    value = None
    if value is None or not 0 <= value <= MAX_RETRY_AFTER:
        return None
    return value


def _message_from_body(body: bytes, status_code: int) -> str:
    text = body.decode("utf-8", errors="replace").strip()
    if not text:
        try:
            return HTTPStatus(status_code).phrase
        except ValueError:
            return f"HTTP {status_code}"
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
        # {"error": {"message": ...}} and NamedError's {"data": {"message": ...}}
        for key in ("error", "data"):
            nested = payload.get(key)
            if isinstance(nested, dict):
                value = nested.get("message")
                if isinstance(value, str) and value:
                    return value
    elif isinstance(payload, str) and payload:
        return payload
    return text


def api_error_from_response(resp: requests.Response, limit: int = MAX_ERROR_BODY_SIZE) -> APIError:
    """Read the (size limited) body of *resp* and build the matching :class:`APIError`."""
    try:
        body, truncated = read_limited(resp, limit)
    except requests.RequestException as exc:
        logger.debug("Could not read error body for status %s: %s", resp.status_code, exc)
        body, truncated = b"", False
    finally:
        resp.close()
    message = _message_from_body(body, resp.status_code)
    if len(message) > MAX_ERROR_MESSAGE_LENGTH:
        message = message[:MAX_ERROR_MESSAGE_LENGTH] + "... (truncated)"
    cls = error_class_for_status(resp.status_code) or APIError
    return cls(
        status_code=resp.status_code,
        message=message,
        request_id=resp.headers.get("X-Request-Id") or None,
        body=body,
        truncated=truncated,
        retry_after=parse_retry_after(resp.headers),
    )
