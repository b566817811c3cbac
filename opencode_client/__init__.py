"""
opencode_client: Python HTTP client library for ``opencode serve``.

- :class:`OpencodeClient`: resource-oriented client for every REST endpoint.
- :mod:`opencode_client.models`: typed responses, including the union
  wrappers (:class:`~opencode_client.models.Event`,
  :class:`~opencode_client.models.Part`, ...).
- :mod:`opencode_client.resources`: request parameter dataclasses.

Quick start::

    from opencode_client import OpencodeClient

    client = OpencodeClient()
    for session in client.session.list():
        print(session.id, session.title)

Defaults come from environment variables; see :mod:`opencode_client.config`.
"""

from opencode_client.client import OpencodeClient
from opencode_client.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    VERSION,
    ClientConfig,
)
from opencode_client.errors import (
    APIConnectionError,
    APIError,
    ConfigurationError,
    DeadlineExceededError,
    DecodeError,
    ForbiddenError,
    InternalServerError,
    InvalidRequestError,
    MissingParameterError,
    NotFoundError,
    OpencodeError,
    RateLimitedError,
    RequestCancelledError,
    RequestTimeoutError,
    ResponseDecodeError,
    UnauthorizedError,
    UnionDecodeError,
    WrongVariantError,
)
from opencode_client.params import DirectoryParams
from opencode_client.request import RequestOptions
from opencode_client.retry import RetryPolicy
from opencode_client.streaming import Stream

__version__ = VERSION

__all__ = [
    "OpencodeClient",
    "ClientConfig",
    "RequestOptions",
    "RetryPolicy",
    "Stream",
    "DirectoryParams",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "OpencodeError",
    "ConfigurationError",
    "MissingParameterError",
    "APIConnectionError",
    "RequestCancelledError",
    "DeadlineExceededError",
    "APIError",
    "InvalidRequestError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "RateLimitedError",
    "RequestTimeoutError",
    "InternalServerError",
    "WrongVariantError",
    "DecodeError",
    "UnionDecodeError",
    "ResponseDecodeError",
]
