"""
Configuration for the OpenCode client library.

Defaults are module constants that can be overridden with environment
variables.  The environment is read exactly once, when a client is built
(:meth:`ClientConfig.from_env`), and the resulting :class:`ClientConfig` is
frozen.  Nothing else in the package reads ``os.environ``.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from opencode_client.errors import ConfigurationError
from opencode_client.retry import RetryPolicy

logger = logging.getLogger(__name__)

VERSION = "0.3.0"
"""Library version, reported in the ``User-Agent`` header."""

# ---------------------------------------------------------------------------
# OpenCode server connection
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "http://localhost:54321"
"""Base URL used when neither an argument nor ``OPENCODE_BASE_URL`` is set."""

# ---------------------------------------------------------------------------
# Timeouts (seconds) and retries
# ---------------------------------------------------------------------------

DEFAULT_TIMEOUT = 30.0
"""Overall deadline for one call, retries and backoff included."""

DEFAULT_MAX_RETRIES = 2
"""Retries after the first attempt (three attempts in total)."""

MAX_RETRIES_CAP = 10

DEFAULT_SSE_CONNECT_TIMEOUT = 15.0
"""Timeout for establishing the event stream connection."""


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every call made through one client.

    Attributes
    ----------
    base_url : str
        Server root.  Always ``http``/``https`` with a path ending in ``/``.
    timeout : float
        Overall per-call deadline in seconds.
    max_retries : int
        Retry budget, 0 to 10.
    sse_connect_timeout : float
        Connect timeout for the event stream.
    http_client : requests.Session, optional
        Transport.  A private session is created when omitted.
    headers : dict
        Headers added to every request.
    retry_policy : RetryPolicy
        Backoff computation.
    """

    base_url: str = DEFAULT_BASE_URL + "/"
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    sse_connect_timeout: float = DEFAULT_SSE_CONNECT_TIMEOUT
    http_client: Optional[requests.Session] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self):
        object.__setattr__(self, "base_url", validate_base_url(self.base_url))
        validate_timeout(self.timeout)
        validate_max_retries(self.max_retries)
        validate_timeout(self.sse_connect_timeout, name="sse_connect_timeout")
        validate_http_client(self.http_client)

    @classmethod
    def from_env(
        cls,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        sse_connect_timeout: Optional[float] = None,
        http_client: Optional[requests.Session] = None,
        headers: Optional[Mapping[str, str]] = None,
        retry_policy: Optional[RetryPolicy] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """Build a config from explicit arguments, falling back to the environment.

        Parameters
        ----------
        environ : mapping, optional
            Source of environment variables (defaults to ``os.environ``).

        Raises
        ------
        ConfigurationError
            When a value is out of range or cannot be parsed.
        """
        env = os.environ if environ is None else environ
        if base_url is None:
            base_url = env.get("OPENCODE_BASE_URL") or DEFAULT_BASE_URL
        if timeout is None:
            timeout = _env_number(env, "OPENCODE_DEFAULT_TIMEOUT", DEFAULT_TIMEOUT, float)
        if max_retries is None:
            max_retries = _env_number(env, "OPENCODE_MAX_RETRIES", DEFAULT_MAX_RETRIES, int)
        if sse_connect_timeout is None:
            sse_connect_timeout = _env_number(
                env, "OPENCODE_SSE_CONNECT_TIMEOUT", DEFAULT_SSE_CONNECT_TIMEOUT, float
            )
        return cls(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            sse_connect_timeout=sse_connect_timeout,
            http_client=http_client,
            headers=dict(headers or {}),
            retry_policy=retry_policy or RetryPolicy(),
        )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_base_url(url: str) -> str:
    """Check the scheme and host of *url* and make its path end in ``/``."""
    if not isinstance(url, str) or not url:
        raise ConfigurationError("base URL must be a non-empty string")
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        raise ConfigurationError(
            f"base URL must use http or https scheme, got {parts.scheme!r}"
        )
    if not parts.netloc:
        raise ConfigurationError(f"base URL {url!r} has no host")
    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def validate_timeout(timeout: Any, name: str = "timeout") -> None:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigurationError(f"{name} must be positive, got {timeout!r}")


def validate_max_retries(max_retries: Any) -> None:
    if (
        isinstance(max_retries, bool)
        or not isinstance(max_retries, int)
        or not 0 <= max_retries <= MAX_RETRIES_CAP
    ):
        raise ConfigurationError(
            f"max retries must be between 0 and {MAX_RETRIES_CAP}, got {max_retries!r}"
        )


def validate_http_client(http_client: Any) -> None:
    if http_client is not None and not isinstance(http_client, requests.Session):
        raise ConfigurationError(
            f"http client must be a requests.Session, got {type(http_client).__name__}"
        )


def _env_number(env: Mapping[str, str], name: str, default, kind):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name}={raw!r} is not a valid {kind.__name__}") from exc


# ---------------------------------------------------------------------------
# Logging helper
# ---------------------------------------------------------------------------


def log_config_summary(config: ClientConfig) -> Dict[str, Any]:
    """Log the active configuration (redacting header values).

    Returns the logged values so callers can reuse them.
    """
    summary = {
        "base_url": config.base_url,
        "timeout": config.timeout,
        "max_retries": config.max_retries,
        "sse_connect_timeout": config.sse_connect_timeout,
        "headers": {name: "***" for name in config.headers},
        "custom_transport": config.http_client is not None,
    }
    logger.debug(
        "OpenCode client config: base_url=%s  timeout=%ss  max_retries=%s  "
        "sse_connect_timeout=%ss  headers=%s  custom_transport=%s",
        summary["base_url"],
        summary["timeout"],
        summary["max_retries"],
        summary["sse_connect_timeout"],
        summary["headers"],
        summary["custom_transport"],
    )
    return summary
