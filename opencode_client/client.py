"""
HTTP client for the OpenCode ``opencode serve`` REST API.

Every endpoint is reached through a resource attribute of
:class:`OpencodeClient` (``client.session``, ``client.event``,
``client.file``, ...); all of them share one
:class:`~opencode_client.request.RequestExecutor`, which adds retries,
deadlines, cancellation and structured errors.

Typical usage::

    from opencode_client import OpencodeClient
    from opencode_client.models import TextPartInput
    from opencode_client.resources import SessionCreateParams, SessionPromptParams

    with OpencodeClient() as client:
        session = client.session.create(SessionCreateParams(title="my chat"))
        client.session.prompt(
            session.id, SessionPromptParams(parts=[TextPartInput(text="Hello")])
        )
        with client.event.stream() as events:
            for event in events:
                print(event.type)
"""

import logging
from typing import Any, Mapping, Optional

import requests

from opencode_client.config import ClientConfig, log_config_summary
from opencode_client.request import RequestExecutor, RequestOptions
from opencode_client.resources import (
    AgentResource,
    AppResource,
    AuthResource,
    CommandResource,
    ConfigResource,
    EventResource,
    FileResource,
    FindResource,
    McpResource,
    PathResource,
    ProjectResource,
    SessionResource,
    ToolResource,
    TuiResource,
)
from opencode_client.retry import RetryPolicy

logger = logging.getLogger(__name__)


class OpencodeClient:
    """Synchronous client for the OpenCode server API.

    Arguments left as None fall back to the ``OPENCODE_*`` environment
    variables and then to the library defaults (see
    :mod:`opencode_client.config`).  A client is safe to share between
    threads.

    Parameters
    ----------
    base_url : str, optional
        Root URL of the ``opencode serve`` instance.  A query string on it
        (e.g. ``?directory=/repo``) is sent with every request.
    timeout : float, optional
        Overall deadline per call in seconds, retries included.
    max_retries : int, optional
        Retries for 429, 5xx and connection failures (0 to 10).
    http_client : requests.Session, optional
        Transport to use.  When omitted the client creates one and closes it
        in :meth:`close`.
    headers : mapping, optional
        Headers added to every request.
    retry_policy : RetryPolicy, optional
        Backoff schedule.
    sse_connect_timeout : float, optional
        Connect timeout for the event stream.

    Raises
    ------
    ConfigurationError
        When any setting is invalid.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        http_client: Optional[requests.Session] = None,
        headers: Optional[Mapping[str, str]] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sse_connect_timeout: Optional[float] = None,
    ):
        self.client_config = ClientConfig.from_env(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            sse_connect_timeout=sse_connect_timeout,
            http_client=http_client,
            headers=headers,
            retry_policy=retry_policy,
        )
        self._owns_session = http_client is None
        self._session = http_client if http_client is not None else requests.Session()
        log_config_summary(self.client_config)

        self._executor = RequestExecutor(self.client_config, self._session)
        self.agent = AgentResource(self._executor)
        self.app = AppResource(self._executor)
        self.auth = AuthResource(self._executor)
        self.command = CommandResource(self._executor)
        self.config = ConfigResource(self._executor)
        self.event = EventResource(self._executor)
        self.file = FileResource(self._executor)
        self.find = FindResource(self._executor)
        self.mcp = McpResource(self._executor)
        self.path = PathResource(self._executor)
        self.project = ProjectResource(self._executor)
        self.session = SessionResource(self._executor)
        self.tool = ToolResource(self._executor)
        self.tui = TuiResource(self._executor)

    @property
    def base_url(self) -> str:
        return self.client_config.base_url

    def execute(
        self,
        method: str,
        path: str,
        query: Any = None,
        body: Any = None,
        cast_to: Any = None,
        *options: RequestOptions,
    ) -> Any:
        """Call an endpoint that has no resource method.

        Same semantics (retries, errors, decoding) as the resource methods;
        see :meth:`RequestExecutor.execute`.
        """
        return self._executor.execute(method, path, query, body, cast_to, *options)

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_session:
            self._session.close()
            logger.debug("OpenCode client transport closed")

    def __enter__(self) -> "OpencodeClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
