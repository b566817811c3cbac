"""
Session endpoints: lifecycle, prompting, history and permissions.

Typical usage::

    session = client.session.create(SessionCreateParams(title="my chat"))
    reply = client.session.prompt(
        session.id,
        SessionPromptParams(parts=[TextPartInput(text="Hello")]),
    )
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from opencode_client.models.message import (
    AssistantMessage,
    PartInput,
    SessionMessageResponse,
    SessionPromptResponse,
)
from opencode_client.models.session import FileDiff, Session, Todo
from opencode_client.params import DirectoryParams, Params, body_field, query_field
from opencode_client.request import RequestExecutor, RequestOptions
from opencode_client.resources.base import APIResource, require_id, require_params
from opencode_client.unions import KnownEnum

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


@dataclass
class ModelRef(Params):
    """Provider/model pair, e.g. ``ModelRef("anthropic", "claude-sonnet-4-5")``."""

    provider_id: str = body_field("providerID")
    model_id: str = body_field("modelID")


@dataclass
class SessionCreateParams(Params):
    parent_id: Optional[str] = body_field("parentID", default=None)
    title: Optional[str] = body_field("title", default=None)
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionUpdateParams(Params):
    title: Optional[str] = body_field("title", default=None)
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionCommandParams(Params):
    command: str = body_field("command")
    arguments: str = body_field("arguments")
    agent: Optional[str] = body_field("agent", default=None)
    message_id: Optional[str] = body_field("messageID", default=None)
    model: Optional[str] = body_field("model", default=None)
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionInitParams(Params):
    message_id: str = body_field("messageID")
    model_id: str = body_field("modelID")
    provider_id: str = body_field("providerID")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionPromptParams(Params):
    parts: List[PartInput] = body_field("parts")
    agent: Optional[str] = body_field("agent", default=None)
    message_id: Optional[str] = body_field("messageID", default=None)
    model: Optional[ModelRef] = body_field("model", default=None)
    no_reply: Optional[bool] = body_field("noReply", default=None)
    system: Optional[str] = body_field("system", default=None)
    tools: Optional[Dict[str, bool]] = body_field("tools", default=None)
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionRevertParams(Params):
    message_id: str = body_field("messageID")
    part_id: Optional[str] = body_field("partID", default=None)
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionShellParams(Params):
    agent: str = body_field("agent")
    command: str = body_field("command")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionSummarizeParams(Params):
    provider_id: str = body_field("providerID")
    model_id: str = body_field("modelID")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionForkParams(Params):
    message_id: Optional[str] = body_field("messageID", default=None)
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class SessionDiffParams(Params):
    message_id: Optional[str] = query_field("messageID", default=None)
    directory: Optional[str] = query_field("directory", default=None)


class PermissionResponse(KnownEnum):
    ONCE = "once"
    ALWAYS = "always"
    REJECT = "reject"


@dataclass
class PermissionRespondParams(Params):
    response: PermissionResponse = body_field("response")
    directory: Optional[str] = query_field("directory", default=None)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class PermissionResource(APIResource):
    """``client.session.permissions``."""

    def respond(
        self,
        id: str,
        permission_id: str,
        params: Optional[PermissionRespondParams] = None,
        *options: RequestOptions,
    ) -> bool:
        """Answer a pending permission request.

        Parameters
        ----------
        id : str
            Session identifier.
        permission_id : str
            Permission identifier from the ``permission.updated`` event.
        params : PermissionRespondParams
            ``once``, ``always`` or ``reject``.

        Returns
        -------
        bool
        """
        path = f"session/{require_id(id)}/permissions/{require_id(permission_id, 'permissionID')}"
        params = require_params(params)
        return self._post(path, params, bool, options)


class SessionResource(APIResource):
    """``client.session``."""

    def __init__(self, executor: RequestExecutor):
        super().__init__(executor)
        self.permissions = PermissionResource(executor)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create(
        self, params: Optional[SessionCreateParams] = None, *options: RequestOptions
    ) -> Session:
        """Create a new session.

        Parameters
        ----------
        params : SessionCreateParams, optional
            Title and parent session for branching.

        Returns
        -------
        Session
        """
        session = self._post("session", params or SessionCreateParams(), Session, options)
        logger.info("Created OpenCode session %s", session.id)
        return session

    def update(
        self, id: str, params: Optional[SessionUpdateParams] = None, *options: RequestOptions
    ) -> Session:
        """Update session metadata (the title)."""
        return self._patch(f"session/{require_id(id)}", params or SessionUpdateParams(), Session, options)

    def list(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[Session]:
        return self._get("session", params, List[Session], options)

    def get(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Session:
        return self._get(f"session/{require_id(id)}", params, Session, options)

    def delete(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> None:
        """Delete a session and all of its messages."""
        self._delete(f"session/{require_id(id)}", params, None, options)
        logger.info("Deleted OpenCode session %s", id)

    def abort(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> None:
        """Immediately stop generation for a session."""
        self._post(f"session/{require_id(id)}/abort", params, None, options)

    def children(
        self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions
    ) -> List[Session]:
        """Sessions forked from *id*."""
        return self._get(f"session/{require_id(id)}/children", params, List[Session], options)

    def init(
        self, id: str, params: Optional[SessionInitParams] = None, *options: RequestOptions
    ) -> bool:
        """Analyze the project and write ``AGENTS.md``."""
        path = f"session/{require_id(id)}/init"
        return self._post(path, require_params(params), bool, options)

    def fork(
        self, id: str, params: Optional[SessionForkParams] = None, *options: RequestOptions
    ) -> Session:
        """Fork (branch) a session, optionally at a specific message.

        Parameters
        ----------
        id : str
            Session to fork.
        params : SessionForkParams
            ``message_id`` to fork at; omitted forks at the latest message.

        Returns
        -------
        Session
            The new session.
        """
        path = f"session/{require_id(id)}/fork"
        return self._post(path, require_params(params), Session, options)

    def share(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Session:
        return self._post(f"session/{require_id(id)}/share", params, Session, options)

    def unshare(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Session:
        return self._delete(f"session/{require_id(id)}/share", params, Session, options)

    def summarize(
        self, id: str, params: Optional[SessionSummarizeParams] = None, *options: RequestOptions
    ) -> bool:
        """Summarize a session for context compaction.

        Parameters
        ----------
        id : str
            Session identifier.
        params : SessionSummarizeParams
            Provider and model used for the summary.

        Returns
        -------
        bool
        """
        path = f"session/{require_id(id)}/summarize"
        return self._post(path, require_params(params), bool, options)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def prompt(
        self, id: str, params: Optional[SessionPromptParams] = None, *options: RequestOptions
    ) -> SessionPromptResponse:
        """Send a prompt and wait for the assistant's reply.

        Parameters
        ----------
        id : str
            Session identifier.
        params : SessionPromptParams
            Message parts plus optional agent, model and tool overrides.

        Returns
        -------
        SessionPromptResponse
            The assistant message and its parts.
        """
        path = f"session/{require_id(id)}/message"
        return self._post(path, require_params(params), SessionPromptResponse, options)

    def command(
        self, id: str, params: Optional[SessionCommandParams] = None, *options: RequestOptions
    ) -> SessionPromptResponse:
        """Run a slash command (e.g. ``/review``) in the session."""
        path = f"session/{require_id(id)}/command"
        return self._post(path, require_params(params), SessionPromptResponse, options)

    def shell(
        self, id: str, params: Optional[SessionShellParams] = None, *options: RequestOptions
    ) -> AssistantMessage:
        """Run a shell command in the session's context."""
        path = f"session/{require_id(id)}/shell"
        return self._post(path, require_params(params), AssistantMessage, options)

    def messages(
        self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions
    ) -> List[SessionMessageResponse]:
        return self._get(f"session/{require_id(id)}/message", params, List[SessionMessageResponse], options)

    def message(
        self,
        id: str,
        message_id: str,
        params: Optional[DirectoryParams] = None,
        *options: RequestOptions,
    ) -> SessionMessageResponse:
        path = f"session/{require_id(id)}/message/{require_id(message_id, 'messageID')}"
        return self._get(path, params, SessionMessageResponse, options)

    def revert(
        self, id: str, params: Optional[SessionRevertParams] = None, *options: RequestOptions
    ) -> Session:
        """Revert the session to before a message (or part)."""
        path = f"session/{require_id(id)}/revert"
        return self._post(path, require_params(params), Session, options)

    def unrevert(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Session:
        """Restore all previously reverted messages."""
        return self._post(f"session/{require_id(id)}/unrevert", params, Session, options)

    def diff(
        self, id: str, params: Optional[SessionDiffParams] = None, *options: RequestOptions
    ) -> List[FileDiff]:
        return self._get(f"session/{require_id(id)}/diff", params, List[FileDiff], options)

    def todo(self, id: str, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[Todo]:
        return self._get(f"session/{require_id(id)}/todo", params, List[Todo], options)
