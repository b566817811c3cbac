"""
Events published on ``GET /event``.

Every event is ``{"type": "<topic>", "properties": {...}}``; the variant
models below expose the payload as ``properties``.
"""

from typing import Any, ClassVar, Dict, List, Literal, Optional

from pydantic import Field

from opencode_client.models.base import OpencodeModel
from opencode_client.models.message import Message, Part
from opencode_client.models.named_error import SessionError
from opencode_client.models.permission import Permission
from opencode_client.models.session import Session, Todo
from opencode_client.unions import KnownEnum, TaggedUnion


class EventType(KnownEnum):
    INSTALLATION_UPDATED = "installation.updated"
    LSP_CLIENT_DIAGNOSTICS = "lsp.client.diagnostics"
    MESSAGE_UPDATED = "message.updated"
    MESSAGE_REMOVED = "message.removed"
    MESSAGE_PART_UPDATED = "message.part.updated"
    MESSAGE_PART_REMOVED = "message.part.removed"
    SESSION_COMPACTED = "session.compacted"
    PERMISSION_UPDATED = "permission.updated"
    PERMISSION_REPLIED = "permission.replied"
    FILE_EDITED = "file.edited"
    FILE_WATCHER_UPDATED = "file.watcher.updated"
    TODO_UPDATED = "todo.updated"
    SESSION_IDLE = "session.idle"
    SESSION_CREATED = "session.created"
    SESSION_UPDATED = "session.updated"
    SESSION_DELETED = "session.deleted"
    SESSION_ERROR = "session.error"
    SERVER_CONNECTED = "server.connected"
    IDE_INSTALLED = "ide.installed"


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class InstallationUpdatedProperties(OpencodeModel):
    version: str


class LspClientDiagnosticsProperties(OpencodeModel):
    path: str
    server_id: str = Field(alias="serverID")


class MessageInfoProperties(OpencodeModel):
    info: Message


class MessageRemovedProperties(OpencodeModel):
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")


class MessagePartUpdatedProperties(OpencodeModel):
    part: Part
    # Incremental text appended since the previous update, when streaming.
    delta: Optional[str] = None


class MessagePartRemovedProperties(OpencodeModel):
    message_id: str = Field(alias="messageID")
    part_id: str = Field(alias="partID")
    session_id: str = Field(alias="sessionID")


class SessionIDProperties(OpencodeModel):
    session_id: str = Field(alias="sessionID")


class PermissionRepliedProperties(OpencodeModel):
    permission_id: str = Field(alias="permissionID")
    response: str
    session_id: str = Field(alias="sessionID")


class FileEditedProperties(OpencodeModel):
    file: str


class FileWatcherUpdatedProperties(OpencodeModel):
    # add, change, unlink
    event: str
    file: str


class TodoUpdatedProperties(OpencodeModel):
    session_id: str = Field(alias="sessionID")
    todos: List[Todo] = Field(default_factory=list)


class SessionInfoProperties(OpencodeModel):
    info: Session


class SessionErrorProperties(OpencodeModel):
    error: Optional[SessionError] = None
    session_id: Optional[str] = Field(default=None, alias="sessionID")


class IdeInstalledProperties(OpencodeModel):
    ide: str


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class EventInstallationUpdated(OpencodeModel):
    type: Literal["installation.updated"]
    properties: InstallationUpdatedProperties


class EventLspClientDiagnostics(OpencodeModel):
    type: Literal["lsp.client.diagnostics"]
    properties: LspClientDiagnosticsProperties


class EventMessageUpdated(OpencodeModel):
    type: Literal["message.updated"]
    properties: MessageInfoProperties


class EventMessageRemoved(OpencodeModel):
    type: Literal["message.removed"]
    properties: MessageRemovedProperties


class EventMessagePartUpdated(OpencodeModel):
    type: Literal["message.part.updated"]
    properties: MessagePartUpdatedProperties


class EventMessagePartRemoved(OpencodeModel):
    type: Literal["message.part.removed"]
    properties: MessagePartRemovedProperties


class EventSessionCompacted(OpencodeModel):
    type: Literal["session.compacted"]
    properties: SessionIDProperties


class EventPermissionUpdated(OpencodeModel):
    type: Literal["permission.updated"]
    properties: Permission


class EventPermissionReplied(OpencodeModel):
    type: Literal["permission.replied"]
    properties: PermissionRepliedProperties


class EventFileEdited(OpencodeModel):
    type: Literal["file.edited"]
    properties: FileEditedProperties


class EventFileWatcherUpdated(OpencodeModel):
    type: Literal["file.watcher.updated"]
    properties: FileWatcherUpdatedProperties


class EventTodoUpdated(OpencodeModel):
    type: Literal["todo.updated"]
    properties: TodoUpdatedProperties


class EventSessionIdle(OpencodeModel):
    type: Literal["session.idle"]
    properties: SessionIDProperties


class EventSessionCreated(OpencodeModel):
    type: Literal["session.created"]
    properties: SessionInfoProperties


class EventSessionUpdated(OpencodeModel):
    type: Literal["session.updated"]
    properties: SessionInfoProperties


class EventSessionDeleted(OpencodeModel):
    type: Literal["session.deleted"]
    properties: SessionInfoProperties


class EventSessionError(OpencodeModel):
    type: Literal["session.error"]
    properties: SessionErrorProperties


class EventServerConnected(OpencodeModel):
    type: Literal["server.connected"]
    properties: Dict[str, Any] = Field(default_factory=dict)


class EventIdeInstalled(OpencodeModel):
    type: Literal["ide.installed"]
    properties: IdeInstalledProperties


class Event(TaggedUnion):
    """One server event.

    Check :attr:`type` (compare with :class:`EventType`) and call the
    matching ``as_*`` accessor; events with an unrecognised type can still be
    inspected through :meth:`to_python`.
    """

    tags = EventType
    variants: ClassVar[Dict[str, Any]] = {
        EventType.INSTALLATION_UPDATED.value: EventInstallationUpdated,
        EventType.LSP_CLIENT_DIAGNOSTICS.value: EventLspClientDiagnostics,
        EventType.MESSAGE_UPDATED.value: EventMessageUpdated,
        EventType.MESSAGE_REMOVED.value: EventMessageRemoved,
        EventType.MESSAGE_PART_UPDATED.value: EventMessagePartUpdated,
        EventType.MESSAGE_PART_REMOVED.value: EventMessagePartRemoved,
        EventType.SESSION_COMPACTED.value: EventSessionCompacted,
        EventType.PERMISSION_UPDATED.value: EventPermissionUpdated,
        EventType.PERMISSION_REPLIED.value: EventPermissionReplied,
        EventType.FILE_EDITED.value: EventFileEdited,
        EventType.FILE_WATCHER_UPDATED.value: EventFileWatcherUpdated,
        EventType.TODO_UPDATED.value: EventTodoUpdated,
        EventType.SESSION_IDLE.value: EventSessionIdle,
        EventType.SESSION_CREATED.value: EventSessionCreated,
        EventType.SESSION_UPDATED.value: EventSessionUpdated,
        EventType.SESSION_DELETED.value: EventSessionDeleted,
        EventType.SESSION_ERROR.value: EventSessionError,
        EventType.SERVER_CONNECTED.value: EventServerConnected,
        EventType.IDE_INSTALLED.value: EventIdeInstalled,
    }

    __slots__ = ()

    @property
    def type(self) -> str:
        return self.tag

    def as_installation_updated(self) -> EventInstallationUpdated:
        return self._variant(EventType.INSTALLATION_UPDATED)

    def as_lsp_client_diagnostics(self) -> EventLspClientDiagnostics:
        return self._variant(EventType.LSP_CLIENT_DIAGNOSTICS)

    def as_message_updated(self) -> EventMessageUpdated:
        return self._variant(EventType.MESSAGE_UPDATED)

    def as_message_removed(self) -> EventMessageRemoved:
        return self._variant(EventType.MESSAGE_REMOVED)

    def as_message_part_updated(self) -> EventMessagePartUpdated:
        return self._variant(EventType.MESSAGE_PART_UPDATED)

    def as_message_part_removed(self) -> EventMessagePartRemoved:
        return self._variant(EventType.MESSAGE_PART_REMOVED)

    def as_session_compacted(self) -> EventSessionCompacted:
        return self._variant(EventType.SESSION_COMPACTED)

    def as_permission_updated(self) -> EventPermissionUpdated:
        return self._variant(EventType.PERMISSION_UPDATED)

    def as_permission_replied(self) -> EventPermissionReplied:
        return self._variant(EventType.PERMISSION_REPLIED)

    def as_file_edited(self) -> EventFileEdited:
        return self._variant(EventType.FILE_EDITED)

    def as_file_watcher_updated(self) -> EventFileWatcherUpdated:
        return self._variant(EventType.FILE_WATCHER_UPDATED)

    def as_todo_updated(self) -> EventTodoUpdated:
        return self._variant(EventType.TODO_UPDATED)

    def as_session_idle(self) -> EventSessionIdle:
        return self._variant(EventType.SESSION_IDLE)

    def as_session_created(self) -> EventSessionCreated:
        return self._variant(EventType.SESSION_CREATED)

    def as_session_updated(self) -> EventSessionUpdated:
        return self._variant(EventType.SESSION_UPDATED)

    def as_session_deleted(self) -> EventSessionDeleted:
        return self._variant(EventType.SESSION_DELETED)

    def as_session_error(self) -> EventSessionError:
        return self._variant(EventType.SESSION_ERROR)

    def as_server_connected(self) -> EventServerConnected:
        return self._variant(EventType.SERVER_CONNECTED)

    def as_ide_installed(self) -> EventIdeInstalled:
        return self._variant(EventType.IDE_INSTALLED)
