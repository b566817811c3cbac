"""
Messages and their parts.

A message is either a user or an assistant message (:class:`Message`, keyed
by ``role``); its content is a list of :class:`Part` values keyed by
``type``.  Tool invocations carry a :class:`ToolPartState` keyed by
``status``, and file parts may point at a :class:`FilePartSource`.
"""

from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import Field

from opencode_client.models.base import OpencodeModel
from opencode_client.models.named_error import AssistantMessageError, MessageAPIErrorData
from opencode_client.models.session import FileDiff
from opencode_client.unions import KnownEnum, TaggedUnion


# ---------------------------------------------------------------------------
# File part sources
# ---------------------------------------------------------------------------


class FilePartSourceText(OpencodeModel):
    start: int
    end: int
    value: str


class Position(OpencodeModel):
    line: int
    character: int


class Range(OpencodeModel):
    start: Position
    end: Position


class FileSource(OpencodeModel):
    path: str
    text: FilePartSourceText
    type: Literal["file"] = "file"


class SymbolSource(OpencodeModel):
    kind: int
    name: str
    path: str
    range: Range
    text: FilePartSourceText
    type: Literal["symbol"] = "symbol"


class FilePartSourceType(KnownEnum):
    FILE = "file"
    SYMBOL = "symbol"


class FilePartSource(TaggedUnion):
    """Where an attached file came from: a whole file or a single symbol."""

    tags = FilePartSourceType
    variants: ClassVar[Dict[str, Any]] = {
        FilePartSourceType.FILE.value: FileSource,
        FilePartSourceType.SYMBOL.value: SymbolSource,
    }

    __slots__ = ()

    @property
    def type(self) -> str:
        return self.tag

    def as_file(self) -> FileSource:
        return self._variant(FilePartSourceType.FILE)

    def as_symbol(self) -> SymbolSource:
        return self._variant(FilePartSourceType.SYMBOL)


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------


class PartTime(OpencodeModel):
    start: float
    end: Optional[float] = None


class TextPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["text"] = "text"
    text: str
    metadata: Optional[Dict[str, Any]] = None
    synthetic: Optional[bool] = None
    time: Optional[PartTime] = None


class ReasoningPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["reasoning"] = "reasoning"
    text: str
    time: PartTime
    metadata: Optional[Dict[str, Any]] = None


class FilePart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["file"] = "file"
    mime: str
    url: str
    filename: Optional[str] = None
    source: Optional[FilePartSource] = None


class ToolStateTime(OpencodeModel):
    start: float
    end: Optional[float] = None
    compacted: Optional[float] = None


class ToolStatePending(OpencodeModel):
    status: Literal["pending"] = "pending"


class ToolStateRunning(OpencodeModel):
    status: Literal["running"] = "running"
    input: Any = None
    time: ToolStateTime
    title: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class ToolStateCompleted(OpencodeModel):
    status: Literal["completed"] = "completed"
    input: Dict[str, Any]
    output: str
    title: str
    metadata: Dict[str, Any]
    time: ToolStateTime
    attachments: Optional[List[FilePart]] = None


class ToolStateError(OpencodeModel):
    status: Literal["error"] = "error"
    error: str
    input: Dict[str, Any]
    time: ToolStateTime
    metadata: Optional[Dict[str, Any]] = None


class ToolStatus(KnownEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


class ToolPartState(TaggedUnion):
    """Lifecycle state of a tool call."""

    discriminator = "status"
    tags = ToolStatus
    variants: ClassVar[Dict[str, Any]] = {
        ToolStatus.PENDING.value: ToolStatePending,
        ToolStatus.RUNNING.value: ToolStateRunning,
        ToolStatus.COMPLETED.value: ToolStateCompleted,
        ToolStatus.ERROR.value: ToolStateError,
    }

    __slots__ = ()

    @property
    def status(self) -> str:
        return self.tag

    def as_pending(self) -> ToolStatePending:
        return self._variant(ToolStatus.PENDING)

    def as_running(self) -> ToolStateRunning:
        return self._variant(ToolStatus.RUNNING)

    def as_completed(self) -> ToolStateCompleted:
        return self._variant(ToolStatus.COMPLETED)

    def as_error(self) -> ToolStateError:
        return self._variant(ToolStatus.ERROR)


class ToolPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["tool"] = "tool"
    call_id: str = Field(alias="callID")
    tool: str
    state: ToolPartState
    metadata: Optional[Dict[str, Any]] = None


class TokenCache(OpencodeModel):
    read: float = 0
    write: float = 0


class Tokens(OpencodeModel):
    cache: TokenCache = Field(default_factory=TokenCache)
    input: float = 0
    output: float = 0
    reasoning: float = 0


class StepStartPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["step-start"] = "step-start"
    snapshot: Optional[str] = None


class StepFinishPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["step-finish"] = "step-finish"
    cost: float
    reason: str
    tokens: Tokens
    snapshot: Optional[str] = None


class SnapshotPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["snapshot"] = "snapshot"
    snapshot: str


class PatchPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["patch"] = "patch"
    files: List[str]
    hash: str


class AgentPartSource(OpencodeModel):
    start: int
    end: int
    value: str


class AgentPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["agent"] = "agent"
    name: str
    source: Optional[AgentPartSource] = None


class RetryPartError(OpencodeModel):
    name: Literal["APIError"] = "APIError"
    data: MessageAPIErrorData


class RetryPartTime(OpencodeModel):
    created: float


class RetryPart(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: Literal["retry"] = "retry"
    attempt: int
    error: RetryPartError
    time: RetryPartTime


class PartType(KnownEnum):
    TEXT = "text"
    REASONING = "reasoning"
    FILE = "file"
    TOOL = "tool"
    STEP_START = "step-start"
    STEP_FINISH = "step-finish"
    SNAPSHOT = "snapshot"
    PATCH = "patch"
    AGENT = "agent"
    RETRY = "retry"


class Part(TaggedUnion):
    """One piece of message content.

    ``id``, ``message_id`` and ``session_id`` are read during decode, so
    routing a part to its message needs no variant decode.
    """

    tags = PartType
    variants: ClassVar[Dict[str, Any]] = {
        PartType.TEXT.value: TextPart,
        PartType.REASONING.value: ReasoningPart,
        PartType.FILE.value: FilePart,
        PartType.TOOL.value: ToolPart,
        PartType.STEP_START.value: StepStartPart,
        PartType.STEP_FINISH.value: StepFinishPart,
        PartType.SNAPSHOT.value: SnapshotPart,
        PartType.PATCH.value: PatchPart,
        PartType.AGENT.value: AgentPart,
        PartType.RETRY.value: RetryPart,
    }
    promoted = ("id", "messageID", "sessionID")

    __slots__ = ()

    @property
    def type(self) -> str:
        return self.tag

    @property
    def id(self) -> str:
        return self._field("id")

    @property
    def message_id(self) -> str:
        return self._field("messageID")

    @property
    def session_id(self) -> str:
        return self._field("sessionID")

    def as_text(self) -> TextPart:
        return self._variant(PartType.TEXT)

    def as_reasoning(self) -> ReasoningPart:
        return self._variant(PartType.REASONING)

    def as_file(self) -> FilePart:
        return self._variant(PartType.FILE)

    def as_tool(self) -> ToolPart:
        return self._variant(PartType.TOOL)

    def as_step_start(self) -> StepStartPart:
        return self._variant(PartType.STEP_START)

    def as_step_finish(self) -> StepFinishPart:
        return self._variant(PartType.STEP_FINISH)

    def as_snapshot(self) -> SnapshotPart:
        return self._variant(PartType.SNAPSHOT)

    def as_patch(self) -> PatchPart:
        return self._variant(PartType.PATCH)

    def as_agent(self) -> AgentPart:
        return self._variant(PartType.AGENT)

    def as_retry(self) -> RetryPart:
        return self._variant(PartType.RETRY)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class MessageSummary(OpencodeModel):
    title: Optional[str] = None
    body: Optional[str] = None
    diffs: List[FileDiff] = Field(default_factory=list)


class UserMessageTime(OpencodeModel):
    created: float


class UserMessage(OpencodeModel):
    id: str
    session_id: str = Field(alias="sessionID")
    role: Literal["user"] = "user"
    time: UserMessageTime
    summary: Optional[MessageSummary] = None


class AssistantMessagePath(OpencodeModel):
    cwd: str
    root: str


class AssistantMessageTime(OpencodeModel):
    created: float
    completed: Optional[float] = None


class AssistantMessage(OpencodeModel):
    id: str
    session_id: str = Field(alias="sessionID")
    role: Literal["assistant"] = "assistant"
    parent_id: str = Field(default="", alias="parentID")
    model_id: str = Field(alias="modelID")
    provider_id: str = Field(alias="providerID")
    mode: str = ""
    path: AssistantMessagePath
    system: List[str] = Field(default_factory=list)
    cost: float = 0
    tokens: Tokens = Field(default_factory=Tokens)
    time: AssistantMessageTime
    error: Optional[AssistantMessageError] = None
    summary: Optional[bool] = None


class MessageRole(KnownEnum):
    USER = "user"
    ASSISTANT = "assistant"


class Message(TaggedUnion):
    discriminator = "role"
    tags = MessageRole
    variants: ClassVar[Dict[str, Any]] = {
        MessageRole.USER.value: UserMessage,
        MessageRole.ASSISTANT.value: AssistantMessage,
    }
    promoted = ("id", "sessionID")

    __slots__ = ()

    @property
    def role(self) -> str:
        return self.tag

    @property
    def id(self) -> str:
        return self._field("id")

    @property
    def session_id(self) -> str:
        return self._field("sessionID")

    def as_user(self) -> UserMessage:
        return self._variant(MessageRole.USER)

    def as_assistant(self) -> AssistantMessage:
        return self._variant(MessageRole.ASSISTANT)


class SessionMessageResponse(OpencodeModel):
    """A message together with its parts, as listed by the server."""

    info: Message
    parts: List[Part] = Field(default_factory=list)


class SessionPromptResponse(OpencodeModel):
    info: AssistantMessage
    parts: List[Part] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Prompt inputs
# ---------------------------------------------------------------------------


class TextPartInput(OpencodeModel):
    text: str
    type: Literal["text"] = "text"
    id: Optional[str] = None
    synthetic: Optional[bool] = None
    time: Optional[PartTime] = None


class FilePartInput(OpencodeModel):
    mime: str
    url: str
    type: Literal["file"] = "file"
    id: Optional[str] = None
    filename: Optional[str] = None
    source: Optional[FilePartSource] = None


class AgentPartInput(OpencodeModel):
    name: str
    type: Literal["agent"] = "agent"
    id: Optional[str] = None
    source: Optional[AgentPartSource] = None


PartInput = Union[TextPartInput, FilePartInput, AgentPartInput]
