"""Wire models returned by and sent to the OpenCode server."""

from opencode_client.models.app import (
    Agent,
    AgentMode,
    AgentModel,
    AgentPermission,
    Command,
    Provider,
    ProviderModel,
    ProvidersResponse,
)
from opencode_client.models.auth import ApiAuth, Auth, AuthType, OAuth, WellKnownAuth
from opencode_client.models.base import OpencodeModel
from opencode_client.models.config import (
    Config,
    ConfigAgent,
    ConfigCommand,
    ConfigLsp,
    ConfigLspDisabled,
    ConfigLspObject,
    ConfigMcp,
    ConfigPermission,
    ConfigProvider,
    ConfigProviderOptions,
    ConfigShare,
    McpLocalConfig,
    McpRemoteConfig,
    McpType,
    PermissionBash,
    ProviderTimeout,
)
from opencode_client.models.event import Event, EventType
from opencode_client.models.message import (
    AgentPart,
    AgentPartInput,
    AssistantMessage,
    FilePart,
    FilePartInput,
    FilePartSource,
    FilePartSourceType,
    FileSource,
    Message,
    MessageRole,
    Part,
    PartInput,
    PartType,
    PatchPart,
    ReasoningPart,
    RetryPart,
    SessionMessageResponse,
    SessionPromptResponse,
    SnapshotPart,
    StepFinishPart,
    StepStartPart,
    SymbolSource,
    TextPart,
    TextPartInput,
    Tokens,
    ToolPart,
    ToolPartState,
    ToolStateCompleted,
    ToolStateError,
    ToolStatePending,
    ToolStateRunning,
    ToolStatus,
    UserMessage,
)
from opencode_client.models.named_error import (
    AssistantMessageError,
    ErrorName,
    MessageAbortedError,
    MessageAPIError,
    MessageOutputLengthError,
    ProviderAuthError,
    SessionError,
    UnknownError,
)
from opencode_client.models.permission import Permission, PermissionPattern
from opencode_client.models.session import FileDiff, Session, Todo
from opencode_client.models.workspace import (
    File,
    FileContent,
    FileNode,
    FileStatus,
    FindMatch,
    Path,
    Project,
    Symbol,
    ToolListItem,
)

__all__ = [
    "Agent",
    "AgentMode",
    "AgentModel",
    "AgentPart",
    "AgentPartInput",
    "AgentPermission",
    "ApiAuth",
    "AssistantMessage",
    "AssistantMessageError",
    "Auth",
    "AuthType",
    "Command",
    "Config",
    "ConfigAgent",
    "ConfigCommand",
    "ConfigLsp",
    "ConfigLspDisabled",
    "ConfigLspObject",
    "ConfigMcp",
    "ConfigPermission",
    "ConfigProvider",
    "ConfigProviderOptions",
    "ConfigShare",
    "ErrorName",
    "Event",
    "EventType",
    "File",
    "FileContent",
    "FileDiff",
    "FileNode",
    "FilePart",
    "FilePartInput",
    "FilePartSource",
    "FilePartSourceType",
    "FileSource",
    "FileStatus",
    "FindMatch",
    "McpLocalConfig",
    "McpRemoteConfig",
    "McpType",
    "Message",
    "MessageAbortedError",
    "MessageAPIError",
    "MessageOutputLengthError",
    "MessageRole",
    "OAuth",
    "OpencodeModel",
    "Part",
    "PartInput",
    "PartType",
    "PatchPart",
    "Path",
    "Permission",
    "PermissionBash",
    "PermissionPattern",
    "Project",
    "Provider",
    "ProviderAuthError",
    "ProviderModel",
    "ProvidersResponse",
    "ProviderTimeout",
    "ReasoningPart",
    "RetryPart",
    "Session",
    "SessionError",
    "SessionMessageResponse",
    "SessionPromptResponse",
    "SnapshotPart",
    "StepFinishPart",
    "StepStartPart",
    "Symbol",
    "SymbolSource",
    "TextPart",
    "TextPartInput",
    "Todo",
    "Tokens",
    "ToolListItem",
    "ToolPart",
    "ToolPartState",
    "ToolStateCompleted",
    "ToolStateError",
    "ToolStatePending",
    "ToolStateRunning",
    "ToolStatus",
    "UnknownError",
    "UserMessage",
    "WellKnownAuth",
]
