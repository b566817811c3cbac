from opencode_client.resources.app import (
    AgentResource,
    AppLogParams,
    AppResource,
    CommandResource,
    LogLevel,
    McpResource,
    PathResource,
    ProjectResource,
)
from opencode_client.resources.config import (
    AuthResource,
    AuthSetParams,
    ConfigResource,
    ConfigUpdateParams,
)
from opencode_client.resources.event import EventResource
from opencode_client.resources.file import (
    FileListParams,
    FileReadParams,
    FileResource,
    FindFilesParams,
    FindResource,
    FindSymbolsParams,
    FindTextParams,
)
from opencode_client.resources.session import (
    ModelRef,
    PermissionRespondParams,
    PermissionResponse,
    SessionCommandParams,
    SessionCreateParams,
    SessionDiffParams,
    SessionForkParams,
    SessionInitParams,
    SessionPromptParams,
    SessionResource,
    SessionRevertParams,
    SessionShellParams,
    SessionSummarizeParams,
    SessionUpdateParams,
)
from opencode_client.resources.tool import ToolListParams, ToolResource
from opencode_client.resources.tui import (
    ToastVariant,
    TuiAppendPromptParams,
    TuiExecuteCommandParams,
    TuiResource,
    TuiShowToastParams,
)
