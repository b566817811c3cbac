"""Remote control of a running terminal UI.  Every action returns ``True`` on success."""

from dataclasses import dataclass
from typing import Optional

from opencode_client.params import DirectoryParams, Params, body_field, query_field
from opencode_client.request import RequestOptions
from opencode_client.resources.base import APIResource, require_params
from opencode_client.unions import KnownEnum


class ToastVariant(KnownEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class TuiAppendPromptParams(Params):
    text: str = body_field("text")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class TuiExecuteCommandParams(Params):
    command: str = body_field("command")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class TuiShowToastParams(Params):
    message: str = body_field("message")
    variant: ToastVariant = body_field("variant")
    title: Optional[str] = body_field("title", default=None)
    directory: Optional[str] = query_field("directory", default=None)


class TuiResource(APIResource):
    """``client.tui``."""

    def append_prompt(self, params: Optional[TuiAppendPromptParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/append-prompt", require_params(params), bool, options)

    def clear_prompt(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/clear-prompt", params, bool, options)

    def execute_command(
        self, params: Optional[TuiExecuteCommandParams] = None, *options: RequestOptions
    ) -> bool:
        """Run a TUI command such as ``agent_cycle``."""
        return self._post("tui/execute-command", require_params(params), bool, options)

    def open_help(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/open-help", params, bool, options)

    def open_models(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/open-models", params, bool, options)

    def open_sessions(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/open-sessions", params, bool, options)

    def open_themes(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/open-themes", params, bool, options)

    def show_toast(self, params: Optional[TuiShowToastParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/show-toast", require_params(params), bool, options)

    def submit_prompt(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> bool:
        return self._post("tui/submit-prompt", params, bool, options)
