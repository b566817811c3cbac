"""Server-level endpoints: agents, commands, logging, paths, projects, MCP."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from opencode_client.models.app import Agent, Command, ProvidersResponse
from opencode_client.models.workspace import Path, Project
from opencode_client.params import DirectoryParams, Params, body_field, query_field
from opencode_client.request import RequestOptions
from opencode_client.resources.base import APIResource, require_params
from opencode_client.unions import KnownEnum


class LogLevel(KnownEnum):
    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"
    WARN = "warn"


@dataclass
class AppLogParams(Params):
    service: str = body_field("service")
    level: LogLevel = body_field("level")
    message: str = body_field("message")
    extra: Optional[Dict[str, Any]] = body_field("extra", default=None)
    directory: Optional[str] = query_field("directory", default=None)


class AgentResource(APIResource):
    """``client.agent``."""

    def list(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[Agent]:
        return self._get("agent", params, List[Agent], options)


class AppResource(APIResource):
    """``client.app``."""

    def log(self, params: Optional[AppLogParams] = None, *options: RequestOptions) -> bool:
        """Write an entry to the server log.

        Parameters
        ----------
        params : AppLogParams
            Service name, level, message and optional structured extras.

        Returns
        -------
        bool
        """
        return self._post("log", require_params(params), bool, options)

    def providers(
        self, params: Optional[DirectoryParams] = None, *options: RequestOptions
    ) -> ProvidersResponse:
        return self._get("config/providers", params, ProvidersResponse, options)


class CommandResource(APIResource):
    """``client.command``."""

    def list(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[Command]:
        return self._get("command", params, List[Command], options)


class McpResource(APIResource):
    """``client.mcp``."""

    def status(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Dict[str, Any]:
        """Connection status of each configured MCP server, keyed by name."""
        return self._get("mcp", params, Dict[str, Any], options)


class PathResource(APIResource):
    """``client.path``."""

    def get(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Path:
        return self._get("path", params, Path, options)


class ProjectResource(APIResource):
    """``client.project``."""

    def list(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[Project]:
        return self._get("project", params, List[Project], options)

    def current(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Project:
        return self._get("project/current", params, Project, options)
