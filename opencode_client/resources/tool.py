"""Experimental tool registry endpoints."""

from dataclasses import dataclass
from typing import List, Optional

from opencode_client.errors import MissingParameterError
from opencode_client.models.workspace import ToolListItem
from opencode_client.params import DirectoryParams, Params, query_field
from opencode_client.request import RequestOptions
from opencode_client.resources.base import APIResource, require_params


@dataclass
class ToolListParams(Params):
    provider: str = query_field("provider")
    model: str = query_field("model")
    directory: Optional[str] = query_field("directory", default=None)


class ToolResource(APIResource):
    """``client.tool``."""

    def ids(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[str]:
        return self._get("experimental/tool/ids", params, List[str], options)

    def list(self, params: Optional[ToolListParams] = None, *options: RequestOptions) -> List[ToolListItem]:
        """Tools available to *model* of *provider*, with their JSON schemas.

        Raises
        ------
        MissingParameterError
            When ``provider`` or ``model`` is empty.
        """
        params = require_params(params)
        for name in ("provider", "model"):
            if not getattr(params, name):
                raise MissingParameterError(f"missing required {name} parameter")
        return self._get("experimental/tool", params, List[ToolListItem], options)
