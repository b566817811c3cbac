"""File browsing and search in the server's working directory."""

from dataclasses import dataclass
from typing import List, Optional

from opencode_client.errors import MissingParameterError
from opencode_client.models.workspace import File, FileContent, FileNode, FindMatch, Symbol
from opencode_client.params import DirectoryParams, Params, query_field
from opencode_client.request import RequestOptions
from opencode_client.resources.base import APIResource, require_params


@dataclass
class FileListParams(Params):
    path: str = query_field("path")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class FileReadParams(Params):
    path: str = query_field("path")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class FindFilesParams(Params):
    query: str = query_field("query")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class FindSymbolsParams(Params):
    query: str = query_field("query")
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class FindTextParams(Params):
    pattern: str = query_field("pattern")
    directory: Optional[str] = query_field("directory", default=None)


def _require_path(params: Optional[Params]) -> Params:
    params = require_params(params)
    if not params.path:
        raise MissingParameterError("missing required path parameter")
    return params


class FileResource(APIResource):
    """``client.file``."""

    def list(self, params: Optional[FileListParams] = None, *options: RequestOptions) -> List[FileNode]:
        """List the entries of a directory.

        Parameters
        ----------
        params : FileListParams
            ``path`` relative to the project root (``"."`` for the root).

        Returns
        -------
        list of FileNode
        """
        return self._get("file", _require_path(params), List[FileNode], options)

    def read(self, params: Optional[FileReadParams] = None, *options: RequestOptions) -> FileContent:
        """Read a file's content (and its diff against the last snapshot, if any)."""
        return self._get("file/content", _require_path(params), FileContent, options)

    def status(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> List[File]:
        """Files changed in the working tree."""
        return self._get("file/status", params, List[File], options)


class FindResource(APIResource):
    """``client.find``."""

    def files(self, params: Optional[FindFilesParams] = None, *options: RequestOptions) -> List[str]:
        """Paths whose name matches ``query`` (fuzzy)."""
        return self._get("find/file", require_params(params), List[str], options)

    def symbols(self, params: Optional[FindSymbolsParams] = None, *options: RequestOptions) -> List[Symbol]:
        """Workspace symbols matching ``query``."""
        return self._get("find/symbol", require_params(params), List[Symbol], options)

    def text(self, params: Optional[FindTextParams] = None, *options: RequestOptions) -> List[FindMatch]:
        """Lines matching the regular expression ``pattern``."""
        return self._get("find", require_params(params), List[FindMatch], options)
