"""Project, path, file and search results."""

from typing import Any, List, Optional

from pydantic import Field

from opencode_client.models.base import OpencodeModel
from opencode_client.models.message import Range
from opencode_client.unions import KnownEnum


class FileStatus(KnownEnum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


class File(OpencodeModel):
    """A changed file as reported by ``file.status()``."""

    path: str
    added: int = 0
    removed: int = 0
    status: str = ""


class FileNode(OpencodeModel):
    name: str
    path: str
    absolute: str = ""
    # file, directory
    type: str = ""
    ignored: bool = False


class FileContentHunk(OpencodeModel):
    lines: List[str] = Field(default_factory=list)
    new_lines: int = Field(default=0, alias="newLines")
    new_start: int = Field(default=0, alias="newStart")
    old_lines: int = Field(default=0, alias="oldLines")
    old_start: int = Field(default=0, alias="oldStart")


class FileContentPatch(OpencodeModel):
    hunks: List[FileContentHunk] = Field(default_factory=list)
    new_file_name: str = Field(default="", alias="newFileName")
    old_file_name: str = Field(default="", alias="oldFileName")
    index: Optional[str] = None
    new_header: Optional[str] = Field(default=None, alias="newHeader")
    old_header: Optional[str] = Field(default=None, alias="oldHeader")


class FileContent(OpencodeModel):
    content: str
    # text, binary
    type: str = "text"
    diff: Optional[str] = None
    encoding: Optional[str] = None
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    patch: Optional[FileContentPatch] = None


class SymbolLocation(OpencodeModel):
    range: Range
    uri: str


class Symbol(OpencodeModel):
    name: str
    kind: int
    location: SymbolLocation


class MatchText(OpencodeModel):
    text: str


class Submatch(OpencodeModel):
    match: MatchText
    start: int
    end: int


class FindMatch(OpencodeModel):
    """One ripgrep hit from ``find.text()``."""

    path: MatchText
    lines: MatchText
    line_number: int
    absolute_offset: int
    submatches: List[Submatch] = Field(default_factory=list)


class Path(OpencodeModel):
    config: str
    directory: str
    state: str
    worktree: str


class ProjectTime(OpencodeModel):
    created: float
    initialized: Optional[float] = None


class Project(OpencodeModel):
    id: str
    worktree: str
    time: ProjectTime
    vcs: Optional[str] = None


class ToolListItem(OpencodeModel):
    id: str
    description: str = ""
    parameters: Any = None
