"""Session records and the small objects hanging off them."""

from typing import List, Optional

from pydantic import Field

from opencode_client.models.base import OpencodeModel


class SessionTime(OpencodeModel):
    created: float
    updated: float
    compacting: Optional[float] = None


class SessionRevert(OpencodeModel):
    message_id: str = Field(alias="messageID")
    diff: Optional[str] = None
    part_id: Optional[str] = Field(default=None, alias="partID")
    snapshot: Optional[str] = None


class SessionShare(OpencodeModel):
    url: str


class FileDiff(OpencodeModel):
    """Before/after contents of one file changed in a session."""

    file: str
    before: str = ""
    after: str = ""
    additions: int = 0
    deletions: int = 0


class SessionSummary(OpencodeModel):
    diffs: List[FileDiff] = Field(default_factory=list)


class Session(OpencodeModel):
    id: str
    directory: str = ""
    project_id: str = Field(default="", alias="projectID")
    time: SessionTime
    title: str = ""
    version: str = ""
    parent_id: Optional[str] = Field(default=None, alias="parentID")
    revert: Optional[SessionRevert] = None
    share: Optional[SessionShare] = None
    summary: Optional[SessionSummary] = None


class Todo(OpencodeModel):
    id: str
    content: str
    # high, medium, low
    priority: str = ""
    # pending, in_progress, completed, cancelled
    status: str = ""
