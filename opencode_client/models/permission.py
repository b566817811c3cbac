"""Permission requests raised by tools and the replies to them."""

from typing import Any, Dict, List, Optional

from pydantic import Field, TypeAdapter

from opencode_client.models.base import OpencodeModel
from opencode_client.unions import ShapeUnion

_STR = TypeAdapter(str)
_STR_LIST = TypeAdapter(List[str])


class PermissionPattern(ShapeUnion):
    """A single glob pattern or a list of them."""

    __slots__ = ()

    def as_string(self) -> str:
        return self._shape("string", '"', _STR)

    def as_array(self) -> List[str]:
        return self._shape("array", "[", _STR_LIST)


class PermissionTime(OpencodeModel):
    created: float


class Permission(OpencodeModel):
    id: str
    message_id: str = Field(alias="messageID")
    session_id: str = Field(alias="sessionID")
    type: str
    title: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    time: PermissionTime
    call_id: Optional[str] = Field(default=None, alias="callID")
    pattern: Optional[PermissionPattern] = None
