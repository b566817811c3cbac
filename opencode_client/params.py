"""
Request parameter objects.

Each endpoint takes a small dataclass describing its inputs.  Fields are
declared with :func:`query_field` (sent in the URL) or :func:`body_field`
(sent in the JSON body); ``None`` means "not set" and is never transmitted.

Example::

    @dataclass
    class SessionRevertParams(Params):
        message_id: str = body_field("messageID")
        part_id: Optional[str] = body_field("partID", default=None)
        directory: Optional[str] = query_field("directory", default=None)
"""

from dataclasses import MISSING, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel


def query_field(name: str, default: Any = MISSING):
    """Declare a dataclass field serialized as query parameter *name*."""
    return field(default=default, metadata={"query": name})


def body_field(name: str, default: Any = MISSING):
    """Declare a dataclass field serialized as JSON body key *name*."""
    return field(default=default, metadata={"json": name})


def to_jsonable(value: Any) -> Any:
    """Convert params, models and unions into plain JSON values, dropping ``None``."""
    if isinstance(value, Params):
        return value.json_body()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if hasattr(value, "to_python"):
        return value.to_python()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


@dataclass
class Params:
    """Base class for endpoint parameters."""

    def url_query(self) -> Dict[str, Any]:
        """Query parameters, keyed by wire name."""
        query = {}
        for f in fields(self):
            name = f.metadata.get("query")
            value = getattr(self, f.name)
            if name and value is not None:
                query[name] = value.value if isinstance(value, Enum) else value
        return query

    def json_body(self) -> Dict[str, Any]:
        """JSON body, keyed by wire name, without unset fields."""
        body = {}
        for f in fields(self):
            name = f.metadata.get("json")
            value = getattr(self, f.name)
            if name and value is not None:
                body[name] = to_jsonable(value)
        return body


@dataclass
class DirectoryParams(Params):
    """Parameters of endpoints whose only input is the project directory."""

    directory: Optional[str] = query_field("directory", default=None)
