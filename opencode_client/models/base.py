"""Common base for wire models."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class OpencodeModel(BaseModel):
    """Pydantic model for a server payload.

    Fields use snake_case attribute names with the server's camelCase as
    alias; unknown fields are kept so nothing the server sends is lost.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", protected_namespaces=())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape, leaving out unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
