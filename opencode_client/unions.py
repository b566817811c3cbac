"""
Raw-JSON-backed discriminated unions.

Many server payloads change shape depending on a tag (``type``, ``role``,
``status``, ``name``) or on the JSON token itself (string vs. array).  A
union wrapper keeps the raw bytes plus the tag and decodes a concrete
variant only when asked::

    event = Event.decode(frame)
    if event.type == EventType.SESSION_IDLE:
        idle = event.as_session_idle()

Accessors raise :class:`~opencode_client.errors.WrongVariantError` when the
tag names another variant and :class:`~opencode_client.errors.UnionDecodeError`
when the tag matches but the payload does not fit.  Wrappers are immutable;
every accessor call parses the stored bytes afresh.

Wrappers also act as pydantic field types, so models can nest them
(``state: ToolPartState``).
"""

import json
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import core_schema

from opencode_client.errors import UnionDecodeError, WrongVariantError

M = TypeVar("M", bound=BaseModel)
U = TypeVar("U", bound="RawJSONUnion")

RawJSON = Union[bytes, bytearray, memoryview, str]


class KnownEnum(str, Enum):
    """String enum whose members are the tags the client knows about."""

    @classmethod
    def is_known(cls, value: Any) -> bool:
        return isinstance(value, str) and value in cls._value2member_map_


def _raw_bytes(data: RawJSON) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(f"expected JSON text or bytes, got {type(data).__name__}")


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _tag_value(tag: Any) -> str:
    return tag.value if isinstance(tag, Enum) else tag


class RawJSONUnion:
    """Storage, equality and (de)serialization shared by all union wrappers."""

    __slots__ = ("_raw",)

    def __init__(self):
        self._raw: Optional[bytes] = None

    @classmethod
    def decode(cls: Type[U], data: RawJSON) -> U:
        raise NotImplementedError

    @property
    def raw(self) -> Optional[bytes]:
        """The stored payload, byte for byte; ``None`` for a zero value."""
        return self._raw

    def to_json(self) -> str:
        """Re-encode the wrapper: the stored JSON unchanged, or ``null``."""
        if self._raw is None:
            return "null"
        return self._raw.decode("utf-8")

    def to_python(self) -> Any:
        if self._raw is None:
            return None
        return json.loads(self._raw)

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_python() == other.to_python()

    __hash__ = None

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def _from_python(cls: Type[U], value: Any) -> U:
        if isinstance(value, cls):
            return value
        # Nested values arrive already parsed; store their compact encoding.
        return cls.decode(json.dumps(value, separators=(",", ":"), ensure_ascii=False))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            cls._from_python,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda union: union.to_python()
            ),
        )


class TaggedUnion(RawJSONUnion):
    """Union discriminated by a string field of a JSON object.

    Subclasses set:

    ``discriminator``
        Wire name of the tag field.
    ``tags``
        :class:`KnownEnum` of recognised tags.
    ``variants``
        Mapping of tag value to the pydantic model of that variant.
    ``promoted``
        Extra string fields read during :meth:`decode` (e.g. ``id``).
    """

    discriminator: ClassVar[str] = "type"
    tags: ClassVar[Type[KnownEnum]]
    variants: ClassVar[Dict[str, Type[BaseModel]]] = {}
    promoted: ClassVar[Tuple[str, ...]] = ()

    __slots__ = ("_tag", "_promoted")

    def __init__(self):
        super().__init__()
        self._tag = ""
        self._promoted: Dict[str, str] = {}

    @classmethod
    def decode(cls: Type[U], data: RawJSON) -> U:
        """Read the tag (and promoted fields) and keep *data* verbatim.

        Raises
        ------
        UnionDecodeError
            When *data* is not valid JSON, is not an object, or the tag or a
            promoted field is not a string.
        """
        raw = _raw_bytes(data)
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise UnionDecodeError(f"decode {cls.__name__}: {exc}") from exc
        union = cls()
        if value is None:
            return union
        if not isinstance(value, dict):
            raise UnionDecodeError(
                f"decode {cls.__name__}: expected a JSON object, got {_json_kind(value)}"
            )
        promoted = {}
        for name in (cls.discriminator,) + tuple(cls.promoted):
            field_value = value.get(name, "")
            if not isinstance(field_value, str):
                raise UnionDecodeError(
                    f"decode {cls.__name__}: field {name!r} must be a string, "
                    f"got {_json_kind(field_value)}"
                )
            promoted[name] = field_value
        union._raw = raw
        union._tag = promoted.pop(cls.discriminator)
        union._promoted = promoted
        return union

    @property
    def tag(self) -> str:
        """Discriminator value, ``""`` when absent."""
        return self._tag

    def is_known(self) -> bool:
        return self.tags.is_known(self._tag)

    def _field(self, name: str) -> str:
        return self._promoted.get(name, "")

    def _variant(self, tag: Any) -> Any:
        expected = _tag_value(tag)
        if self._raw is None or self._tag != expected:
            raise WrongVariantError(expected, self._tag)
        model = self.variants[expected]
        try:
            return model.model_validate_json(self._raw)
        except ValidationError as exc:
            raise UnionDecodeError(f"unmarshal {expected} {type(self).__name__}: {exc}") from exc

    def value(self) -> Any:
        """Decode whichever variant the tag names.

        Raises :class:`WrongVariantError` for a missing or unknown tag.
        """
        if self._tag not in self.variants:
            raise WrongVariantError(
                " | ".join(self.variants) or type(self).__name__, self._tag
            )
        return self._variant(self._tag)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.discriminator}={self._tag!r})"


_LEADING_KIND = {
    '"': "string",
    "[": "array",
    "{": "object",
    "t": "boolean",
    "f": "boolean",
    "n": "null",
}


class ShapeUnion(RawJSONUnion):
    """Union decided by the first significant byte of the JSON value."""

    __slots__ = ()

    @classmethod
    def decode(cls: Type[U], data: RawJSON) -> U:
        raw = _raw_bytes(data)
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise UnionDecodeError(f"decode {cls.__name__}: {exc}") from exc
        union = cls()
        if value is not None:
            union._raw = raw
        return union

    def _leading(self) -> str:
        if self._raw is None:
            return ""
        stripped = self._raw.lstrip()
        return chr(stripped[0]) if stripped else ""

    def kind(self) -> str:
        """JSON kind of the payload (``string``, ``array``, ...); ``""`` when unset."""
        first = self._leading()
        if not first:
            return ""
        return _LEADING_KIND.get(first, "number")

    def _shape(self, expected: str, leading: str, adapter: TypeAdapter) -> Any:
        first = self._leading()
        if not first or first not in leading:
            raise WrongVariantError(f"{expected} variant", self.kind())
        try:
            return adapter.validate_json(self._raw)
        except ValidationError as exc:
            raise UnionDecodeError(f"unmarshal {expected} {type(self).__name__}: {exc}") from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()})"
