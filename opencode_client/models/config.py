"""
The server's ``opencode.json`` configuration.

Several settings accept more than one JSON shape; those are modelled as
union wrappers (:class:`ConfigMcp`, :class:`ConfigLsp`,
:class:`PermissionBash`, :class:`ProviderTimeout`) rather than loose
``Any`` values.
"""

import json
from typing import Any, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError

from opencode_client.errors import UnionDecodeError, WrongVariantError
from opencode_client.models.base import OpencodeModel
from opencode_client.unions import KnownEnum, RawJSON, RawJSONUnion, ShapeUnion, TaggedUnion, _raw_bytes

_STR = TypeAdapter(str)
_STR_MAP = TypeAdapter(Dict[str, str])
_INT = TypeAdapter(int)
_BOOL = TypeAdapter(bool)


# ---------------------------------------------------------------------------
# Shape unions
# ---------------------------------------------------------------------------


class PermissionBash(ShapeUnion):
    """Bash permission: one action for every command, or a pattern -> action map."""

    __slots__ = ()

    def as_string(self) -> str:
        return self._shape("string", '"', _STR)

    def as_map(self) -> Dict[str, str]:
        return self._shape("map", "{", _STR_MAP)


class ProviderTimeout(ShapeUnion):
    """Provider request timeout in milliseconds, or ``false`` to disable it."""

    __slots__ = ()

    def as_int(self) -> int:
        return self._shape("int", "-0123456789", _INT)

    def as_bool(self) -> bool:
        return self._shape("bool", "tf", _BOOL)


# ---------------------------------------------------------------------------
# MCP servers
# ---------------------------------------------------------------------------


class McpLocalConfig(OpencodeModel):
    type: Literal["local"] = "local"
    command: List[str]
    enabled: Optional[bool] = None
    environment: Optional[Dict[str, str]] = None


class McpRemoteConfig(OpencodeModel):
    type: Literal["remote"] = "remote"
    url: str
    enabled: Optional[bool] = None
    headers: Optional[Dict[str, str]] = None


class McpType(KnownEnum):
    LOCAL = "local"
    REMOTE = "remote"


class ConfigMcp(TaggedUnion):
    tags = McpType
    variants: ClassVar[Dict[str, Any]] = {
        McpType.LOCAL.value: McpLocalConfig,
        McpType.REMOTE.value: McpRemoteConfig,
    }

    __slots__ = ()

    @property
    def type(self) -> str:
        return self.tag

    def as_local(self) -> McpLocalConfig:
        return self._variant(McpType.LOCAL)

    def as_remote(self) -> McpRemoteConfig:
        return self._variant(McpType.REMOTE)


# ---------------------------------------------------------------------------
# Language servers
# ---------------------------------------------------------------------------


class ConfigLspDisabled(OpencodeModel):
    disabled: Literal[True] = True


class ConfigLspObject(OpencodeModel):
    command: List[str]
    disabled: Optional[bool] = None
    env: Optional[Dict[str, str]] = None
    extensions: Optional[List[str]] = None
    initialization: Optional[Dict[str, Any]] = None


class ConfigLsp(RawJSONUnion):
    """Language server entry: either ``{"disabled": true}`` or a server definition.

    The variant is decided by the presence of ``command``.
    """

    __slots__ = ("_has_command", "_disabled")

    def __init__(self):
        super().__init__()
        self._has_command = False
        self._disabled: Any = None

    @classmethod
    def decode(cls, data: RawJSON) -> "ConfigLsp":
        raw = _raw_bytes(data)
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise UnionDecodeError(f"decode {cls.__name__}: {exc}") from exc
        union = cls()
        if value is None:
            return union
        if not isinstance(value, dict):
            raise UnionDecodeError(f"decode {cls.__name__}: expected a JSON object")
        union._raw = raw
        union._has_command = value.get("command") is not None
        union._disabled = value.get("disabled")
        return union

    def _validate(self, model: Any, expected: str) -> Any:
        try:
            return model.model_validate_json(self._raw)
        except ValidationError as exc:
            raise UnionDecodeError(f"unmarshal {expected} {type(self).__name__}: {exc}") from exc

    def as_disabled(self) -> ConfigLspDisabled:
        if self._raw is None:
            raise WrongVariantError("disabled config", "")
        if self._has_command:
            raise WrongVariantError("disabled config", "object config with command")
        if self._disabled is False or self._disabled is None:
            raise WrongVariantError("disabled config", "config with disabled=false")
        return self._validate(ConfigLspDisabled, "disabled")

    def as_object(self) -> ConfigLspObject:
        if self._raw is None:
            raise WrongVariantError("object config", "")
        if not self._has_command:
            raise WrongVariantError("object config", "config without command")
        return self._validate(ConfigLspObject, "object")

    def __repr__(self) -> str:
        kind = "object" if self._has_command else "disabled"
        return f"ConfigLsp({kind})"


# ---------------------------------------------------------------------------
# Config sections
# ---------------------------------------------------------------------------


class ConfigPermission(OpencodeModel):
    bash: Optional[PermissionBash] = None
    edit: Optional[str] = None
    webfetch: Optional[str] = None


class ConfigAgent(OpencodeModel):
    description: Optional[str] = None
    disable: Optional[bool] = None
    # subagent, primary, all
    mode: Optional[str] = None
    model: Optional[str] = None
    permission: Optional[ConfigPermission] = None
    prompt: Optional[str] = None
    temperature: Optional[float] = None
    tools: Optional[Dict[str, bool]] = None
    top_p: Optional[float] = None


class ConfigCommand(OpencodeModel):
    template: str
    agent: Optional[str] = None
    description: Optional[str] = None
    model: Optional[str] = None
    subtask: Optional[bool] = None


class ConfigFormatter(OpencodeModel):
    command: Optional[List[str]] = None
    disabled: Optional[bool] = None
    environment: Optional[Dict[str, str]] = None
    extensions: Optional[List[str]] = None


class ConfigHookCommand(OpencodeModel):
    command: List[str]
    environment: Optional[Dict[str, str]] = None


class ConfigExperimentalHook(OpencodeModel):
    file_edited: Optional[Dict[str, List[ConfigHookCommand]]] = None
    session_completed: Optional[List[ConfigHookCommand]] = None


class ConfigExperimental(OpencodeModel):
    disable_paste_summary: Optional[bool] = None
    hook: Optional[ConfigExperimentalHook] = None


class ConfigProviderOptions(OpencodeModel):
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    base_url: Optional[str] = Field(default=None, alias="baseURL")
    timeout: Optional[ProviderTimeout] = None


class ConfigProvider(OpencodeModel):
    id: Optional[str] = None
    api: Optional[str] = None
    env: Optional[List[str]] = None
    models: Optional[Dict[str, Dict[str, Any]]] = None
    name: Optional[str] = None
    npm: Optional[str] = None
    options: Optional[ConfigProviderOptions] = None


class ConfigTui(OpencodeModel):
    scroll_speed: Optional[float] = None


class ConfigWatcher(OpencodeModel):
    ignore: Optional[List[str]] = None


class ConfigShare(KnownEnum):
    MANUAL = "manual"
    AUTO = "auto"
    DISABLED = "disabled"


class Config(OpencodeModel):
    """Server configuration.  Every field is optional; unknown keys are kept.

    The same model is used for ``config.get()`` and as the body of
    ``config.update()``; only the fields that are set are sent.
    """

    schema_url: Optional[str] = Field(default=None, alias="$schema")
    agent: Optional[Dict[str, ConfigAgent]] = None
    autoshare: Optional[bool] = None
    autoupdate: Optional[bool] = None
    command: Optional[Dict[str, ConfigCommand]] = None
    disabled_providers: Optional[List[str]] = None
    experimental: Optional[ConfigExperimental] = None
    formatter: Optional[Dict[str, ConfigFormatter]] = None
    instructions: Optional[List[str]] = None
    keybinds: Optional[Dict[str, str]] = None
    layout: Optional[str] = None
    lsp: Optional[Dict[str, ConfigLsp]] = None
    mcp: Optional[Dict[str, ConfigMcp]] = None
    mode: Optional[Dict[str, ConfigAgent]] = None
    model: Optional[str] = None
    permission: Optional[ConfigPermission] = None
    plugin: Optional[List[str]] = None
    provider: Optional[Dict[str, ConfigProvider]] = None
    share: Optional[Union[ConfigShare, str]] = None
    small_model: Optional[str] = None
    snapshot: Optional[bool] = None
    theme: Optional[str] = None
    tools: Optional[Dict[str, bool]] = None
    tui: Optional[ConfigTui] = None
    username: Optional[str] = None
    watcher: Optional[ConfigWatcher] = None
