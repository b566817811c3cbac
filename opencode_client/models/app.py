"""Agents, providers and slash commands known to the server."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from opencode_client.models.base import OpencodeModel
from opencode_client.models.config import PermissionBash
from opencode_client.unions import KnownEnum


class AgentMode(KnownEnum):
    SUBAGENT = "subagent"
    PRIMARY = "primary"
    ALL = "all"


class AgentPermission(OpencodeModel):
    bash: Optional[PermissionBash] = None
    edit: Optional[str] = None
    webfetch: Optional[str] = None


class AgentModel(OpencodeModel):
    model_id: str = Field(alias="modelID")
    provider_id: str = Field(alias="providerID")


class Agent(OpencodeModel):
    name: str
    built_in: bool = Field(default=False, alias="builtIn")
    mode: str = AgentMode.ALL.value
    options: Dict[str, Any] = Field(default_factory=dict)
    permission: AgentPermission = Field(default_factory=AgentPermission)
    tools: Dict[str, bool] = Field(default_factory=dict)
    description: Optional[str] = None
    model: Optional[AgentModel] = None
    prompt: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = Field(default=None, alias="topP")


class ModelCost(OpencodeModel):
    input: float = 0
    output: float = 0
    cache_read: Optional[float] = None
    cache_write: Optional[float] = None


class ModelLimit(OpencodeModel):
    context: float = 0
    output: float = 0


class ModelModalities(OpencodeModel):
    input: List[str] = Field(default_factory=list)
    output: List[str] = Field(default_factory=list)


class ModelProvider(OpencodeModel):
    npm: str


class ProviderModel(OpencodeModel):
    id: str
    name: str = ""
    attachment: bool = False
    reasoning: bool = False
    temperature: bool = False
    tool_call: bool = False
    release_date: str = ""
    cost: ModelCost = Field(default_factory=ModelCost)
    limit: ModelLimit = Field(default_factory=ModelLimit)
    options: Dict[str, Any] = Field(default_factory=dict)
    experimental: Optional[bool] = None
    modalities: Optional[ModelModalities] = None
    provider: Optional[ModelProvider] = None
    # alpha, beta
    status: Optional[str] = None


class Provider(OpencodeModel):
    id: str
    name: str = ""
    env: List[str] = Field(default_factory=list)
    models: Dict[str, ProviderModel] = Field(default_factory=dict)
    api: Optional[str] = None
    npm: Optional[str] = None


class ProvidersResponse(OpencodeModel):
    """Configured providers plus the default model id per provider."""

    default: Dict[str, str] = Field(default_factory=dict)
    providers: List[Provider] = Field(default_factory=list)


class Command(OpencodeModel):
    name: str
    template: str = ""
    agent: Optional[str] = None
    description: Optional[str] = None
    model: Optional[str] = None
    subtask: Optional[bool] = None
