"""Provider credentials.

Secret values are held as :class:`pydantic.SecretStr`, so they print as
``**********`` in reprs and logs and are revealed only when the model is
serialized to JSON for ``PUT /auth/{id}``.
"""

from typing import Any, ClassVar, Dict, Literal

from pydantic import SecretStr, field_serializer

from opencode_client.models.base import OpencodeModel
from opencode_client.unions import KnownEnum, TaggedUnion


class OAuth(OpencodeModel):
    type: Literal["oauth"] = "oauth"
    access: SecretStr
    refresh: SecretStr
    expires: float

    @field_serializer("access", "refresh", when_used="json")
    def _reveal(self, value: SecretStr) -> str:
        return value.get_secret_value()


class ApiAuth(OpencodeModel):
    type: Literal["api"] = "api"
    key: SecretStr

    @field_serializer("key", when_used="json")
    def _reveal(self, value: SecretStr) -> str:
        return value.get_secret_value()


class WellKnownAuth(OpencodeModel):
    type: Literal["wellknown"] = "wellknown"
    key: str
    token: SecretStr

    @field_serializer("token", when_used="json")
    def _reveal(self, value: SecretStr) -> str:
        return value.get_secret_value()


class AuthType(KnownEnum):
    OAUTH = "oauth"
    API = "api"
    WELLKNOWN = "wellknown"


class Auth(TaggedUnion):
    tags = AuthType
    variants: ClassVar[Dict[str, Any]] = {
        AuthType.OAUTH.value: OAuth,
        AuthType.API.value: ApiAuth,
        AuthType.WELLKNOWN.value: WellKnownAuth,
    }

    __slots__ = ()

    @property
    def type(self) -> str:
        return self.tag

    def as_oauth(self) -> OAuth:
        return self._variant(AuthType.OAUTH)

    def as_api(self) -> ApiAuth:
        return self._variant(AuthType.API)

    def as_wellknown(self) -> WellKnownAuth:
        return self._variant(AuthType.WELLKNOWN)
