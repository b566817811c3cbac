"""Errors reported inside payloads (``{"name": ..., "data": {...}}``)."""

from typing import Any, ClassVar, Dict, Literal, Optional

from pydantic import Field

from opencode_client.models.base import OpencodeModel
from opencode_client.unions import KnownEnum, TaggedUnion


class ErrorName(KnownEnum):
    PROVIDER_AUTH_ERROR = "ProviderAuthError"
    UNKNOWN_ERROR = "UnknownError"
    MESSAGE_OUTPUT_LENGTH_ERROR = "MessageOutputLengthError"
    MESSAGE_ABORTED_ERROR = "MessageAbortedError"
    API_ERROR = "APIError"


class ProviderAuthErrorData(OpencodeModel):
    message: str
    provider_id: str = Field(alias="providerID")


class ProviderAuthError(OpencodeModel):
    name: Literal["ProviderAuthError"] = "ProviderAuthError"
    data: ProviderAuthErrorData


class MessageData(OpencodeModel):
    message: str


class UnknownError(OpencodeModel):
    name: Literal["UnknownError"] = "UnknownError"
    data: MessageData


class MessageOutputLengthError(OpencodeModel):
    name: Literal["MessageOutputLengthError"] = "MessageOutputLengthError"
    data: Any = None


class MessageAbortedError(OpencodeModel):
    name: Literal["MessageAbortedError"] = "MessageAbortedError"
    data: MessageData


class MessageAPIErrorData(OpencodeModel):
    """Upstream provider failure as relayed by the server."""

    is_retryable: bool = Field(alias="isRetryable")
    message: str
    response_body: Optional[str] = Field(default=None, alias="responseBody")
    response_headers: Optional[Dict[str, str]] = Field(default=None, alias="responseHeaders")
    status_code: Optional[int] = Field(default=None, alias="statusCode")


class MessageAPIError(OpencodeModel):
    name: Literal["APIError"] = "APIError"
    data: MessageAPIErrorData


class _NamedErrorUnion(TaggedUnion):
    discriminator = "name"
    tags = ErrorName
    variants: ClassVar[Dict[str, Any]] = {
        ErrorName.PROVIDER_AUTH_ERROR.value: ProviderAuthError,
        ErrorName.UNKNOWN_ERROR.value: UnknownError,
        ErrorName.MESSAGE_OUTPUT_LENGTH_ERROR.value: MessageOutputLengthError,
        ErrorName.MESSAGE_ABORTED_ERROR.value: MessageAbortedError,
        ErrorName.API_ERROR.value: MessageAPIError,
    }

    __slots__ = ()

    @property
    def name(self) -> str:
        return self.tag

    def as_provider_auth_error(self) -> ProviderAuthError:
        return self._variant(ErrorName.PROVIDER_AUTH_ERROR)

    def as_unknown_error(self) -> UnknownError:
        return self._variant(ErrorName.UNKNOWN_ERROR)

    def as_message_output_length_error(self) -> MessageOutputLengthError:
        return self._variant(ErrorName.MESSAGE_OUTPUT_LENGTH_ERROR)

    def as_message_aborted_error(self) -> MessageAbortedError:
        return self._variant(ErrorName.MESSAGE_ABORTED_ERROR)

    def as_api_error(self) -> MessageAPIError:
        return self._variant(ErrorName.API_ERROR)


class SessionError(_NamedErrorUnion):
    """Error attached to a ``session.error`` event."""

    __slots__ = ()


class AssistantMessageError(_NamedErrorUnion):
    """Error recorded on an assistant message."""

    __slots__ = ()
