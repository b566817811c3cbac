"""Shared plumbing for resource groups (``client.session``, ``client.file``, ...)."""

from typing import Any, Optional, Tuple

from opencode_client.errors import MissingParameterError
from opencode_client.params import Params
from opencode_client.query import path_segment
from opencode_client.request import RequestExecutor, RequestOptions


def require_id(value: Optional[str], name: str = "id") -> str:
    """Percent-encode a path parameter, refusing empty values.

    Raises
    ------
    MissingParameterError
        When *value* is empty or None; no request is sent.
    """
    if not value:
        raise MissingParameterError(f"missing required {name} parameter")
    return path_segment(value)


def require_params(params: Optional[Params]) -> Params:
    if params is None:
        raise MissingParameterError("missing required params")
    return params


class APIResource:
    """Base class of a resource group; every call goes through the executor."""

    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    def _get(
        self, path: str, params: Optional[Params], cast_to: Any, options: Tuple[RequestOptions, ...]
    ) -> Any:
        return self._executor.execute("GET", path, params, None, cast_to, *options)

    def _post(
        self,
        path: str,
        params: Optional[Params],
        cast_to: Any,
        options: Tuple[RequestOptions, ...],
        body: Any = None,
    ) -> Any:
        if body is None:
            body = params
        return self._executor.execute("POST", path, params, body, cast_to, *options)

    def _patch(
        self,
        path: str,
        params: Optional[Params],
        cast_to: Any,
        options: Tuple[RequestOptions, ...],
        body: Any = None,
    ) -> Any:
        if body is None:
            body = params
        return self._executor.execute("PATCH", path, params, body, cast_to, *options)

    def _put(
        self,
        path: str,
        params: Optional[Params],
        cast_to: Any,
        options: Tuple[RequestOptions, ...],
        body: Any = None,
    ) -> Any:
        if body is None:
            body = params
        return self._executor.execute("PUT", path, params, body, cast_to, *options)

    def _delete(
        self, path: str, params: Optional[Params], cast_to: Any, options: Tuple[RequestOptions, ...]
    ) -> Any:
        return self._executor.execute("DELETE", path, params, None, cast_to, *options)
