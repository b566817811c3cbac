"""Configuration and credential endpoints."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from opencode_client.models.app import ProvidersResponse
from opencode_client.models.auth import ApiAuth, Auth, OAuth, WellKnownAuth
from opencode_client.models.config import Config
from opencode_client.params import DirectoryParams, Params, query_field
from opencode_client.request import RequestOptions
from opencode_client.resources.base import APIResource, require_id, require_params

logger = logging.getLogger(__name__)


@dataclass
class ConfigUpdateParams(Params):
    """The fields of :class:`Config` to change; unset fields are left alone."""

    config: Config
    directory: Optional[str] = query_field("directory", default=None)


@dataclass
class AuthSetParams(Params):
    auth: Union[OAuth, ApiAuth, WellKnownAuth, Auth]
    directory: Optional[str] = query_field("directory", default=None)


class ConfigResource(APIResource):
    """``client.config``."""

    def get(self, params: Optional[DirectoryParams] = None, *options: RequestOptions) -> Config:
        return self._get("config", params, Config, options)

    def update(self, params: Optional[ConfigUpdateParams] = None, *options: RequestOptions) -> Config:
        """Patch the server configuration.

        Parameters
        ----------
        params : ConfigUpdateParams
            Partial config; only the fields that are set are sent.

        Returns
        -------
        Config
            The merged configuration.
        """
        params = require_params(params)
        return self._patch("config", params, Config, options, body=params.config)

    def providers(
        self, params: Optional[DirectoryParams] = None, *options: RequestOptions
    ) -> ProvidersResponse:
        return self._get("config/providers", params, ProvidersResponse, options)


class AuthResource(APIResource):
    """``client.auth``."""

    def set(self, id: str, params: Optional[AuthSetParams] = None, *options: RequestOptions) -> bool:
        """Store credentials for provider *id*.

        Parameters
        ----------
        id : str
            Provider identifier, e.g. ``"anthropic"``.
        params : AuthSetParams
            One of :class:`OAuth`, :class:`ApiAuth` or :class:`WellKnownAuth`.

        Returns
        -------
        bool
        """
        path = f"auth/{require_id(id)}"
        params = require_params(params)
        result = self._put(path, params, bool, options, body=params.auth)
        logger.info("Stored %s credentials for provider %s", params.auth.type, id)
        return result
