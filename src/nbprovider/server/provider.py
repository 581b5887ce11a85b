"""The NetBox provider: configuration entry point for resources and data sources.

`configure` is called once per plugin session. It resolves the configuration,
bootstraps the API client and hands the same `ClientHandle` to every resource
and data source.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from nbprovider.sdk.client import ClientBootstrapper, ClientHandle
from nbprovider.sdk.config import ConfigResolver, EnvironmentOverrides, RawConfig
from nbprovider.sdk.diagnostics import Diagnostics

from .schema import PROVIDER_SCHEMA, ProviderSchema

logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "netbox"

ResourceFactory = Callable[[], Any]


@dataclass
class ConfigureResponse:
    """Result of `NetboxProvider.configure`.

    On success `resource_data` and `data_source_data` hold the same client
    handle; when any error was reported both are None.
    """

    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    resource_data: ClientHandle | None = None
    data_source_data: ClientHandle | None = None


class NetboxProvider:
    """Provider for managing NetBox records.

    Args:
        bootstrapper: Bootstrapper used to build the API client
        resources: Factories for the resources this provider serves
        data_sources: Factories for the data sources this provider serves
    """

    def __init__(
        self,
        bootstrapper: ClientBootstrapper | None = None,
        resources: list[ResourceFactory] | None = None,
        data_sources: list[ResourceFactory] | None = None,
    ) -> None:
        self._bootstrapper = bootstrapper or ClientBootstrapper()
        self._resources = list(resources or [])
        self._data_sources = list(data_sources or [])

    def metadata(self) -> str:
        return PROVIDER_TYPE_NAME

    def schema(self) -> ProviderSchema:
        return PROVIDER_SCHEMA

    def configure(
        self, raw: RawConfig, env: EnvironmentOverrides | None = None
    ) -> ConfigureResponse:
        """Resolve the configuration and bootstrap the shared API client.

        Args:
            raw: Configuration as supplied by the host framework
            env: Environment snapshot; the process environment when omitted

        Returns:
            ConfigureResponse with every diagnostic from resolution and bootstrap
        """
        response = ConfigureResponse()

        resolved = ConfigResolver(env).resolve(raw)
        response.diagnostics.extend(resolved.diagnostics)
        if resolved.config is None:
            logger.info(
                "NetBox provider configuration is invalid",
                extra={"error_count": len(response.diagnostics.errors)},
            )
            return response

        result = self._bootstrapper.bootstrap(resolved.config)
        response.diagnostics.extend(result.diagnostics)
        if result.client is None:
            logger.info(
                "NetBox API client could not be created",
                extra={"error_count": len(response.diagnostics.errors)},
            )
            return response

        response.resource_data = result.client
        response.data_source_data = result.client
        return response

    def resources(self) -> list[ResourceFactory]:
        return list(self._resources)

    def data_sources(self) -> list[ResourceFactory]:
        return list(self._data_sources)
