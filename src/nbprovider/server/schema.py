"""Schema of the NetBox provider configuration block."""

from __future__ import annotations

from typing import Literal

from nbprovider.sdk.config.env import ENV_KEYS, env_var_name
from nbprovider.sdk.config.models import (
    API_TOKEN,
    CA_CERT_FILE,
    DEFAULT_REQUEST_TIMEOUT,
    HEADERS,
    INSECURE_SKIP_VERIFY,
    REQUEST_TIMEOUT,
    SERVER_URL,
    STRIP_TRAILING_SLASHES,
)
from nbprovider.sdk.models import SdkBaseModel


class AttributeSchema(SdkBaseModel):
    name: str
    type: Literal["string", "bool", "number", "map(string)"]
    description: str
    optional: bool = True
    sensitive: bool = False
    env_var: str | None = None


class ProviderSchema(SdkBaseModel):
    attributes: tuple[AttributeSchema, ...]

    def attribute(self, name: str) -> AttributeSchema:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        raise KeyError(name)

    @property
    def names(self) -> list[str]:
        return [attribute.name for attribute in self.attributes]


def _attribute(name: str, type_: str, description: str, sensitive: bool = False) -> AttributeSchema:
    return AttributeSchema(
        name=name,
        type=type_,
        description=description,
        sensitive=sensitive,
        env_var=env_var_name(name) if name in ENV_KEYS else None,
    )


# All attributes are optional in the schema; required values may come from the environment.
PROVIDER_SCHEMA = ProviderSchema(
    attributes=(
        _attribute(
            SERVER_URL,
            "string",
            "Location of NetBox server including scheme (http or https) and optional port.",
        ),
        _attribute(API_TOKEN, "string", "NetBox API authentication token.", sensitive=True),
        _attribute(
            STRIP_TRAILING_SLASHES,
            "bool",
            "If true, strip trailing slashes from the `server_url` parameter and print a "
            "warning when doing so. Defaults to `true`.",
        ),
        _attribute(
            INSECURE_SKIP_VERIFY,
            "bool",
            "Skip verification of the server's TLS certificate. Defaults to `false`.",
        ),
        _attribute(
            REQUEST_TIMEOUT,
            "number",
            f"Timeout for each API request in seconds. Defaults to `{DEFAULT_REQUEST_TIMEOUT:g}`.",
        ),
        _attribute(
            CA_CERT_FILE,
            "string",
            "Path to a PEM file with the certificates used to verify the server.",
        ),
        _attribute(HEADERS, "map(string)", "Set these headers on all requests to NetBox."),
    )
)
