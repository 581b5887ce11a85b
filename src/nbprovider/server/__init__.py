"""Provider surface: schema, metadata and the `configure` entry point."""

from .provider import PROVIDER_TYPE_NAME, ConfigureResponse, NetboxProvider
from .schema import PROVIDER_SCHEMA, AttributeSchema, ProviderSchema

__all__ = [
    "PROVIDER_SCHEMA",
    "PROVIDER_TYPE_NAME",
    "AttributeSchema",
    "ConfigureResponse",
    "NetboxProvider",
    "ProviderSchema",
]
