"""Pydantic models for provider configuration.

`RawConfig` is the configuration as the host framework hands it over. Each
field is either absent/null (`None`), unknown at resolution time (`UNKNOWN`),
or a concrete value. `ResolvedConfig` is the fully validated result.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import ConfigDict, Field, StrictFloat, StrictInt

from nbprovider.sdk.models import SdkBaseModel

# Configuration keys. These double as the attribute paths used in diagnostics.
SERVER_URL: Final = "server_url"
API_TOKEN: Final = "api_token"
STRIP_TRAILING_SLASHES: Final = "strip_trailing_slashes_from_url"
INSECURE_SKIP_VERIFY: Final = "insecure_skip_verify"
REQUEST_TIMEOUT: Final = "request_timeout"
CA_CERT_FILE: Final = "ca_cert_file"
HEADERS: Final = "headers"

DEFAULT_REQUEST_TIMEOUT: Final = 10.0


class Unknown:
    """Marker for a value that the caller's pipeline has not computed yet."""

    _instance: Unknown | None = None

    def __new__(cls) -> Unknown:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __reduce__(self) -> str:
        return "UNKNOWN"


UNKNOWN: Final = Unknown()


def is_unknown(value: Any) -> bool:
    return value is UNKNOWN


class RawConfig(SdkBaseModel):
    """Provider configuration as supplied by the caller.

    Attributes:
        server_url: NetBox server URL, e.g. https://netbox.example.com
        api_token: NetBox API token
        strip_trailing_slashes_from_url: Strip trailing slashes from server_url (default true)
        insecure_skip_verify: Skip TLS certificate verification (default false)
        request_timeout: Per-request timeout in seconds (default 10)
        ca_cert_file: PEM bundle used to verify the server certificate
        headers: Extra static headers sent on every request

    Example:
        >>> raw = RawConfig(server_url="https://netbox.example.com", api_token="0123abcd")
        >>> raw.strip_trailing_slashes_from_url is None
        True
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    server_url: str | Unknown | None = None
    api_token: str | Unknown | None = Field(default=None, repr=False)
    strip_trailing_slashes_from_url: bool | Unknown | None = None
    insecure_skip_verify: bool | Unknown | None = None
    request_timeout: StrictInt | StrictFloat | Unknown | None = None
    ca_cert_file: str | Unknown | None = None
    headers: dict[str, str] | Unknown | None = None


class ResolvedConfig(SdkBaseModel):
    """Validated provider configuration.

    Invariants: `server_url` and `api_token` are non-empty and
    `strip_trailing_slashes_from_url` is a concrete boolean.
    """

    server_url: str = Field(min_length=1)
    api_token: str = Field(min_length=1, repr=False)
    strip_trailing_slashes_from_url: bool = True
    insecure_skip_verify: bool = False
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    ca_cert_file: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
