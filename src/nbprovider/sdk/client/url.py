"""Server URL parsing."""

from __future__ import annotations

import ipaddress
import re
from typing import Final
from urllib.parse import urlsplit

from nbprovider.sdk.errors import MalformedURLError
from nbprovider.sdk.models import SdkBaseModel

DEFAULT_SCHEME: Final = "http"
SUPPORTED_SCHEMES: Final = ("http", "https")

_HOST_LABEL = r"(?!-)[A-Za-z0-9_-]{1,63}(?<!-)"
_HOSTNAME_PATTERN = re.compile(rf"^{_HOST_LABEL}(\.{_HOST_LABEL})*\.?$")


class ParsedURL(SdkBaseModel):
    """Server URL split into the parts the transport needs."""

    scheme: str
    host: str
    port: int | None = None
    path: str = ""

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return host if self.port is None else f"{host}:{self.port}"

    @property
    def origin(self) -> str:
        return f"{self.scheme}://{self.netloc}"


def parse_server_url(url: str) -> ParsedURL:
    """Parse a NetBox server URL.

    A URL without a scheme is treated as plain `http`. Only http and https are
    accepted, and the URL must not carry credentials, a query or a fragment.

    Args:
        url: The server URL, e.g. "https://netbox.example.com/netbox"

    Returns:
        The parsed URL

    Raises:
        MalformedURLError: If the URL cannot be used to reach a NetBox server

    Example:
        >>> parse_server_url("netbox.local:8000").origin
        'http://netbox.local:8000'
    """
    if not url:
        raise MalformedURLError(url, "the URL is empty")

    candidate = url if "://" in url else f"{DEFAULT_SCHEME}://{url}"
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise MalformedURLError(url, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise MalformedURLError(
            url, f"unsupported scheme {parts.scheme!r}, expected one of {', '.join(SUPPORTED_SCHEMES)}"
        )

    host = parts.hostname
    if not host:
        raise MalformedURLError(url, "the URL has no host")

    if "[" in parts.netloc:
        try:
            ipaddress.IPv6Address(host)
        except ValueError as exc:
            raise MalformedURLError(url, f"invalid IPv6 address {host!r}") from exc
    elif not _HOSTNAME_PATTERN.match(host):
        raise MalformedURLError(url, f"invalid host {host!r}")

    if port == 0:
        raise MalformedURLError(url, "port 0 is not a valid port")
    if parts.username is not None or parts.password is not None:
        raise MalformedURLError(url, "credentials in the URL are not supported, use api_token")
    if parts.query or parts.fragment:
        raise MalformedURLError(url, "query strings and fragments are not supported")

    return ParsedURL(scheme=scheme, host=host, port=port, path=parts.path)
