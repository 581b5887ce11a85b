"""httpx transport construction and request/response hooks.

Building a transport performs no network I/O: connections are opened by the
connection pool on first use.
"""

from __future__ import annotations

import logging
import ssl
from collections.abc import Callable, Iterable

import httpx

from nbprovider.sdk.errors import OriginNotAllowedError, SchemeNotAllowedError

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})


def build_ssl_context(
    *, insecure_skip_verify: bool = False, ca_cert_file: str | None = None
) -> ssl.SSLContext:
    """Create the TLS context used for https connections.

    Raises:
        OSError: If `ca_cert_file` cannot be read
        ssl.SSLError: If `ca_cert_file` does not contain usable certificates
    """
    context = ssl.create_default_context(cafile=ca_cert_file)
    if insecure_skip_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_transport(
    scheme: str, *, insecure_skip_verify: bool = False, ca_cert_file: str | None = None
) -> httpx.HTTPTransport:
    """Create the HTTP transport for a single scheme.

    TLS is configured only for https; plain http transports never load certificates.
    """
    if scheme == "https":
        verify: ssl.SSLContext | bool = build_ssl_context(
            insecure_skip_verify=insecure_skip_verify, ca_cert_file=ca_cert_file
        )
    else:
        verify = False
    return httpx.HTTPTransport(verify=verify, retries=0)


def redact_headers(headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    return {
        name: REDACTED if name.lower() in _SENSITIVE_HEADERS else value
        for name, value in headers
    }


def scheme_guard(schemes: tuple[str, ...]) -> Callable[[httpx.Request], None]:
    """Build a request hook rejecting requests outside the accepted schemes."""

    def check_scheme(request: httpx.Request) -> None:
        if request.url.scheme not in schemes:
            logger.warning(
                "Rejected request with disallowed scheme",
                extra={"scheme": request.url.scheme, "allowed_schemes": list(schemes)},
            )
            raise SchemeNotAllowedError(request.url.scheme, schemes)

    return check_scheme


def origin_guard(origin: str) -> Callable[[httpx.Request], None]:
    """Build a request hook rejecting requests to any host or port but `origin`.

    The authentication header is attached to every request, so an absolute URL
    pointing elsewhere must never be sent.
    """
    allowed = httpx.URL(origin)

    def check_origin(request: httpx.Request) -> None:
        url = request.url
        if (url.scheme, url.host, url.port) != (allowed.scheme, allowed.host, allowed.port):
            target = f"{url.scheme}://{url.netloc.decode('ascii')}"
            logger.warning(
                "Rejected request outside the NetBox server",
                extra={"target": target, "origin": origin},
            )
            raise OriginNotAllowedError(target, origin)

    return check_origin


def log_request(request: httpx.Request) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        "NetBox API request %s %s",
        request.method,
        request.url,
        extra={
            "http_method": request.method,
            "http_url": str(request.url),
            "http_headers": redact_headers(request.headers.items()),
        },
    )


def log_response(response: httpx.Response) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    request = response.request
    logger.debug(
        "NetBox API response %s %s -> %s",
        request.method,
        request.url,
        response.status_code,
        extra={
            "http_method": request.method,
            "http_url": str(request.url),
            "http_status": response.status_code,
            "http_headers": redact_headers(response.headers.items()),
        },
    )
