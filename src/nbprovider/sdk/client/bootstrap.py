"""Construct an authenticated NetBox API client from a resolved configuration.

Failures are returned as diagnostics. Nothing in this module connects to the
server; the first connection is made when a request is issued.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

import httpx

from nbprovider.sdk.config.models import CA_CERT_FILE, HEADERS, SERVER_URL, ResolvedConfig
from nbprovider.sdk.core.version import PACKAGE_NAME, PACKAGE_VERSION
from nbprovider.sdk.diagnostics import DiagnosticKind, Diagnostics
from nbprovider.sdk.errors import MalformedURLError

from .handle import ClientHandle
from .transport import build_transport, log_request, log_response, origin_guard, scheme_guard
from .url import parse_server_url

logger = logging.getLogger(__name__)

API_BASE_PATH: Final = "/api"
AUTH_HEADER: Final = "Authorization"


@dataclass(frozen=True)
class BootstrapResult:
    """Outcome of `ClientBootstrapper.bootstrap`.

    `client` is None exactly when `diagnostics` contains at least one error.
    """

    client: ClientHandle | None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return self.client is not None


class ClientBootstrapper:
    """Build `ClientHandle` instances.

    Args:
        transport: Transport to use instead of a freshly built
            `httpx.HTTPTransport`. Mostly useful with `httpx.MockTransport` in tests.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def bootstrap(self, config: ResolvedConfig) -> BootstrapResult:
        diagnostics = Diagnostics()

        logger.debug("Initializing NetBox client", extra={"server_url": config.server_url})

        try:
            parsed = parse_server_url(config.server_url)
        except MalformedURLError as exc:
            diagnostics.add_error(
                SERVER_URL,
                DiagnosticKind.MALFORMED_URL,
                "Invalid NetBox Server URL",
                f"The provider cannot create the NetBox API client as the `server_url` "
                f"value {config.server_url!r} is not a valid URL: {exc.reason}.",
            )
            return BootstrapResult(client=None, diagnostics=diagnostics)

        schemes = (parsed.scheme,)
        base_path = parsed.path + API_BASE_PATH
        logger.debug(
            "Initializing NetBox API runtime client",
            extra={"host": parsed.netloc, "schemes": list(schemes), "base_path": base_path},
        )

        transport = self._transport
        if transport is None:
            try:
                transport = build_transport(
                    parsed.scheme,
                    insecure_skip_verify=config.insecure_skip_verify,
                    ca_cert_file=config.ca_cert_file,
                )
            except OSError as exc:
                # ssl.SSLError is an OSError
                diagnostics.add_error(
                    CA_CERT_FILE if config.ca_cert_file else SERVER_URL,
                    DiagnosticKind.TRANSPORT_CONSTRUCTION_FAILURE,
                    "Unable to configure TLS for the NetBox API client",
                    f"The TLS settings could not be loaded: {exc}",
                )
                return BootstrapResult(client=None, diagnostics=diagnostics)

        try:
            headers = httpx.Headers(
                {"Accept": "application/json", "User-Agent": f"{PACKAGE_NAME}/{PACKAGE_VERSION}"}
            )
            headers.update(config.headers)
            headers[AUTH_HEADER] = f"Token {config.api_token}"
            client = httpx.Client(
                base_url=parsed.origin + base_path,
                headers=headers,
                timeout=httpx.Timeout(config.request_timeout),
                transport=transport,
                follow_redirects=False,
                event_hooks={
                    "request": [scheme_guard(schemes), origin_guard(parsed.origin), log_request],
                    "response": [log_response],
                },
            )
        except (ValueError, httpx.InvalidURL) as exc:
            # Header values must be encodable as ASCII
            if self._transport is None:
                transport.close()
            diagnostics.add_error(
                HEADERS if config.headers else SERVER_URL,
                DiagnosticKind.TRANSPORT_CONSTRUCTION_FAILURE,
                "Unable to create the NetBox API client",
                f"The HTTP client could not be created: {exc}",
            )
            return BootstrapResult(client=None, diagnostics=diagnostics)

        handle = ClientHandle(
            client,
            scheme=parsed.scheme,
            host=parsed.netloc,
            base_path=base_path,
            timeout=config.request_timeout,
        )
        return BootstrapResult(client=handle, diagnostics=diagnostics)
