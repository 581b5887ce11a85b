"""NetBox API client bootstrap.

- `ClientBootstrapper`: turns a `ResolvedConfig` into a `ClientHandle`
- `ClientHandle`: read-only, shareable client bound to the API root
- `ApiClient`: protocol the resource layer programs against
"""

from .bootstrap import API_BASE_PATH, AUTH_HEADER, BootstrapResult, ClientBootstrapper
from .contracts import ApiClient
from .handle import ClientHandle
from .url import ParsedURL, parse_server_url

__all__ = [
    "API_BASE_PATH",
    "AUTH_HEADER",
    "ApiClient",
    "BootstrapResult",
    "ClientBootstrapper",
    "ClientHandle",
    "ParsedURL",
    "parse_server_url",
]
