"""Contract between the bootstrapped client and the resources that consume it."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx


@runtime_checkable
class ApiClient(Protocol):
    """Operations the resource layer may use on a NetBox API client."""

    @property
    def scheme(self) -> str:
        """Scheme every request is sent with."""

    @property
    def host(self) -> str:
        """Host (and port) of the NetBox server."""

    @property
    def base_path(self) -> str:
        """API root path all request paths are relative to."""

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request to a path below the API root.

        Absolute URLs for any other scheme, host or port are rejected before
        anything is sent.
        """

    def get(self, path: str, **kwargs: Any) -> httpx.Response: ...

    def post(self, path: str, **kwargs: Any) -> httpx.Response: ...

    def put(self, path: str, **kwargs: Any) -> httpx.Response: ...

    def patch(self, path: str, **kwargs: Any) -> httpx.Response: ...

    def delete(self, path: str, **kwargs: Any) -> httpx.Response: ...

    def close(self) -> None: ...
