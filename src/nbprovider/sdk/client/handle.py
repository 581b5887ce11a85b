"""Read-only handle on a bootstrapped NetBox API client."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx


class ClientHandle:
    """Opaque NetBox API client shared by all downstream operations.

    The handle wraps an `httpx.Client` bound to the server's scheme, host and
    API root path. It exposes no way to change that binding; every request is
    made relative to `base_path` and carries the static authentication header.
    Absolute URLs are accepted only when they point at the same scheme, host
    and port.
    `httpx.Client` pools connections and is safe to use from several threads.

    Example:
        >>> with bootstrapper.bootstrap(config).client as client:  # doctest: +SKIP
        ...     client.get("/dcim/devices/", params={"limit": 10}).json()
    """

    __slots__ = ("_client", "_scheme", "_host", "_base_path", "_timeout")

    def __init__(
        self,
        client: httpx.Client,
        *,
        scheme: str,
        host: str,
        base_path: str,
        timeout: float,
    ) -> None:
        self._client = client
        self._scheme = scheme
        self._host = host
        self._base_path = base_path
        self._timeout = timeout

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def schemes(self) -> tuple[str, ...]:
        return (self._scheme,)

    @property
    def host(self) -> str:
        return self._host

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request to a path below the API root.

        Args:
            method: HTTP method
            path: Path relative to the API root, e.g. "/dcim/devices/"
            **kwargs: Passed through to `httpx.Client.request` (params, json, ...)

        Raises:
            SchemeNotAllowedError: If `path` is an absolute URL with another scheme
            OriginNotAllowedError: If `path` is an absolute URL for another host or port
        """
        return self._client.request(method, path, **kwargs)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)

    def close(self) -> None:
        """Release pooled connections. Call once at the end of the plugin session."""
        self._client.close()

    def __enter__(self) -> ClientHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ClientHandle(base_url={self.base_url!r}, timeout={self._timeout})"
