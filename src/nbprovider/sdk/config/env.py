"""Environment-derived fallbacks for provider configuration.

The process environment is read once into an immutable snapshot so that
resolution is a pure function of the raw configuration and the snapshot.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Final

from .models import (
    API_TOKEN,
    CA_CERT_FILE,
    INSECURE_SKIP_VERIFY,
    REQUEST_TIMEOUT,
    SERVER_URL,
    STRIP_TRAILING_SLASHES,
)

ENV_PREFIX: Final = "NETBOX_"

# Configuration keys that may be supplied through the environment.
ENV_KEYS: Final = (
    SERVER_URL,
    API_TOKEN,
    STRIP_TRAILING_SLASHES,
    INSECURE_SKIP_VERIFY,
    REQUEST_TIMEOUT,
    CA_CERT_FILE,
)


def env_var_name(key: str) -> str:
    """Return the environment variable that backs a configuration key.

    >>> env_var_name("server_url")
    'NETBOX_SERVER_URL'
    """
    return f"{ENV_PREFIX}{key.upper()}"


class EnvironmentOverrides(Mapping[str, str]):
    """Read-only snapshot of environment variables.

    Example:
        >>> env = EnvironmentOverrides({"NETBOX_SERVER_URL": "https://netbox.local"})
        >>> env.lookup("server_url")
        'https://netbox.local'
        >>> env.lookup("api_token") is None
        True
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values or {}))

    @classmethod
    def from_environ(cls) -> EnvironmentOverrides:
        """Snapshot the current process environment."""
        return cls(os.environ)

    def lookup(self, key: str) -> str | None:
        """Get the environment value for a configuration key.

        Empty strings are reported as absent.
        """
        value = self._values.get(env_var_name(key))
        return value or None

    def flag(self, key: str) -> bool | None:
        """Interpret a configuration key's environment value as an opt-in flag.

        Returns True for "1", "true" or "yes" (case insensitive), False for any
        other set value, and None when the variable is unset.
        """
        value = self.lookup(key)
        if value is None:
            return None
        return value.lower() in ("1", "true", "yes")

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        names = sorted(name for name in self._values if name.startswith(ENV_PREFIX))
        return f"EnvironmentOverrides({names})"
