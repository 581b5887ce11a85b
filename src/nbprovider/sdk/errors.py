"""Exception types raised by the nbprovider SDK.

Validation problems are reported as diagnostics, not exceptions. These classes
cover caller errors and misuse of a bootstrapped client.
"""


class NbproviderError(Exception):
    """Base class for all nbprovider exceptions."""


class ConfigFileError(NbproviderError):
    """Raised when a provider configuration file cannot be read or is not a mapping."""


class MalformedURLError(NbproviderError):
    """Raised when a server URL cannot be parsed into scheme, host and path."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Invalid server URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class SchemeNotAllowedError(NbproviderError):
    """Raised when a request targets a scheme the client was not bootstrapped for."""

    def __init__(self, scheme: str, allowed: tuple[str, ...]):
        super().__init__(
            f"Scheme {scheme!r} is not allowed for this client (allowed: {', '.join(allowed)})"
        )
        self.scheme = scheme
        self.allowed = allowed


class OriginNotAllowedError(NbproviderError):
    """Raised when a request targets a host or port other than the NetBox server."""

    def __init__(self, url: str, origin: str):
        super().__init__(f"Request to {url!r} is outside the NetBox server {origin!r}")
        self.url = url
        self.origin = origin
