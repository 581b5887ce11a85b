"""Configuration resolution for the NetBox provider.

Each field is selected in priority order: explicit configuration value, then
environment variable, then built-in default. All checks run on every call and
their diagnostics accumulate; a `ResolvedConfig` is produced only when no
error was recorded.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from nbprovider.sdk.diagnostics import DiagnosticKind, Diagnostics

from .env import EnvironmentOverrides, env_var_name
from .models import (
    API_TOKEN,
    CA_CERT_FILE,
    DEFAULT_REQUEST_TIMEOUT,
    HEADERS,
    INSECURE_SKIP_VERIFY,
    REQUEST_TIMEOUT,
    SERVER_URL,
    STRIP_TRAILING_SLASHES,
    RawConfig,
    ResolvedConfig,
    is_unknown,
)

logger = logging.getLogger(__name__)

# Human-readable labels used in diagnostic texts
_LABELS = {
    SERVER_URL: "NetBox Server URL",
    API_TOKEN: "NetBox API Token",
    STRIP_TRAILING_SLASHES: "trailing slash stripping setting",
    INSECURE_SKIP_VERIFY: "TLS verification setting",
    REQUEST_TIMEOUT: "request timeout",
    CA_CERT_FILE: "CA certificate file",
    HEADERS: "custom headers",
}

_REQUIRED = (SERVER_URL, API_TOKEN)

SOURCE_CONFIG = "config"
SOURCE_ENV = "env"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of `ConfigResolver.resolve`.

    `config` is None exactly when `diagnostics` contains at least one error.
    """

    config: ResolvedConfig | None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return self.config is not None


def _unknown_detail(key: str) -> str:
    detail = (
        f"The provider cannot create the NetBox API client as there is an unknown "
        f"configuration value for the {_LABELS[key]}. Either apply the source of the "
        f"value first or set the value statically in the configuration"
    )
    if key == HEADERS:
        return detail + "."
    return detail + f", or use the {env_var_name(key)} environment variable."


def _missing_detail(key: str) -> str:
    return (
        f"The provider cannot create the NetBox API client as there is a missing "
        f"configuration value for the {_LABELS[key]}. Set the `{key}` value in the "
        f"configuration or use the {env_var_name(key)} environment variable. "
        f"If either is already set, ensure the value is not empty."
    )


class ConfigResolver:
    """Merge explicit configuration with environment fallbacks and validate the result.

    Args:
        env: Environment snapshot to consult. When omitted, the process
            environment is snapshotted at the start of every `resolve` call.

    Example:
        >>> env = EnvironmentOverrides({"NETBOX_API_TOKEN": "secret"})
        >>> result = ConfigResolver(env).resolve(RawConfig(server_url="https://netbox.local/"))
        >>> result.config.server_url
        'https://netbox.local'
        >>> [d.kind.value for d in result.diagnostics]
        ['normalization_warning']
    """

    def __init__(self, env: EnvironmentOverrides | None = None) -> None:
        self._env = env

    def resolve(self, raw: RawConfig) -> ResolveResult:
        env = self._env if self._env is not None else EnvironmentOverrides.from_environ()
        diagnostics = Diagnostics()
        sources: dict[str, str] = {}

        unknown = self._check_unknown(raw, diagnostics)

        values: dict[str, Any] = {}
        for key in _REQUIRED:
            if key in unknown:
                continue
            value, sources[key] = self._select_string(raw, env, key)
            # An empty string counts as absent
            if not value:
                diagnostics.add_error(
                    key,
                    DiagnosticKind.MISSING_REQUIRED_VALUE,
                    f"Missing {_LABELS[key]}",
                    _missing_detail(key),
                )
                continue
            values[key] = value

        if STRIP_TRAILING_SLASHES not in unknown:
            values[STRIP_TRAILING_SLASHES], sources[STRIP_TRAILING_SLASHES] = (
                self._select_strip_flag(raw, env)
            )

        if INSECURE_SKIP_VERIFY not in unknown:
            values[INSECURE_SKIP_VERIFY], sources[INSECURE_SKIP_VERIFY] = (
                self._select_insecure_flag(raw, env)
            )

        if REQUEST_TIMEOUT not in unknown:
            timeout, sources[REQUEST_TIMEOUT] = self._select_timeout(raw, env, diagnostics)
            if timeout is not None:
                values[REQUEST_TIMEOUT] = timeout

        if CA_CERT_FILE not in unknown:
            ca_cert_file, sources[CA_CERT_FILE] = self._select_string(raw, env, CA_CERT_FILE)
            values[CA_CERT_FILE] = ca_cert_file or None

        if HEADERS not in unknown:
            headers = self._check_headers(raw, diagnostics)
            if headers is not None:
                values[HEADERS] = headers

        if SERVER_URL in values and values.get(STRIP_TRAILING_SLASHES):
            values[SERVER_URL] = self._strip_trailing_slashes(values[SERVER_URL], diagnostics)

        if (
            values.get(INSECURE_SKIP_VERIFY)
            and SERVER_URL in values
            and values[SERVER_URL].lower().startswith("https://")
        ):
            diagnostics.add_warning(
                INSECURE_SKIP_VERIFY,
                DiagnosticKind.INSECURE_TRANSPORT,
                "TLS certificate verification is disabled",
                "The server certificate of the NetBox instance will not be verified. "
                "Only use `insecure_skip_verify` against trusted test instances.",
            )

        if diagnostics.has_error():
            logger.debug(
                "Provider configuration has errors",
                extra={"error_fields": sorted(diagnostics.fields())},
            )
            return ResolveResult(config=None, diagnostics=diagnostics)

        config = ResolvedConfig(**values)
        logger.debug(
            "Resolved provider configuration",
            extra={"server_url": config.server_url, "sources": sources},
        )
        return ResolveResult(config=config, diagnostics=diagnostics)

    def _check_unknown(self, raw: RawConfig, diagnostics: Diagnostics) -> set[str]:
        unknown = set()
        for key in _LABELS:
            if is_unknown(getattr(raw, key)):
                unknown.add(key)
                diagnostics.add_error(
                    key,
                    DiagnosticKind.UNKNOWN_AT_RESOLUTION_TIME,
                    f"Unknown {_LABELS[key]}",
                    _unknown_detail(key),
                )
        return unknown

    def _select_string(
        self, raw: RawConfig, env: EnvironmentOverrides, key: str
    ) -> tuple[str | None, str]:
        explicit = getattr(raw, key)
        if explicit is not None:
            return explicit, SOURCE_CONFIG
        from_env = env.lookup(key)
        if from_env is not None:
            return from_env, SOURCE_ENV
        return None, SOURCE_DEFAULT

    def _select_strip_flag(self, raw: RawConfig, env: EnvironmentOverrides) -> tuple[bool, str]:
        if raw.strip_trailing_slashes_from_url is not None:
            return raw.strip_trailing_slashes_from_url, SOURCE_CONFIG
        from_env = env.lookup(STRIP_TRAILING_SLASHES)
        if from_env is not None:
            # Only the literal "false" switches stripping off
            return from_env != "false", SOURCE_ENV
        return True, SOURCE_DEFAULT

    def _select_insecure_flag(self, raw: RawConfig, env: EnvironmentOverrides) -> tuple[bool, str]:
        if raw.insecure_skip_verify is not None:
            return raw.insecure_skip_verify, SOURCE_CONFIG
        from_env = env.flag(INSECURE_SKIP_VERIFY)
        if from_env is not None:
            return from_env, SOURCE_ENV
        return False, SOURCE_DEFAULT

    def _select_timeout(
        self, raw: RawConfig, env: EnvironmentOverrides, diagnostics: Diagnostics
    ) -> tuple[float | None, str]:
        if raw.request_timeout is not None:
            value, source, shown = raw.request_timeout, SOURCE_CONFIG, repr(raw.request_timeout)
        elif (from_env := env.lookup(REQUEST_TIMEOUT)) is not None:
            source, shown = SOURCE_ENV, repr(from_env)
            try:
                value = float(from_env)
            except ValueError:
                value = math.nan
        else:
            return DEFAULT_REQUEST_TIMEOUT, SOURCE_DEFAULT

        if not math.isfinite(value) or value <= 0:
            where = (
                "`request_timeout`"
                if source == SOURCE_CONFIG
                else f"the {env_var_name(REQUEST_TIMEOUT)} environment variable"
            )
            diagnostics.add_error(
                REQUEST_TIMEOUT,
                DiagnosticKind.INVALID_VALUE,
                "Invalid request timeout",
                f"The request timeout must be a positive number of seconds, "
                f"got {shown} from {where}.",
            )
            return None, source
        return value, source

    def _check_headers(self, raw: RawConfig, diagnostics: Diagnostics) -> dict[str, str] | None:
        headers = dict(raw.headers or {})
        reserved = sorted(name for name in headers if name.lower() == "authorization")
        if reserved:
            diagnostics.add_error(
                HEADERS,
                DiagnosticKind.INVALID_VALUE,
                "Reserved header in `headers`",
                "The Authorization header is derived from `api_token` and cannot be "
                f"set through `headers` (found: {', '.join(reserved)}).",
            )
            return None
        return headers

    def _strip_trailing_slashes(self, server_url: str, diagnostics: Diagnostics) -> str:
        # Trailing slashes break the path concatenation with the API base path
        stripped = server_url.rstrip("/")
        if stripped == server_url:
            return server_url

        if not stripped:
            diagnostics.add_error(
                SERVER_URL,
                DiagnosticKind.MALFORMED_URL,
                "Invalid NetBox Server URL",
                f"The `server_url` value {server_url!r} consists only of slashes.",
            )
            return server_url

        diagnostics.add_warning(
            STRIP_TRAILING_SLASHES,
            DiagnosticKind.NORMALIZATION_WARNING,
            "Stripped trailing slashes from the `server_url` parameter",
            f"Trailing slashes in the `server_url` parameter lead to problems in most "
            f"setups, so all trailing slashes were stripped ({server_url!r} became "
            f"{stripped!r}). Use the `{STRIP_TRAILING_SLASHES}` parameter to disable "
            f"this feature or remove all trailing slashes in the `server_url` to "
            f"disable this warning.",
        )
        return stripped
