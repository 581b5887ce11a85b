"""Load provider configuration from YAML files and plain mappings.

The file format is a single `netbox:` block:

```yaml
netbox:
  server_url: "https://netbox.example.com"
  api_token: "${NETBOX_TOKEN_FROM_VAULT}"
  strip_trailing_slashes_from_url: true
```

A string value of the exact form `${VAR}` is a reference. It takes the value of
`VAR` from the environment snapshot; when `VAR` is not set the field is marked
`UNKNOWN`, as its value has not been computed yet.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from nbprovider.sdk.diagnostics import DiagnosticKind, Diagnostics
from nbprovider.sdk.errors import ConfigFileError

from .env import EnvironmentOverrides
from .models import UNKNOWN, RawConfig

__all__ = ["PROVIDER_BLOCK", "load_raw_config", "raw_config_from_mapping"]

PROVIDER_BLOCK = "netbox"

REFERENCE_PATTERN = re.compile(r"^\$\{([A-Za-z0-9_]+)\}$")


def _resolve_reference(value: Any, env: EnvironmentOverrides) -> Any:
    if not isinstance(value, str):
        return value
    match = REFERENCE_PATTERN.match(value)
    if not match:
        return value
    return env.get(match.group(1), UNKNOWN)


def raw_config_from_mapping(
    data: Mapping[str, Any], env: EnvironmentOverrides | None = None
) -> tuple[RawConfig | None, Diagnostics]:
    """Build a RawConfig from a mapping of configuration keys.

    Invalid fields are reported as errors instead of raising, one diagnostic
    per offending field.

    Args:
        data: Mapping of configuration keys to values
        env: Environment snapshot used for `${VAR}` references

    Returns:
        The RawConfig (None when any field was invalid) and the diagnostics
    """
    env = env if env is not None else EnvironmentOverrides.from_environ()
    diagnostics = Diagnostics()
    values = {key: _resolve_reference(value, env) for key, value in data.items()}

    try:
        return RawConfig.model_validate(values), diagnostics
    except ValidationError as exc:
        seen: set[str] = set()
        for error in exc.errors():
            loc = error.get("loc") or ("<root>",)
            key = str(loc[0])
            if key in seen:
                continue
            seen.add(key)
            if error["type"] == "extra_forbidden":
                summary = f"Unsupported attribute `{key}`"
                detail = f"`{key}` is not a NetBox provider attribute."
            else:
                summary = f"Invalid value for `{key}`"
                detail = _describe_type_error(key, data.get(key))
            diagnostics.add_error(key, DiagnosticKind.INVALID_VALUE, summary, detail)
        return None, diagnostics


def _describe_type_error(key: str, value: Any) -> str:
    expected = {
        "server_url": "a string",
        "api_token": "a string",
        "ca_cert_file": "a string",
        "strip_trailing_slashes_from_url": "a boolean",
        "insecure_skip_verify": "a boolean",
        "request_timeout": "a number of seconds",
        "headers": "a mapping of header names to string values",
    }.get(key, "a valid value")
    return f"`{key}` must be {expected}, got {type(value).__name__}."


def load_raw_config(
    path: Path | str, env: EnvironmentOverrides | None = None
) -> tuple[RawConfig | None, Diagnostics]:
    """Load the `netbox:` block of a YAML configuration file.

    Raises:
        ConfigFileError: If the file cannot be read or parsed, or is not a mapping
    """
    path = Path(path)
    try:
        with open(path) as f:
            document = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigFileError(f"Cannot read provider config at {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigFileError(f"Invalid YAML in provider config {path}: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigFileError(f"Provider config {path} must be a mapping")

    block = document.get(PROVIDER_BLOCK) or {}
    if not isinstance(block, dict):
        raise ConfigFileError(f"The `{PROVIDER_BLOCK}` block in {path} must be a mapping")

    return raw_config_from_mapping(block, env)
