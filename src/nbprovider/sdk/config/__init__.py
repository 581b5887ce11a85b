"""Provider configuration: raw input, environment fallbacks, resolution and loading."""

from .env import ENV_PREFIX, EnvironmentOverrides, env_var_name
from .loader import load_raw_config, raw_config_from_mapping
from .models import UNKNOWN, RawConfig, ResolvedConfig, Unknown, is_unknown
from .resolver import ConfigResolver, ResolveResult

__all__ = [
    "ENV_PREFIX",
    "UNKNOWN",
    "ConfigResolver",
    "EnvironmentOverrides",
    "RawConfig",
    "ResolveResult",
    "ResolvedConfig",
    "Unknown",
    "env_var_name",
    "is_unknown",
    "load_raw_config",
    "raw_config_from_mapping",
]
