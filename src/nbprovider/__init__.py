"""NetBox provider core.

Resolves provider configuration from explicit values and the environment,
validates it with accumulated diagnostics, and bootstraps an authenticated
HTTP client for the NetBox API.
"""
