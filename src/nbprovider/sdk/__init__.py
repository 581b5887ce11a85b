"""nbprovider SDK.

## Key Modules

- `nbprovider.sdk.config`: `ConfigResolver`, `RawConfig`, `ResolvedConfig`, `EnvironmentOverrides`
- `nbprovider.sdk.client`: `ClientBootstrapper`, `ClientHandle`
- `nbprovider.sdk.diagnostics`: `Diagnostic`, `Diagnostics`

## Quick Example

```python
from nbprovider.sdk.client import ClientBootstrapper
from nbprovider.sdk.config import ConfigResolver, EnvironmentOverrides, RawConfig

resolved = ConfigResolver(EnvironmentOverrides.from_environ()).resolve(
    RawConfig(server_url="https://netbox.example.com")
)
if resolved.config is not None:
    result = ClientBootstrapper().bootstrap(resolved.config)
    devices = result.client.get("/dcim/devices/").json()
```
"""
