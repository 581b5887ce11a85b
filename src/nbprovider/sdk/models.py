"""Base Pydantic models for the nbprovider SDK.

All SDK models inherit from `SdkBaseModel` so that they share one configuration:

- Strict field validation (no extra fields allowed)
- Immutable instances, safe to share between callers

Example:
    >>> from nbprovider.sdk.models import SdkBaseModel
    >>>
    >>> class Endpoint(SdkBaseModel):
    ...     host: str
    ...     port: int = 443
    >>>
    >>> Endpoint(host="netbox.local").model_dump()
    {'host': 'netbox.local', 'port': 443}
"""

from pydantic import BaseModel, ConfigDict


class SdkBaseModel(BaseModel):
    """Base model for all nbprovider SDK Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable once produced
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
