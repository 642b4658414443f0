"""Provider abstraction and HTTP fetch client."""

from __future__ import annotations

from .http import ChanClient, FetchError, HttpConfig
from .providers import (
    DEFAULT_PROVIDER_NAME,
    ChanProvider,
    FourChanProvider,
    available_provider_names,
    provider_from_name,
)

__all__ = [
    "ChanClient",
    "ChanProvider",
    "DEFAULT_PROVIDER_NAME",
    "FetchError",
    "FourChanProvider",
    "HttpConfig",
    "available_provider_names",
    "provider_from_name",
]
