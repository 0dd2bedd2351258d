"""HTTP utilities package for providers.

Exposes the pooled httpx client helpers and the shared HTTP adapter base.
"""

from .client import get_httpx_client, close_all_clients
from .provider_init import _ProviderInit, EmptyResponsePolicy
from .base_provider import BaseHTTPProvider

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "_ProviderInit",
    "EmptyResponsePolicy",
    "BaseHTTPProvider",
]
