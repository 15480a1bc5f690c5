"""
Registry HTTP clients.

- middleware.py: request building (routes, bodies) and dispatch
- response.py: status checking, error mapping and body decoding
- registry.py: the provider (metadata) and uploads clients
"""

from .middleware import JsonBody, RawBody, RegistryMiddleware, build_route
from .registry import (
    ProviderClient,
    RegistryClient,
    UploadsClient,
    provider_version_platforms_route,
    provider_versions_route,
)
from .response import handle_response

__all__ = [
    "JsonBody",
    "ProviderClient",
    "RawBody",
    "RegistryClient",
    "RegistryMiddleware",
    "UploadsClient",
    "build_route",
    "handle_response",
    "provider_version_platforms_route",
    "provider_versions_route",
]
