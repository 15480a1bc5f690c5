"""
Client for publishing Terraform provider releases to a private registry.

Creates provider versions, registers platform binaries and uploads release
files to the pre-signed URLs the registry returns.
"""

from .clients import ProviderClient, RegistryClient, UploadsClient
from .contracts import (
    CreateProviderVersionPlatformRequest,
    CreateProviderVersionPlatformResponse,
    CreateProviderVersionRequest,
    CreateProviderVersionResponse,
    FileUploadRequest,
)
from .errors import (
    APIError,
    BodyReadError,
    RegistryError,
    ResponseDecodeError,
    SerializationError,
    StatusMismatchError,
    TransportError,
)
from .utils import RegistryConfig, load_registry_config

__all__ = [
    "APIError",
    "BodyReadError",
    "CreateProviderVersionPlatformRequest",
    "CreateProviderVersionPlatformResponse",
    "CreateProviderVersionRequest",
    "CreateProviderVersionResponse",
    "FileUploadRequest",
    "ProviderClient",
    "RegistryClient",
    "RegistryConfig",
    "RegistryError",
    "ResponseDecodeError",
    "SerializationError",
    "StatusMismatchError",
    "TransportError",
    "UploadsClient",
    "load_registry_config",
]
