"""
Contracts for the registry provider API.

- registry.py: JSON-API request/response models for versions and platforms
- uploads.py: file upload descriptors for pre-signed URLs
- errors.py: the JSON-API error document returned on failures
"""

from .errors import APIErrorObject, ErrorDocument
from .registry import (
    CreateProviderVersionPlatformRequest,
    CreateProviderVersionPlatformResponse,
    CreateProviderVersionRequest,
    CreateProviderVersionResponse,
)
from .uploads import BINARY_OCTET_STREAM, FileUploadRequest

__all__ = [
    "APIErrorObject",
    "BINARY_OCTET_STREAM",
    "CreateProviderVersionPlatformRequest",
    "CreateProviderVersionPlatformResponse",
    "CreateProviderVersionRequest",
    "CreateProviderVersionResponse",
    "ErrorDocument",
    "FileUploadRequest",
]
