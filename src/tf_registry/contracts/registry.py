"""
Provider registry contracts.

Request and response shapes for the private registry provider API, e.g.:
- creating a provider version (returns the checksum upload links)
- registering a platform binary for a version (returns the binary upload link)

Field names follow the JSON-API wire format through aliases ("key-id",
"shasums-upload", ...). Responses ignore attributes we do not use so that
registry additions do not break publishing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

PROVIDER_VERSIONS_TYPE = "registry-provider-versions"
PROVIDER_VERSION_PLATFORMS_TYPE = "registry-provider-version-platforms"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Provider versions
# ---------------------------------------------------------------------------

class ProviderVersionAttributes(_WireModel):
    version: str
    key_id: str = Field(alias="key-id")
    protocols: List[str] = Field(default_factory=lambda: ["5.0"])


class ProviderVersionRequestData(_WireModel):
    type: str = PROVIDER_VERSIONS_TYPE
    attributes: ProviderVersionAttributes


class CreateProviderVersionRequest(_WireModel):
    data: ProviderVersionRequestData

    @classmethod
    def build(cls, version: str, key_id: str, protocols: Optional[List[str]] = None) -> "CreateProviderVersionRequest":
        fields: Dict[str, Any] = {"version": version, "key_id": key_id}
        if protocols is not None:
            fields["protocols"] = list(protocols)
        return cls(data=ProviderVersionRequestData(attributes=ProviderVersionAttributes(**fields)))


class AssetPermissions(_WireModel):
    can_delete: Optional[bool] = Field(default=None, alias="can-delete")
    can_upload_asset: Optional[bool] = Field(default=None, alias="can-upload-asset")


class ProviderVersionResponseAttributes(_WireModel):
    version: Optional[str] = None
    key_id: Optional[str] = Field(default=None, alias="key-id")
    protocols: List[str] = Field(default_factory=list)
    shasums_uploaded: Optional[bool] = Field(default=None, alias="shasums-uploaded")
    shasums_sig_uploaded: Optional[bool] = Field(default=None, alias="shasums-sig-uploaded")
    created_at: Optional[datetime] = Field(default=None, alias="created-at")
    updated_at: Optional[datetime] = Field(default=None, alias="updated-at")
    permissions: Optional[AssetPermissions] = None


class ProviderVersionLinks(_WireModel):
    shasums_upload: Optional[str] = Field(default=None, alias="shasums-upload")
    shasums_sig_upload: Optional[str] = Field(default=None, alias="shasums-sig-upload")
    shasums_download: Optional[str] = Field(default=None, alias="shasums-download")
    shasums_sig_download: Optional[str] = Field(default=None, alias="shasums-sig-download")


class ProviderVersionResponseData(_WireModel):
    id: str
    type: Optional[str] = None
    attributes: ProviderVersionResponseAttributes = Field(default_factory=ProviderVersionResponseAttributes)
    relationships: Dict[str, Any] = Field(default_factory=dict)
    links: ProviderVersionLinks = Field(default_factory=ProviderVersionLinks)


class CreateProviderVersionResponse(_WireModel):
    data: ProviderVersionResponseData


# ---------------------------------------------------------------------------
# Provider version platforms
# ---------------------------------------------------------------------------

class ProviderVersionPlatformAttributes(_WireModel):
    os: str
    arch: str
    shasum: str
    filename: str


class ProviderVersionPlatformRequestData(_WireModel):
    type: str = PROVIDER_VERSION_PLATFORMS_TYPE
    attributes: ProviderVersionPlatformAttributes


class CreateProviderVersionPlatformRequest(_WireModel):
    data: ProviderVersionPlatformRequestData

    @classmethod
    def build(cls, os: str, arch: str, shasum: str, filename: str) -> "CreateProviderVersionPlatformRequest":
        attributes = ProviderVersionPlatformAttributes(os=os, arch=arch, shasum=shasum, filename=filename)
        return cls(data=ProviderVersionPlatformRequestData(attributes=attributes))


class ProviderVersionPlatformResponseAttributes(_WireModel):
    os: Optional[str] = None
    arch: Optional[str] = None
    filename: Optional[str] = None
    shasum: Optional[str] = None
    provider_binary_uploaded: Optional[bool] = Field(default=None, alias="provider-binary-uploaded")
    permissions: Optional[AssetPermissions] = None


class ProviderVersionPlatformLinks(_WireModel):
    provider_binary_upload: Optional[str] = Field(default=None, alias="provider-binary-upload")
    provider_binary_download: Optional[str] = Field(default=None, alias="provider-binary-download")


class ProviderVersionPlatformResponseData(_WireModel):
    id: str
    type: Optional[str] = None
    attributes: ProviderVersionPlatformResponseAttributes = Field(
        default_factory=ProviderVersionPlatformResponseAttributes
    )
    relationships: Dict[str, Any] = Field(default_factory=dict)
    links: ProviderVersionPlatformLinks = Field(default_factory=ProviderVersionPlatformLinks)


class CreateProviderVersionPlatformResponse(_WireModel):
    data: ProviderVersionPlatformResponseData


__all__ = [
    "PROVIDER_VERSIONS_TYPE",
    "PROVIDER_VERSION_PLATFORMS_TYPE",
    "AssetPermissions",
    "CreateProviderVersionPlatformRequest",
    "CreateProviderVersionPlatformResponse",
    "CreateProviderVersionRequest",
    "CreateProviderVersionResponse",
    "ProviderVersionAttributes",
    "ProviderVersionLinks",
    "ProviderVersionPlatformAttributes",
    "ProviderVersionPlatformLinks",
    "ProviderVersionPlatformRequestData",
    "ProviderVersionRequestData",
]
