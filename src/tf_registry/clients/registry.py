"""
Registry provider API clients.

Purpose:
- ProviderClient creates provider versions and registers platform binaries
- UploadsClient PUTs release files to the pre-signed URLs those calls return

Usage:
    with RegistryClient(load_registry_config()) as client:
        version = client.provider_client().create_provider_version(
            "acme", "private", "acme", "tool", CreateProviderVersionRequest.build("1.2.3", key_id)
        )
        with client.uploads_client() as uploads:
            uploads.upload_file(FileUploadRequest(version.data.links.shasums_upload, shasums, "tool_1.2.3_SHA256SUMS"))

Important:
- Uploads use their own httpx.Client. Pre-signed storage URLs never see the
  registry token or share connections with API calls.
- Every call is a single attempt. Retrying is up to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from tf_registry.clients.middleware import JsonBody, RawBody, RegistryMiddleware, TimeoutArg, build_route
from tf_registry.contracts.registry import (
    CreateProviderVersionPlatformRequest,
    CreateProviderVersionPlatformResponse,
    CreateProviderVersionRequest,
    CreateProviderVersionResponse,
)
from tf_registry.contracts.uploads import BINARY_OCTET_STREAM, FileUploadRequest
from tf_registry.utils.config_loader import RegistryConfig

logger = logging.getLogger(__name__)

HEADER_ACCEPT = "Accept"
HEADER_CONTENT_DISPOSITION = "Content-Disposition"
HEADER_CONTENT_TYPE = "Content-Type"

APPLICATION_VND_API_JSON = "application/vnd.api+json"
APPLICATION_JSON = "application/json"

PATH_API = "api"
PATH_V2 = "v2"
PATH_ORGANIZATIONS = "organizations"
PATH_REGISTRY_PROVIDERS = "registry-providers"
PATH_VERSIONS = "versions"
PATH_PLATFORMS = "platforms"


def provider_versions_route(org: str, registry_name: str, namespace: str, provider_name: str) -> str:
    return build_route(
        PATH_API,
        PATH_V2,
        PATH_ORGANIZATIONS,
        org,
        PATH_REGISTRY_PROVIDERS,
        registry_name,
        namespace,
        provider_name,
        PATH_VERSIONS,
    )


def provider_version_platforms_route(
    org: str, registry_name: str, namespace: str, provider_name: str, version: str
) -> str:
    return build_route(
        provider_versions_route(org, registry_name, namespace, provider_name),
        version,
        PATH_PLATFORMS,
    )


_DISPOSITION_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape_filename_char(char: str) -> str:
    if char in _DISPOSITION_ESCAPES:
        return _DISPOSITION_ESCAPES[char]
    code = ord(char)
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if code > 0x7F:
        # header values must stay ASCII
        return f"\\u{code:04x}" if code <= 0xFFFF else f"\\U{code:08x}"
    return char


def attachment_disposition(filename: str) -> str:
    """Quote filename with backslash escapes so the header value is one line of ASCII."""
    escaped = "".join(_escape_filename_char(char) for char in filename)
    return f'attachment; filename="{escaped}"'


class _OwnedHttpClient:
    """Closes the httpx.Client only when this object created it."""

    def __init__(self, http_client: httpx.Client, owns_client: bool) -> None:
        self._http_client = http_client
        self._owns_client = owns_client

    @property
    def http_client(self) -> httpx.Client:
        return self._http_client

    def close(self) -> None:
        if self._owns_client:
            self._http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class RegistryClient(_OwnedHttpClient):
    def __init__(self, config: RegistryConfig, http_client: Optional[httpx.Client] = None) -> None:
        owns_client = http_client is None
        http_client = http_client if http_client is not None else httpx.Client()
        super().__init__(http_client, owns_client)
        self._middleware = RegistryMiddleware(config, http_client)

    def provider_client(self) -> "ProviderClient":
        return ProviderClient(self._middleware)

    def uploads_client(self, http_client: Optional[httpx.Client] = None) -> "UploadsClient":
        """Client for checksum and artifact uploads, on a separate httpx.Client.

        A fresh default client is created unless one is passed in; only a
        client created here is closed by UploadsClient.close().
        """
        owns_client = http_client is None
        http_client = http_client if http_client is not None else httpx.Client()
        return UploadsClient(self._middleware.copy(http_client), owns_client=owns_client)


class ProviderClient:
    def __init__(self, middleware: RegistryMiddleware) -> None:
        self._m = middleware

    def create_provider_version(
        self,
        org: str,
        registry_name: str,
        namespace: str,
        provider_name: str,
        data: CreateProviderVersionRequest,
        *,
        timeout: TimeoutArg = httpx.USE_CLIENT_DEFAULT,
    ) -> CreateProviderVersionResponse:
        route = provider_versions_route(org, registry_name, namespace, provider_name)
        req = self._m.build_request("POST", route, body=JsonBody(data), timeout=timeout)
        self._set_api_headers(req)
        return self._m.send(req, CreateProviderVersionResponse, httpx.codes.CREATED)

    def create_provider_version_platform(
        self,
        org: str,
        registry_name: str,
        namespace: str,
        provider_name: str,
        version: str,
        data: CreateProviderVersionPlatformRequest,
        *,
        timeout: TimeoutArg = httpx.USE_CLIENT_DEFAULT,
    ) -> CreateProviderVersionPlatformResponse:
        route = provider_version_platforms_route(org, registry_name, namespace, provider_name, version)
        req = self._m.build_request("POST", route, body=JsonBody(data), timeout=timeout)
        self._set_api_headers(req)
        return self._m.send(req, CreateProviderVersionPlatformResponse, httpx.codes.CREATED)

    def _set_api_headers(self, req: httpx.Request) -> None:
        self._m.set_bearer_token(req)
        req.headers[HEADER_CONTENT_TYPE] = APPLICATION_VND_API_JSON
        req.headers[HEADER_ACCEPT] = APPLICATION_JSON


class UploadsClient(_OwnedHttpClient):
    def __init__(self, middleware: RegistryMiddleware, owns_client: bool = False) -> None:
        super().__init__(middleware.http_client, owns_client)
        self._m = middleware

    def upload_file(self, data: FileUploadRequest, *, timeout: TimeoutArg = httpx.USE_CLIENT_DEFAULT) -> None:
        """PUT the file to its pre-signed destination. No bearer token is sent.

        A file object that fails to read (closed, I/O error) raises BodyReadError.
        """
        req = self._m.request_for_url("PUT", data.destination, body=RawBody(data.file), timeout=timeout)
        req.headers[HEADER_CONTENT_TYPE] = data.content_type or BINARY_OCTET_STREAM
        req.headers[HEADER_CONTENT_DISPOSITION] = attachment_disposition(data.filename)
        logger.debug(f"Uploading {data.filename}")
        self._m.send(req, None, httpx.codes.OK)


__all__ = [
    "ProviderClient",
    "RegistryClient",
    "UploadsClient",
    "attachment_disposition",
    "provider_version_platforms_route",
    "provider_versions_route",
]
