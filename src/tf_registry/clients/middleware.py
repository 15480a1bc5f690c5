"""
Request building and dispatch shared by every registry client.

Owns the registry address, the bearer token and one httpx.Client. Operation
clients call build_request / request_for_url to get a ready httpx.Request,
set their own headers, then hand it to send(), which dispatches it and runs
the result through handle_response.
"""

from __future__ import annotations

import copy
import io
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Type, TypeVar, Union

import httpx
from httpx._client import UseClientDefault
from pydantic import BaseModel

from tf_registry.clients.response import handle_response
from tf_registry.contracts.uploads import FileContent
from tf_registry.errors import BodyReadError, SerializationError
from tf_registry.utils.config_loader import RegistryConfig

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

QueryParams = Mapping[str, Union[str, int, Sequence[Union[str, int]]]]
# seconds, an httpx.Timeout, None for no timeout, or httpx.USE_CLIENT_DEFAULT
TimeoutArg = Union[float, httpx.Timeout, None, UseClientDefault]


@dataclass(frozen=True)
class RawBody:
    """Bytes or a binary stream sent exactly as given."""

    content: FileContent


@dataclass(frozen=True)
class JsonBody:
    """A structured value sent as JSON. Pydantic models are dumped by alias."""

    value: Any


RequestBody = Union[RawBody, JsonBody]


class _UploadSource:
    """Wraps a binary stream so local read failures surface as BodyReadError."""

    CHUNK_SIZE = 64 * 1024

    def __init__(self, stream) -> None:
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        try:
            return self._stream.read(size)
        except (OSError, ValueError) as exc:
            raise BodyReadError(f"error reading request body: {exc}") from exc

    def __iter__(self):
        chunk = self.read(self.CHUNK_SIZE)
        while chunk:
            yield chunk
            chunk = self.read(self.CHUNK_SIZE)

    # httpx sizes file-like bodies with fileno/tell/seek and only tolerates OSError
    def fileno(self) -> int:
        return self._position(self._stream.fileno)

    def tell(self) -> int:
        return self._position(self._stream.tell)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self._position(self._stream.seek, offset, whence)

    @staticmethod
    def _position(op, *args):
        try:
            return op(*args)
        except ValueError as exc:
            raise OSError(str(exc)) from exc


def build_route(*segments: str) -> str:
    """Join path segments with '/'. Segments are not escaped."""
    return "/".join(segments)


def encode_body(body: Optional[RequestBody]) -> Optional[Union[bytes, FileContent]]:
    if body is None:
        return None

    if isinstance(body, RawBody):
        content = body.content
        if isinstance(content, (bytearray, memoryview)):
            return bytes(content)
        if hasattr(content, "read"):
            return _UploadSource(content)
        return content

    if isinstance(body, JsonBody):
        value = body.value
        try:
            if isinstance(value, BaseModel):
                value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
            return json.dumps(value, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"error marshalling body: {exc}") from exc

    raise SerializationError(f"unsupported body kind: {type(body).__name__}")


class RegistryMiddleware:
    def __init__(self, config: RegistryConfig, http_client: httpx.Client) -> None:
        self.address = config.address
        self.bearer_token = config.token
        self.http_client = http_client

    def copy(self, http_client: httpx.Client) -> "RegistryMiddleware":
        """Shallow copy bound to a different httpx.Client."""
        other = copy.copy(self)
        other.http_client = http_client
        return other

    def build_url(self, route: str) -> str:
        return f"{self.address}/{route}"

    def build_request(
        self,
        method: str,
        route: str,
        query: Optional[QueryParams] = None,
        body: Optional[RequestBody] = None,
        *,
        timeout: TimeoutArg = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Request:
        return self.request_for_url(method, self.build_url(route), query, body, timeout=timeout)

    def request_for_url(
        self,
        method: str,
        url: str,
        query: Optional[QueryParams] = None,
        body: Optional[RequestBody] = None,
        *,
        timeout: TimeoutArg = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Request:
        content = encode_body(body)
        return self.http_client.build_request(
            method,
            url,
            params=query or None,
            content=content,
            timeout=timeout,
        )

    def set_bearer_token(self, request: httpx.Request) -> None:
        request.headers["Authorization"] = f"Bearer {self.bearer_token}"

    def send(
        self,
        request: httpx.Request,
        out_model: Optional[Type[ModelT]],
        expected_status: int,
    ) -> Optional[ModelT]:
        """Dispatch once and return the decoded body. No retries."""
        logger.debug("Sending %s %s", request.method, request.url)
        response: Optional[httpx.Response] = None
        transport_error: Optional[Exception] = None
        try:
            response = self.http_client.send(request, stream=True)
        except httpx.RequestError as exc:
            transport_error = exc
        else:
            logger.debug("Received %s from %s %s", response.status_code, request.method, request.url)
        return handle_response(request, response, transport_error, out_model, expected_status)


__all__ = [
    "JsonBody",
    "RawBody",
    "RegistryMiddleware",
    "RequestBody",
    "build_route",
    "encode_body",
]
