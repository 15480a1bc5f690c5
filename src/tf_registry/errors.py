"""Exceptions raised by the registry clients."""

from __future__ import annotations

from typing import List, Optional, Sequence

from tf_registry.contracts.errors import APIErrorObject


class RegistryError(Exception):
    """Base class for every error raised by this package."""


class SerializationError(RegistryError):
    """A request body could not be encoded. Raised before any I/O."""


class BodyReadError(RegistryError):
    """A local request body stream could not be read (closed file, I/O error)."""


class TransportError(RegistryError):
    def __init__(self, method: str, url: str, reason: Optional[BaseException] = None) -> None:
        self.method = method
        self.url = url
        detail = f": {reason}" if reason is not None else ""
        super().__init__(f"error sending {method} {url}{detail}")


class StatusMismatchError(RegistryError):
    """The registry answered with a status other than the one expected."""

    def __init__(self, method: str, url: str, status: int, expected_status: int) -> None:
        self.method = method
        self.url = url
        self.status = status
        self.expected_status = expected_status
        super().__init__(self._message())

    def _message(self) -> str:
        return f"{self.method} {self.url}: expected status {self.expected_status}, got {self.status}"


class APIError(StatusMismatchError):
    """Unexpected status with a decodable JSON-API error document."""

    def __init__(
        self,
        method: str,
        url: str,
        status: int,
        expected_status: int,
        errors: Sequence[APIErrorObject],
    ) -> None:
        self.errors: List[APIErrorObject] = list(errors)
        super().__init__(method, url, status, expected_status)

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]

    def _message(self) -> str:
        base = super()._message()
        if not self.errors:
            return base
        return f"{base}: {'; '.join(self.messages)}"


class ResponseDecodeError(RegistryError):
    """Expected status, but the body does not match the response schema."""

    def __init__(self, method: str, url: str, status: int, reason: BaseException) -> None:
        self.method = method
        self.url = url
        self.status = status
        super().__init__(f"error decoding {method} {url} response (status {status}): {reason}")


__all__ = [
    "APIError",
    "BodyReadError",
    "RegistryError",
    "ResponseDecodeError",
    "SerializationError",
    "StatusMismatchError",
    "TransportError",
]
