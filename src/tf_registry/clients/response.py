"""
Response handling for registry requests.

Maps one HTTP exchange to either a decoded pydantic model or a RegistryError:

- transport failure      -> TransportError (the response is never touched)
- unexpected status      -> APIError when the body is a JSON-API error document,
                            StatusMismatchError otherwise
- expected status        -> the body decoded into out_model, or
                            ResponseDecodeError when it doesn't fit

The response body is read in full and closed exactly once before returning.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from tf_registry.contracts.errors import ErrorDocument
from tf_registry.errors import APIError, ResponseDecodeError, StatusMismatchError, TransportError

ModelT = TypeVar("ModelT", bound=BaseModel)


def handle_response(
    request: httpx.Request,
    response: Optional[httpx.Response],
    transport_error: Optional[BaseException],
    out_model: Optional[Type[ModelT]],
    expected_status: int,
) -> Optional[ModelT]:
    method = request.method
    url = str(request.url)

    if transport_error is not None:
        raise TransportError(method, url, transport_error) from transport_error
    if response is None:
        raise TransportError(method, url)

    try:
        body = response.read()
    except httpx.RequestError as exc:
        raise TransportError(method, url, exc) from exc
    finally:
        response.close()

    status = response.status_code
    if status != expected_status:
        raise _status_error(method, url, status, expected_status, body)

    if out_model is None:
        return None

    try:
        return out_model.model_validate_json(body)
    except ValidationError as exc:
        raise ResponseDecodeError(method, url, status, exc) from exc


def _status_error(method: str, url: str, status: int, expected_status: int, body: bytes) -> StatusMismatchError:
    if body.strip():
        try:
            document = ErrorDocument.model_validate_json(body)
        except ValidationError:
            pass
        else:
            return APIError(method, url, status, expected_status, document.errors)
    return StatusMismatchError(method, url, status, expected_status)


__all__ = ["handle_response"]
