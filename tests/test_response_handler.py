import json

import httpx
import pytest

from tf_registry.clients.response import handle_response
from tf_registry.contracts.registry import CreateProviderVersionResponse
from tf_registry.errors import (
    APIError,
    RegistryError,
    ResponseDecodeError,
    StatusMismatchError,
    TransportError,
)

VERSIONS_URL = "https://registry.example/api/v2/organizations/acme/registry-providers/priv/myorg/tool/versions"

ERROR_DOCUMENT = {
    "errors": [
        {
            "status": "422",
            "title": "invalid attribute",
            "detail": "Version has already been taken",
            "source": {"pointer": "/data/attributes/version"},
        }
    ]
}


@pytest.fixture
def request_():
    return httpx.Request("POST", VERSIONS_URL)


def test_transport_error_is_wrapped_with_method_and_url(request_):
    cause = httpx.ConnectError("connection refused", request=request_)

    with pytest.raises(TransportError) as exc_info:
        handle_response(request_, None, cause, CreateProviderVersionResponse, 201)

    err = exc_info.value
    assert err.method == "POST"
    assert err.url == VERSIONS_URL
    assert err.__cause__ is cause
    assert "connection refused" in str(err)


def test_transport_error_never_touches_response(request_, counting_response):
    response, stream = counting_response(request_, 201, b'{"data":{"id":"v1"}}')

    with pytest.raises(TransportError):
        handle_response(request_, response, httpx.ReadTimeout("timed out"), CreateProviderVersionResponse, 201)

    assert stream.close_calls == 0


def test_missing_response_without_error_is_a_transport_error(request_):
    with pytest.raises(TransportError):
        handle_response(request_, None, None, None, 200)


def test_expected_status_decodes_body(request_, counting_response):
    response, stream = counting_response(request_, 201, b'{"data":{"id":"v1"}}')

    out = handle_response(request_, response, None, CreateProviderVersionResponse, 201)

    assert isinstance(out, CreateProviderVersionResponse)
    assert out.data.id == "v1"
    assert stream.close_calls == 1


def test_expected_status_without_model_returns_none(request_, counting_response):
    response, stream = counting_response(request_, 200, b"ignored")

    assert handle_response(request_, response, None, None, 200) is None
    assert stream.close_calls == 1


def test_api_error_carries_status_and_details(request_, counting_response):
    response, stream = counting_response(request_, 422, json.dumps(ERROR_DOCUMENT).encode())

    with pytest.raises(APIError) as exc_info:
        handle_response(request_, response, None, CreateProviderVersionResponse, 201)

    err = exc_info.value
    assert err.status == 422
    assert err.expected_status == 201
    assert err.method == "POST"
    assert err.url == VERSIONS_URL
    assert err.messages == ["Version has already been taken"]
    assert err.errors[0].title == "invalid attribute"
    assert err.errors[0].source == {"pointer": "/data/attributes/version"}
    assert "Version has already been taken" in str(err)
    assert stream.close_calls == 1


def test_api_error_accepts_plain_string_errors(request_, counting_response):
    response, _ = counting_response(request_, 404, b'{"errors":["not found"]}')

    with pytest.raises(APIError) as exc_info:
        handle_response(request_, response, None, CreateProviderVersionResponse, 201)

    assert exc_info.value.status == 404
    assert exc_info.value.messages == ["not found"]


def test_empty_body_on_mismatch_is_a_plain_status_error(request_, counting_response):
    response, stream = counting_response(request_, 422, b"")

    with pytest.raises(StatusMismatchError) as exc_info:
        handle_response(request_, response, None, CreateProviderVersionResponse, 201)

    err = exc_info.value
    assert type(err) is StatusMismatchError
    assert err.status == 422
    assert err.__cause__ is None
    assert stream.close_calls == 1


@pytest.mark.parametrize("body", [b"<html>bad gateway</html>", b'{"message": "no errors key"}', b"   "])
def test_undecodable_body_on_mismatch_is_a_plain_status_error(request_, counting_response, body):
    response, stream = counting_response(request_, 502, body)

    with pytest.raises(StatusMismatchError) as exc_info:
        handle_response(request_, response, None, CreateProviderVersionResponse, 201)

    assert not isinstance(exc_info.value, APIError)
    assert exc_info.value.status == 502
    assert stream.close_calls == 1


@pytest.mark.parametrize("body", [b"not json", b"", b'{"data": {"type": "missing-id"}}'])
def test_schema_violation_on_success_is_a_decode_error(request_, counting_response, body):
    response, stream = counting_response(request_, 201, body)

    with pytest.raises(ResponseDecodeError) as exc_info:
        handle_response(request_, response, None, CreateProviderVersionResponse, 201)

    assert exc_info.value.status == 201
    assert exc_info.value.__cause__ is not None
    assert stream.close_calls == 1


def test_all_errors_share_a_base_class():
    for exc_type in (APIError, ResponseDecodeError, StatusMismatchError, TransportError):
        assert issubclass(exc_type, RegistryError)
