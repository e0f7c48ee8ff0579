"""Concrete transport behavior (httpx and requests)."""

from __future__ import annotations

import json
from unittest.mock import Mock

import httpx
import pytest
import requests

from apiflow.dispatcher import RequestDispatcher, Route
from apiflow.exceptions import TransportError
from apiflow.pipeline import TransformPipeline
from apiflow.transport import FormData, HttpxTransport, PendingRequest, RequestsTransport
from apiflow.transport.base import merge_headers, validate_status
from apiflow.transport.requests_transport import join_url


@pytest.mark.parametrize("status,expected", [(199, False), (200, True), (404, True), (599, True), (600, False)])
def test_validate_status_range(status, expected):
    assert validate_status(status) is expected


def test_merge_headers_overrides_case_insensitively():
    merged = merge_headers({"Content-Type": "application/json", "X-A": "1"}, {"content-type": "text/plain"})
    assert merged == {"X-A": "1", "content-type": "text/plain"}


def test_merge_headers_drops_content_type_for_forms():
    merged = merge_headers({"Content-Type": "application/json"}, {"Content-Type": "text/plain", "X-A": "1"}, form=True)
    assert merged == {"X-A": "1"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "encoding,expected",
    [
        ("json", '{"a": 1}'),
        ("text", '{"a": 1}'),
        ("document", '{"a": 1}'),
        ("blob", b'{"a": 1}'),
        ("arraybuffer", bytearray(b'{"a": 1}')),
    ],
)
async def test_httpx_transport_decodes_by_encoding(mock_transport_factory, encoding, expected):
    transport = mock_transport_factory(lambda request: httpx.Response(200, content=b'{"a": 1}'))

    response = await transport.request(PendingRequest("GET", "/data", response_encoding=encoding))

    assert response.data == expected
    assert type(response.data) is type(expected)


@pytest.mark.asyncio
async def test_httpx_transport_sends_text_body_and_default_headers(mock_transport_factory, captured_requests):
    transport = mock_transport_factory()

    await transport.request(PendingRequest("POST", "/things", headers={"Authorization": ""}, body='{"a": 1}'))

    request = captured_requests[0]
    assert request.content == b'{"a": 1}'
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Authorization"] == ""


@pytest.mark.asyncio
async def test_httpx_transport_sends_form_data_as_multipart(mock_transport_factory, captured_requests):
    transport = mock_transport_factory()
    form = FormData(fields={"name": "Acme"}, files={"logo": ("logo.png", b"\x89PNG", "image/png")})

    await transport.request(PendingRequest("POST", "/upload", headers={"Content-Type": "text/plain"}, body=form))

    request = captured_requests[0]
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b"Acme" in request.content


@pytest.mark.asyncio
async def test_httpx_transport_serializes_leftover_structured_body(mock_transport_factory, captured_requests):
    transport = mock_transport_factory()

    await transport.request(PendingRequest("POST", "/things", body={"ids": [1, 2]}))

    assert json.loads(captured_requests[0].content) == {"ids": [1, 2]}


@pytest.mark.asyncio
async def test_httpx_transport_rejects_body_that_is_not_json(mock_transport_factory, captured_requests):
    transport = mock_transport_factory()

    with pytest.raises(TransportError) as exc_info:
        await transport.request(PendingRequest("POST", "/things", body={"when": {1, 2}}))

    assert exc_info.value.error_code == "ENCODE_ERROR"
    assert exc_info.value.request.url == "/things"
    assert captured_requests == []


@pytest.mark.asyncio
async def test_circular_body_goes_through_error_hooks(mock_transport_factory, captured_requests):
    body = {}
    body["self"] = body
    hook = Mock()
    pipeline = TransformPipeline()
    pipeline.add_error_hook(hook)
    dispatcher = RequestDispatcher(mock_transport_factory(), pipeline)

    with pytest.raises(TransportError) as exc_info:
        await dispatcher.send(Route("POST", "/things"), body)

    hook.assert_called_once_with(exc_info.value)
    assert captured_requests == []


@pytest.mark.asyncio
async def test_requests_transport_rejects_body_that_is_not_json():
    session = Mock(spec=requests.Session)
    transport = RequestsTransport("https://api.example.com", session=session)

    with pytest.raises(TransportError, match="not JSON serializable"):
        await transport.request(PendingRequest("POST", "/things", body=[object()]))

    session.request.assert_not_called()


@pytest.mark.asyncio
async def test_httpx_transport_wraps_network_errors():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(base_url="https://api.example.com", transport=httpx.MockTransport(refuse))
    transport = HttpxTransport("https://api.example.com", client=client)
    pending = PendingRequest("GET", "/things")

    with pytest.raises(TransportError) as exc_info:
        await transport.request(pending)

    assert exc_info.value.request is pending
    assert exc_info.value.response is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_httpx_transport_rejects_status_outside_accepted_range(mock_transport_factory):
    transport = mock_transport_factory(lambda request: httpx.Response(199, text="early"))

    with pytest.raises(TransportError) as exc_info:
        await transport.request(PendingRequest("GET", "/things"))

    assert exc_info.value.response.status_code == 199


@pytest.mark.asyncio
async def test_httpx_transport_closes_only_owned_client():
    client = Mock(spec=httpx.AsyncClient)
    transport = HttpxTransport("https://api.example.com", client=client)

    await transport.close()

    client.aclose.assert_not_called()


def test_join_url():
    assert join_url("https://api.example.com/api/", "/organizations") == "https://api.example.com/api/organizations"
    assert join_url("https://api.example.com/api", "https://other.example.com/x") == "https://other.example.com/x"
    assert join_url("", "/organizations") == "/organizations"


def _requests_response(status: int, content: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.mark.asyncio
async def test_requests_transport_sends_through_session():
    session = Mock(spec=requests.Session)
    session.request.return_value = _requests_response(422, b'{"message": "invalid"}')
    transport = RequestsTransport("https://api.example.com/api", timeout=5, session=session)

    response = await transport.request(
        PendingRequest("PUT", "/organizations/1", headers={"Authorization": "Bearer t"}, body='{"name": "B"}')
    )

    assert response.status_code == 422
    assert response.data == '{"message": "invalid"}'
    session.request.assert_called_once_with(
        "PUT",
        "https://api.example.com/api/organizations/1",
        headers={"Content-Type": "application/json", "Authorization": "Bearer t"},
        timeout=5,
        data='{"name": "B"}',
    )


@pytest.mark.asyncio
async def test_requests_transport_wraps_request_exceptions():
    session = Mock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("dns failure")
    transport = RequestsTransport("https://api.example.com", session=session)

    with pytest.raises(TransportError, match="dns failure"):
        await transport.request(PendingRequest("GET", "/things"))


@pytest.mark.asyncio
async def test_requests_transport_passes_form_fields_without_content_type():
    session = Mock(spec=requests.Session)
    session.request.return_value = _requests_response(200, b"{}")
    transport = RequestsTransport("https://api.example.com", session=session)

    await transport.request(PendingRequest("POST", "/upload", body=FormData(fields={"a": "1"})))

    _, kwargs = session.request.call_args
    assert kwargs["data"] == {"a": "1"}
    assert "Content-Type" not in kwargs["headers"]
