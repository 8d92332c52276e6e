import json

import httpx
import pytest

from jobboard_client.core.exceptions import TransportError
from jobboard_client.domain.value_objects.pending_request import PendingRequest
from jobboard_client.infrastructure.http.transport import HttpTransport

BASE_URL = "http://api.test/api/v1"


def make_transport(handler) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return HttpTransport(client=client)


@pytest.mark.asyncio
async def test_send_builds_request_from_pending_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["method"] = request.method
        seen["authorization"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"success": True, "data": {"id": "job-9"}})

    transport = make_transport(handler)
    request = PendingRequest(
        method="post", path="/jobs", json={"title": "Backend Engineer"}, params={"draft": "1"}
    ).with_bearer("a1")

    response = await transport.send(request)

    assert seen == {
        "url": "http://api.test/api/v1/jobs?draft=1",
        "method": "POST",
        "authorization": "Bearer a1",
        "body": {"title": "Backend Engineer"},
    }
    assert response.status_code == 201
    assert response.data == {"id": "job-9"}


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised():
    transport = make_transport(lambda request: httpx.Response(401, json={"success": False, "message": "Token expired"}))

    response = await transport.send(PendingRequest(method="GET", path="/auth/me"))

    assert response.status_code == 401
    assert response.message() == "Token expired"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(502, text="<html>Bad gateway</html>"),
        httpx.Response(204),
    ],
)
async def test_non_json_body_gives_no_payload(response):
    transport = make_transport(lambda request: response)

    result = await transport.send(PendingRequest(method="GET", path="/jobs"))

    assert result.status_code == response.status_code
    assert result.payload is None


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        await make_transport(handler).send(PendingRequest(method="GET", path="/jobs"))

    assert exc_info.value.code == "transport_error"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_raises_transport_error_with_timeout_code():
    def handler(request):
        raise httpx.ReadTimeout("Read timed out", request=request)

    with pytest.raises(TransportError) as exc_info:
        await make_transport(handler).send(PendingRequest(method="GET", path="/jobs"))

    assert exc_info.value.code == "timeout"


@pytest.mark.asyncio
async def test_owned_client_is_closed():
    transport = HttpTransport(base_url=BASE_URL, timeout=5.0)

    async with transport:
        pass

    assert transport._client.is_closed


@pytest.mark.asyncio
async def test_injected_client_is_left_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))

    await HttpTransport(client=client).aclose()

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_files_are_sent_as_multipart():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers["Content-Type"]
        seen["body"] = request.content
        return httpx.Response(200, json={"success": True, "data": {"cvUrl": "https://cdn.example.com/cv/1.pdf"}})

    request = PendingRequest(
        method="POST", path="/users/cv", files={"cv": ("resume.pdf", b"%PDF-1.4 resume", "application/pdf")}
    )

    response = await make_transport(handler).send(request)

    assert seen["content_type"].startswith("multipart/form-data; boundary=")
    assert b'name="cv"; filename="resume.pdf"' in seen["body"]
    assert b"%PDF-1.4 resume" in seen["body"]
    assert response.data["cvUrl"] == "https://cdn.example.com/cv/1.pdf"


@pytest.mark.asyncio
async def test_json_body_gets_json_content_type():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers["Content-Type"]
        return httpx.Response(200, json={"success": True})

    await make_transport(handler).send(PendingRequest(method="PUT", path="/users/profile", json={"name": "John"}))

    assert seen["content_type"] == "application/json"


@pytest.mark.asyncio
async def test_owned_client_follows_redirects():
    transport = HttpTransport(base_url=BASE_URL)

    assert transport._client.follow_redirects is True
    assert "Content-Type" not in transport._client.headers
    await transport.aclose()
