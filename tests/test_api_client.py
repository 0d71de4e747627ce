import httpx
import pytest

from core.config import Settings
from core.results import ApiFailure, ApiSuccess
from utils.api_client import build_endpoint, call_campaign_api


def test_build_endpoint_has_single_slashes():
    assert build_endpoint("abc123", "pitch") == "/abc123/pitch"
    assert build_endpoint("abc123", "/kiis") == "/abc123/kiis"


async def test_success_returns_plaintext_body(settings, make_transport):
    transport = make_transport(200, "Great pitch text")

    result = await call_campaign_api(settings, "/abc123/pitch", transport=transport)

    assert result == ApiSuccess("Great pitch text")
    assert result.ok is True
    request = transport.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://api.example.com/abc123/pitch"


async def test_default_headers(settings, make_transport):
    transport = make_transport(200, "ok")

    await call_campaign_api(settings, "/abc123/pitch", transport=transport)

    headers = transport.requests[0].headers
    assert headers["User-Agent"] == "demo-mcp-server/1.0"
    assert headers["Accept"] == "text/plain"
    assert "Authorization" not in headers
    assert "Content-Type" not in headers


async def test_bearer_header_sent_when_api_key_configured(settings_with_key, make_transport):
    transport = make_transport(200, "ok")

    await call_campaign_api(settings_with_key, "/abc123/pitch", transport=transport)

    assert transport.requests[0].headers["Authorization"] == "Bearer secret-key"


async def test_non_2xx_includes_status_and_truncated_body(settings, make_transport):
    transport = make_transport(500, "x" * 250)

    result = await call_campaign_api(settings, "/abc123/pitch", transport=transport)

    assert isinstance(result, ApiFailure)
    assert result.ok is False
    assert result.message == "API Error: 500 Internal Server Error - " + "x" * 100


async def test_non_2xx_with_empty_body(settings, make_transport):
    result = await call_campaign_api(settings, "/abc123/pitch", transport=make_transport(404, ""))

    assert result == ApiFailure("API Error: 404 Not Found")


async def test_connection_error_is_reported_not_raised(settings):
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    result = await call_campaign_api(settings, "/abc123/pitch", transport=httpx.MockTransport(refuse))

    assert result == ApiFailure("Network or processing error: Connection refused")


async def test_timeout_without_detail_uses_exception_name(settings):
    def time_out(request):
        raise httpx.ReadTimeout("", request=request)

    result = await call_campaign_api(settings, "/abc123/pitch", transport=httpx.MockTransport(time_out))

    assert result == ApiFailure("Network or processing error: ReadTimeout")


async def test_missing_base_url_fails_without_network(make_transport):
    transport = make_transport(200, "never")

    result = await call_campaign_api(Settings(base_api_url=""), "/abc123/pitch", transport=transport)

    assert result == ApiFailure("API call failed: BASE_API_URL is not configured.")
    assert transport.requests == []


async def test_post_with_body_is_form_encoded(settings, make_transport):
    transport = make_transport(200, "created")

    result = await call_campaign_api(
        settings, "/abc123/notes", method="POST", body={"note": "hello world"}, transport=transport
    )

    assert result.ok
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.content == b"note=hello+world"


async def test_get_never_sends_a_body(settings, make_transport):
    transport = make_transport(200, "ok")

    await call_campaign_api(settings, "/abc123/pitch", body={"ignored": "yes"}, transport=transport)

    request = transport.requests[0]
    assert request.content == b""
    assert "Content-Type" not in request.headers


@pytest.mark.parametrize("status", [200, 201, 204])
async def test_any_2xx_is_success(settings, make_transport, status):
    transport = make_transport(status, "")

    result = await call_campaign_api(settings, "/abc123/pitch", transport=transport)

    assert result.ok


def test_build_endpoint_encodes_reserved_characters():
    assert build_endpoint("abc?x", "kiis") == "/abc%3Fx/kiis"
    assert build_endpoint("a#b", "pitch") == "/a%23b/pitch"
    assert build_endpoint("../admin", "pitch") == "/..%2Fadmin/pitch"


class FailingStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset")
        yield b""


async def test_unreadable_error_body_still_reports_status(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(502, stream=FailingStream()))

    result = await call_campaign_api(settings, "/abc123/pitch", transport=transport)

    assert result == ApiFailure("API Error: 502 Bad Gateway")


async def test_header_encoding_error_is_reported_not_raised(make_transport):
    transport = make_transport(200, "never")
    settings = Settings(base_api_url="https://api.example.com", api_key="clé")

    result = await call_campaign_api(settings, "/abc123/pitch", transport=transport)

    assert isinstance(result, ApiFailure)
    assert result.message.startswith("Network or processing error:")
    assert transport.requests == []


def test_result_tags_cannot_be_overridden():
    assert ApiSuccess("x").ok is True
    assert ApiFailure("x").ok is False
    with pytest.raises(TypeError):
        ApiSuccess("x", ok=False)
    with pytest.raises(TypeError):
        ApiFailure("x", ok=True)
