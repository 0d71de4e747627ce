"""HTTP helper for the campaign API.

Every tool goes through `call_campaign_api`, which never raises: transport
failures and non-2xx responses both come back as an `ApiFailure` whose message
is ready to show to the caller.
"""
import logging
from urllib.parse import quote
from typing import Literal, Mapping, Optional

import httpx

from core.config import Settings
from core.results import ApiFailure, ApiResult, ApiSuccess

logger = logging.getLogger(__name__)

ERROR_SNIPPET_LENGTH = 100


def build_endpoint(campaign_id: str, suffix: str) -> str:
    """Return the endpoint path for a campaign document, e.g. `/abc123/pitch`.

    The id is percent-encoded as a single path segment so `?`, `#` or `/` in it
    cannot change the upstream resource.
    """
    return f"/{quote(campaign_id, safe='')}/{suffix.strip('/')}"


def build_headers(settings: Settings, with_form_body: bool = False) -> dict[str, str]:
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "text/plain",
    }
    if settings.api_key:
        headers["Authorization"] = f"Bearer {settings.api_key}"
    if with_form_body:
        headers["Content-Type"] = "application/x-www-form-urlencoded"
    return headers


async def call_campaign_api(
        settings: Settings,
        endpoint: str,
        method: Literal["GET", "POST"] = "GET",
        body: Optional[Mapping[str, str]] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ApiResult:
    """Call `settings.base_api_url + endpoint` and return the plaintext body.

    The body is only sent for non-GET requests, as url-encoded form data.
    """
    if not settings.base_api_url:
        message = "API call failed: BASE_API_URL is not configured."
        logger.error(message)
        return ApiFailure(message)

    url = f"{settings.base_api_url}{endpoint}"
    send_body = method != "GET" and bool(body)
    headers = build_headers(settings, with_form_body=send_body)

    logger.info(f"Calling API - {method} {url}")
    try:
        async with httpx.AsyncClient(transport=transport) as client:
            async with client.stream(
                method,
                url,
                headers=headers,
                data=dict(body) if send_body else None,
            ) as response:
                if not response.is_success:
                    details = f"{response.status_code} {response.reason_phrase}"
                    try:
                        await response.aread()
                        error_text = response.text
                    except httpx.HTTPError:
                        error_text = ""
                    if error_text:
                        details += f" - {error_text[:ERROR_SNIPPET_LENGTH]}"
                    message = f"API Error: {details}"
                    logger.warning(f"API call failed - {message}")
                    return ApiFailure(message)

                await response.aread()
                text = response.text
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Network or processing error calling API for {url}: {e!r}")
        return ApiFailure(f"Network or processing error: {str(e) or type(e).__name__}")
    except Exception as e:
        # e.g. UnicodeEncodeError from a header value httpx cannot encode
        logger.exception(f"Unexpected error calling API for {url}")
        return ApiFailure(f"Network or processing error: {str(e) or type(e).__name__}")

    logger.info(f"API call successful for {url}")
    return ApiSuccess(text)
