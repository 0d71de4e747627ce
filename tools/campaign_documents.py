from typing import Annotated, Any, Optional
import logging

import httpx
from pydantic import Field

from core.config import Settings
from utils import build_endpoint, call_campaign_api, validate_campaign_id

logger = logging.getLogger(__name__)

CampaignId = Annotated[
    str,
    Field(description="The campaign identifier: an integer-like id (e.g. '42') or a lowercase slug (e.g. 'solar-farm')."),
]


async def fetch_campaign_document(
        settings: Settings,
        campaign_id: Any,
        suffix: str,
        label: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Fetch one plaintext document for a campaign and format it for the assistant.

    Never raises: invalid input and failed calls both come back as an
    "Error fetching ..." text.
    """
    error_prefix = f"Error fetching {label.lower()}"
    checked = validate_campaign_id(campaign_id)
    if not checked.ok:
        logger.warning(f"{error_prefix}: rejected campaign_id {campaign_id!r}")
        return f"{error_prefix}: {checked.message}"

    result = await call_campaign_api(
        settings,
        build_endpoint(checked.value, suffix),
        transport=transport,
    )
    if result.ok:
        return f"{label} for campaign {checked.value}:\n{result.body}"
    return f"{error_prefix}: {result.message}"


def get_tools(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> dict[str, Any]:
    # Closures capture the settings but expose a clean `campaign_id` signature to FastMCP

    async def get_pitch(campaign_id: CampaignId) -> str:
        """Retrieve the marketing pitch of a campaign."""
        return await fetch_campaign_document(settings, campaign_id, "pitch", "Pitch", transport)

    async def get_kiis(campaign_id: CampaignId) -> str:
        """Retrieve the key investor information sheet (KIIS) of a campaign."""
        return await fetch_campaign_document(settings, campaign_id, "kiis", "KIIS", transport)

    async def get_marketing_materials(campaign_id: CampaignId) -> str:
        """Retrieve the marketing materials of a campaign."""
        return await fetch_campaign_document(
            settings, campaign_id, "marketing_materials", "Marketing Materials", transport
        )

    return {
        "get_pitch": {
            "func": get_pitch,
            "title": "Get campaign pitch",
            "description": "Retrieves the marketing pitch associated with a specific campaign ID or SLUG.",
        },
        "get_kiis": {
            "func": get_kiis,
            "title": "Get campaign KIIS",
            "description": "Retrieves the Key Investor Information Sheet (KIIS) associated with a specific campaign ID or SLUG.",
        },
        "get_marketing_materials": {
            "func": get_marketing_materials,
            "title": "Get campaign marketing materials",
            "description": "Retrieves the marketing materials associated with a specific campaign ID or SLUG.",
        },
    }
