from typing import Any

from core.results import InvalidInput, ValidCampaignId, ValidationResult

INVALID_CAMPAIGN_ID = "Invalid input: campaign_id must be a non-empty string."


def validate_campaign_id(value: Any) -> ValidationResult:
    """Accept any non-blank string; integer ids and slugs are not told apart."""
    if not isinstance(value, str) or not value.strip():
        return InvalidInput(INVALID_CAMPAIGN_ID)
    return ValidCampaignId(value.strip())
