from .api_client import build_endpoint, call_campaign_api
from .validation import validate_campaign_id

__all__ = ["build_endpoint", "call_campaign_api", "validate_campaign_id"]
