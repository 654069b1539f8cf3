"""Newsletter subscription relay (Beehiiv).

Forwards an email and optional first name to the Beehiiv subscriptions
API. Never raises: every outcome comes back as a SubscribeResult with the
HTTP status the caller should report and a JSON-ready payload.

Credentials come from the environment:
- BEEHIIV_API_KEY
- BEEHIIV_PUB_ID
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

BEEHIIV_API_BASE = "https://api.beehiiv.com/v2"
UTM_SOURCE = "Tax_Shield_Tool"

# Request timeout in seconds
REQUEST_TIMEOUT = 15

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class SubscribeResult:
    """Outcome of a subscribe call."""
    status_code: int
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.payload.get("success"))


def is_valid_email(email: str) -> bool:
    """Loose shape check: something@something.tld, no whitespace."""
    return bool(email) and bool(EMAIL_PATTERN.match(email.strip()))


def build_subscription_body(email: str, first_name: Optional[str] = None) -> dict:
    """Build the Beehiiv create-subscription request body."""
    body: Dict[str, Any] = {
        "email": email,
        "reactivate_existing": False,
        "send_welcome_email": True,
        "utm_source": UTM_SOURCE,
    }
    if first_name and first_name.strip():
        body["custom_fields"] = [{"name": "first_name", "value": first_name.strip()}]
    return body


def subscribe(
    email: Optional[str],
    first_name: Optional[str] = None,
    api_key: Optional[str] = None,
    pub_id: Optional[str] = None,
) -> SubscribeResult:
    """Subscribe an email address to the newsletter.

    Args:
        email: Subscriber email (required)
        first_name: Optional first name, sent as a custom field
        api_key: Beehiiv API key (default: BEEHIIV_API_KEY)
        pub_id: Beehiiv publication ID (default: BEEHIIV_PUB_ID)

    Returns:
        SubscribeResult:
        - 200 {"success": True} on success
        - 200 {"success": True, "message": "Already subscribed"} on 409
        - 400 if the email is missing or malformed
        - 500 if credentials are missing or the request fails
        - upstream status with {"error": ...} for other upstream failures
    """
    if not email or not isinstance(email, str) or not email.strip():
        return SubscribeResult(400, {"error": "Email is required"})
    email = email.strip()
    if not is_valid_email(email):
        return SubscribeResult(400, {"error": "Invalid email address"})

    api_key = api_key or os.environ.get("BEEHIIV_API_KEY")
    pub_id = pub_id or os.environ.get("BEEHIIV_PUB_ID")
    if not api_key or not pub_id:
        logger.error("Beehiiv credentials not configured")
        return SubscribeResult(500, {"error": "Newsletter service not configured"})

    url = f"{BEEHIIV_API_BASE}/publications/{pub_id}/subscriptions"
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            url,
            json=build_subscription_body(email, first_name),
            headers=headers,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.Timeout:
        logger.warning(f"Beehiiv request timed out after {REQUEST_TIMEOUT}s")
        return SubscribeResult(500, {"error": "Request timed out"})
    except requests.RequestException as e:
        logger.error(f"Beehiiv network error: {e}")
        return SubscribeResult(500, {"error": str(e)})

    if 200 <= response.status_code < 300:
        logger.info(f"Successfully subscribed: {email}")
        return SubscribeResult(200, {"success": True})

    if response.status_code == 409:
        logger.info(f"Already subscribed: {email}")
        return SubscribeResult(200, {"success": True, "message": "Already subscribed"})

    logger.error(f"Beehiiv API error: {response.status_code} {response.text[:500]}")
    return SubscribeResult(response.status_code, {"error": "Failed to subscribe"})
