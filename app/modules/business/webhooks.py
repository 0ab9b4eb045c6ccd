"""Outbound notification to the verification automation (n8n) when a business submits its details."""
import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class VerificationNotifier:
    """Posts to the test webhook first and falls back to production when it fails."""

    def __init__(
        self,
        test_url: str,
        production_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.test_url = test_url
        self.production_url = production_url
        self.timeout = timeout
        self.transport = transport

    def _post(self, client: httpx.Client, url: str, payload: Dict[str, Any]) -> bool:
        try:
            response = client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Webhook request to {url} failed: {e}")
            return False
        if not response.is_success:
            logger.warning(f"Webhook {url} answered {response.status_code}")
            return False
        return True

    def notify(self, payload: Dict[str, Any]) -> bool:
        """Fire-and-forget: never raises, returns whether any endpoint accepted the payload."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                if self._post(client, self.test_url, payload):
                    return True
                logger.info("Test webhook failed, trying production...")
                if self._post(client, self.production_url, payload):
                    return True
        except Exception as e:
            logger.error(f"Webhook error: {e}")
            return False
        logger.error("Both verification webhooks failed for user %s", payload.get("userId"))
        return False


def get_verification_notifier() -> VerificationNotifier:
    return VerificationNotifier(
        test_url=settings.verification_webhook_test_url,
        production_url=settings.verification_webhook_url,
        timeout=settings.webhook_timeout_seconds,
    )
