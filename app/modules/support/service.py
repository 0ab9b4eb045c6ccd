"""Contact-support messages relayed to the hosted form-to-email service, rate limited per email."""
import logging
import math
import time
from typing import Optional

import httpx
from fastapi import HTTPException
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from app.config import settings
from app.modules.support.schemas import SupportMessage

logger = logging.getLogger(__name__)

# Shared by every relay instance; entries expire with their window
_storage = MemoryStorage()
_limiter = MovingWindowRateLimiter(_storage)


def clear_rate_limits() -> None:
    _storage.reset()


class SupportRelay:
    def __init__(
        self,
        relay_url: str,
        window_minutes: int = 15,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.relay_url = relay_url
        self.rate_limit = parse(f"1 per {window_minutes} minutes")
        self.timeout = timeout
        self.transport = transport

    def _reserve(self, email: str) -> None:
        """Claim the send slot for this email or raise 429 with the minutes left"""
        if _limiter.hit(self.rate_limit, "support", email):
            return
        reset_time, _ = _limiter.get_window_stats(self.rate_limit, "support", email)
        minutes_left = max(1, math.ceil((reset_time - time.time()) / 60))
        raise HTTPException(
            status_code=429,
            detail=f"Please wait {minutes_left} minute(s) before sending another message"
        )

    def _release(self, email: str) -> None:
        _limiter.clear(self.rate_limit, "support", email)

    async def send(self, support_message: SupportMessage) -> None:
        email = support_message.email.lower()
        self._reserve(email)
        payload = {
            "email": support_message.email,
            "name": support_message.name,
            "message": support_message.message,
            "_subject": support_message.subject or "AIMarketSpace support request",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.relay_url,
                    json=payload,
                    headers={"Accept": "application/json"},
                )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Support relay failed for {email}: {e}")
            self._release(email)
            raise HTTPException(status_code=502, detail="Failed to send message")
        logger.info(f"Support message relayed for {email}")


def get_support_relay() -> SupportRelay:
    return SupportRelay(
        relay_url=settings.support_relay_url,
        window_minutes=settings.support_rate_limit_minutes,
        timeout=settings.webhook_timeout_seconds,
    )
