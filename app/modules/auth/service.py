import hashlib
import logging
import time
from datetime import datetime, timezone
from supabase import Client
from app.modules.auth.schemas import (
    EmailCheckResponse, MagicLinkRequest, MagicLinkResponse, RecoverRequest
)
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def email_exists(self, email: str) -> bool:
        """Ask the check_email_exists RPC whether an auth user already owns this email"""
        try:
            result = self.supabase.rpc("check_email_exists", {"email_to_check": email}).execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Email existence check failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to check email")

    def check_email(self, email: str) -> EmailCheckResponse:
        exists = self.email_exists(email)
        return EmailCheckResponse(email=email, exists=exists, requires_terms=not exists)

    def send_magic_link(self, request: MagicLinkRequest) -> MagicLinkResponse:
        """
        Issue a passwordless login link.
        New emails must come through the terms step; the acceptance time is
        stored in user_metadata. Existing emails skip it entirely.
        """
        exists = self.email_exists(request.email)
        if not exists and not request.terms_accepted:
            raise HTTPException(
                status_code=400,
                detail="You must accept the Terms of Service to create an account"
            )

        user_metadata: Dict[str, Any] = {"user_type": request.user_type}
        if not exists:
            user_metadata["terms_accepted_at"] = datetime.now(timezone.utc).isoformat()

        try:
            self.supabase.auth.sign_in_with_otp({
                "email": request.email,
                "options": {
                    "data": user_metadata,
                    "email_redirect_to": f"{settings.site_url}/auth/callback"
                }
            })
        except Exception as e:
            logger.error(f"Magic link error: {e}")
            message = getattr(e, "message", None)
            if message:
                raise HTTPException(status_code=400, detail=message)
            raise HTTPException(status_code=500, detail="Failed to send magic link")

        return MagicLinkResponse(
            email=request.email,
            new_account=not exists,
            message=f"We've sent a magic link to {request.email}"
        )

    def recover(self, request: RecoverRequest) -> dict:
        """Send a recovery email. The answer never reveals whether the address is registered."""
        try:
            self.supabase.auth.reset_password_for_email(
                request.email,
                {"redirect_to": f"{settings.site_url}/auth/callback"}
            )
        except Exception as e:
            logger.warning(f"Recovery email failed for {request.email}: {e}")
        return {"message": "Check your email for password reset instructions."}

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Supabase Auth tokens are stateless JWTs, so logout is mainly client-side
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
