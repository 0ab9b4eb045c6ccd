from supabase import Client
from app.modules.business.schemas import (
    VerificationSubmit, BusinessProfileResponse, VerificationStatusResponse
)
from app.config import settings
from typing import Optional, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

TABLE = "ams_business_profiles"


def verification_view(profile: Optional[Dict[str, Any]], max_attempts: int) -> str:
    """Map a business profile row to the screen the user should see."""
    if not profile:
        return "form"
    status = profile.get("verification_status")
    if status == "verified":
        return "verified"
    if status == "rejected":
        if (profile.get("attempt_count") or 0) >= max_attempts:
            return "contact_support"
        return "rejected"
    return "pending"


class BusinessVerificationService:
    def __init__(self, supabase: Client, max_attempts: Optional[int] = None):
        self.supabase = supabase
        self.max_attempts = max_attempts if max_attempts is not None else settings.max_verification_attempts

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get the user's business profile row, None if they never submitted"""
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                return None
            return result.data
        except Exception as e:
            logger.error(f"Error checking profile: {e}")
            raise HTTPException(status_code=500, detail="Failed to load business profile")

    def get_status(self, user_id: str) -> VerificationStatusResponse:
        profile = self.get_profile(user_id)
        view = verification_view(profile, self.max_attempts)
        attempts = (profile or {}).get("attempt_count") or 0
        return VerificationStatusResponse(
            view=view,
            profile=BusinessProfileResponse(**profile) if profile else None,
            attempts_remaining=max(0, self.max_attempts - attempts),
            can_submit=view in ("form", "rejected"),
            support_email=settings.support_email if view == "contact_support" else None,
        )

    def submit(self, user_data: dict, data: VerificationSubmit) -> BusinessProfileResponse:
        """
        Create or resubmit the business profile for review.

        The attempt cap is checked against the stored row, and the counter
        increment is a compare-and-set on attempt_count so two concurrent
        submissions cannot both pass with the same stale count.
        """
        user_id = user_data["id"]
        profile = self.get_profile(user_id)
        view = verification_view(profile, self.max_attempts)

        if view == "contact_support":
            raise HTTPException(
                status_code=403,
                detail="Maximum verification attempts reached. Please contact support."
            )
        if view in ("pending", "verified"):
            raise HTTPException(
                status_code=409,
                detail=f"Verification is already {profile.get('verification_status')}"
            )

        profile_data = {
            "company_email": user_data.get("email"),
            "company_website": data.company_website,
            "linkedin_url": data.linkedin_url,
            "verification_status": "pending",
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            if profile is None:
                result = self.supabase.table(TABLE).insert({
                    "user_id": user_id,
                    **profile_data,
                    "attempt_count": 1,
                }).execute()
            else:
                current = profile.get("attempt_count")
                query = self.supabase.table(TABLE)\
                    .update({**profile_data, "attempt_count": (current or 0) + 1})\
                    .eq("user_id", user_id)
                if current is None:
                    query = query.is_("attempt_count", "null")
                else:
                    query = query.eq("attempt_count", current)
                result = query.execute()

            if not result.data:
                raise HTTPException(
                    status_code=409,
                    detail="Verification was submitted from another session. Refresh and try again."
                )
            logger.info(f"Business verification submitted for user {user_id}")
            return BusinessProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            if "duplicate" in str(e).lower():
                raise HTTPException(
                    status_code=409,
                    detail="Verification was submitted from another session. Refresh and try again."
                )
            logger.error(f"Error submitting verification: {e}")
            raise HTTPException(status_code=500, detail="Failed to submit verification")
