from supabase import Client
from app.modules.consent.schemas import ConsentCreate, ConsentResponse
from typing import Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ConsentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def record(
        self,
        consent: ConsentCreate,
        user_id: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> ConsentResponse:
        """Append one consent decision keyed by user id, or by session id for anonymous visitors"""
        session_id = (consent.session_id or "").strip() or None
        if not user_id and not session_id:
            raise HTTPException(status_code=400, detail="session_id is required for anonymous visitors")

        try:
            result = self.supabase.table("cookie_consent_logs").insert({
                "user_id": user_id,
                "session_id": None if user_id else session_id,
                "essential": True,
                "analytics": consent.analytics,
                "marketing": consent.marketing,
                "consent_version": consent.version,
                "user_agent": user_agent,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to record consent")

            return ConsentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error recording cookie consent: {e}")
            raise HTTPException(status_code=500, detail="Failed to record consent")
