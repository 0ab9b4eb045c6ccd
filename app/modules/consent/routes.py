from fastapi import APIRouter, Depends, Request
from app.database.supabase_client import get_supabase
from app.modules.consent.schemas import ConsentCreate, ConsentResponse
from app.modules.consent.service import ConsentService
from app.core.dependencies import get_optional_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/consent", tags=["consent"])


def get_consent_service(supabase: Client = Depends(get_supabase)) -> ConsentService:
    return ConsentService(supabase)


@router.post("", response_model=ConsentResponse, status_code=201)
async def record_consent(
    consent: ConsentCreate,
    request: Request,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: ConsentService = Depends(get_consent_service)
):
    """Log a cookie banner decision"""
    return service.record(
        consent,
        user_id=user_data["id"] if user_data else None,
        user_agent=request.headers.get("user-agent"),
    )
