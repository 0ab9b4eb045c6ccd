from fastapi import APIRouter, BackgroundTasks, Depends
from app.database.supabase_client import get_supabase
from app.modules.business.schemas import (
    VerificationSubmit, BusinessProfileResponse, VerificationStatusResponse
)
from app.modules.business.service import BusinessVerificationService
from app.modules.business.webhooks import VerificationNotifier, get_verification_notifier
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/business-verification", tags=["business-verification"])


def get_verification_service(supabase: Client = Depends(get_supabase)) -> BusinessVerificationService:
    return BusinessVerificationService(supabase)


@router.get("", response_model=VerificationStatusResponse)
async def get_verification_status(
    user_data: Dict = Depends(get_current_user_id),
    service: BusinessVerificationService = Depends(get_verification_service)
):
    """Current verification state and which screen to show"""
    return service.get_status(user_data["id"])


@router.post("", response_model=BusinessProfileResponse, status_code=201)
async def submit_verification(
    verification: VerificationSubmit,
    background_tasks: BackgroundTasks,
    user_data: Dict = Depends(get_current_user_id),
    service: BusinessVerificationService = Depends(get_verification_service),
    notifier: VerificationNotifier = Depends(get_verification_notifier)
):
    """
    Submit company details for verification.
    The reviewing automation is notified in the background; a webhook
    failure never fails the submission.
    """
    profile = service.submit(user_data, verification)
    background_tasks.add_task(
        notifier.notify,
        {
            "email": user_data.get("email"),
            "website": verification.company_website,
            "linkedin": verification.linkedin_url,
            "userId": user_data["id"],
        },
    )
    return profile
