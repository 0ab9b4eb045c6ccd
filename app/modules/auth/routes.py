from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import (
    EmailCheckRequest, EmailCheckResponse, MagicLinkRequest, MagicLinkResponse,
    RecoverRequest, CurrentUserResponse, LandingResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import (
    get_auth_service, get_current_token, get_current_user_id,
    resolve_user_type, is_verified_business
)
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/magic-link/check", response_model=EmailCheckResponse)
async def check_email(
    request: EmailCheckRequest,
    service: AuthService = Depends(get_auth_service)
):
    """First step of the login wizard: does this email already have an account?"""
    return service.check_email(request.email)


@router.post("/magic-link", response_model=MagicLinkResponse)
async def send_magic_link(
    request: MagicLinkRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a magic link; new accounts must have accepted the terms"""
    return service.send_magic_link(request)


@router.post("/recover", status_code=200)
async def recover(
    request: RecoverRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.recover(request)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user and their resolved user type"""
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        user_type=resolve_user_type(current_user, supabase),
        user_metadata=current_user.get("user_metadata") or {},
    )


@router.get("/landing", response_model=LandingResponse)
async def landing(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
):
    """Where the magic-link callback should send the user next"""
    user_type = (current_user.get("user_metadata") or {}).get("user_type")
    if user_type == "business" and not is_verified_business(current_user["id"], supabase):
        return LandingResponse(redirect_to="/business-verification")
    return LandingResponse(redirect_to="/dashboard")
