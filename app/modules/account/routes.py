from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.account.schemas import AccountSummaryResponse
from app.modules.account.service import AccountService
from app.modules.auth.service import AuthService
from app.modules.posts.service import PostService
from app.core.dependencies import (
    get_auth_service, get_current_token, get_current_user_id, resolve_user_type
)
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/account", tags=["account"])


def get_account_service(supabase: Client = Depends(get_supabase)) -> AccountService:
    return AccountService(supabase)


@router.get("", response_model=AccountSummaryResponse)
async def get_account(
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
):
    """Settings page header: who am I and are there live projects"""
    return AccountSummaryResponse(
        id=user_data["id"],
        email=user_data.get("email") or "",
        user_type=resolve_user_type(user_data, supabase),
        has_active_posts=PostService(supabase).has_active_posts(),
    )


@router.delete("", status_code=204)
async def delete_account(
    confirm: str = Query(""),
    token: str = Depends(get_current_token),
    user_data: Dict = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Delete all marketplace data of the caller. Requires ?confirm=DELETE."""
    service.delete_account(user_data["id"], confirm)
    auth_service.logout(token)
    return None
