"""
Core dependencies for route protection and user-type resolution
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

USER_TYPES = ("creator", "business")


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Like get_current_user_id, but anonymous requests yield None instead of 401"""
    if credentials is None:
        return None
    return auth_service.get_current_user(credentials.credentials)


def get_business_profile(user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Return the user's ams_business_profiles row, or None when missing or unreadable."""
    try:
        result = supabase.table("ams_business_profiles")\
            .select("*")\
            .eq("user_id", user_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            return None
        return result.data
    except Exception as e:
        logger.error(f"Error fetching business profile for {user_id}: {e}")
        return None


def has_creator_profile(user_id: str, supabase: Client) -> bool:
    try:
        result = supabase.table("ams_creator_profiles")\
            .select("id")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return bool(result.data)
    except Exception as e:
        logger.error(f"Error checking creator profile for {user_id}: {e}")
        return False


def is_verified_business(user_id: str, supabase: Client) -> bool:
    profile = get_business_profile(user_id, supabase)
    return bool(profile) and profile.get("verification_status") == "verified"


def resolve_user_type(user_data: dict, supabase: Client) -> str:
    """
    Creator profile wins, then a verified business profile, then the
    user_type stored in metadata at signup. Defaults to creator.
    """
    user_id = user_data["id"]
    if has_creator_profile(user_id, supabase):
        return "creator"
    if is_verified_business(user_id, supabase):
        return "business"
    metadata_type = (user_data.get("user_metadata") or {}).get("user_type")
    if metadata_type in USER_TYPES:
        return metadata_type
    return "creator"


def require_verified_business(
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Only businesses whose verification_status is 'verified' may post projects"""
    if not is_verified_business(user_data["id"], supabase):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Business verification required before posting projects"
        )
    return user_data
