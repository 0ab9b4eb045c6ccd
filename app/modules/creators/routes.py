from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Query
from app.database.supabase_client import get_supabase
from app.modules.creators.schemas import (
    CreatorProfileUpdate, CreatorProfileResponse, CreatorSummary,
    CategoryResponse, AvatarUploadResponse, VideoPreviewResponse
)
from app.modules.creators.service import CreatorService
from app.config.categories import CATEGORIES
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/creators", tags=["creators"])


def get_creator_service(supabase: Client = Depends(get_supabase)) -> CreatorService:
    return CreatorService(supabase)


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories():
    """Solution categories shown on the dashboard"""
    return CATEGORIES


@router.get("", response_model=List[CreatorSummary])
async def list_creators(
    category: str = Query(...),
    user_data: Dict = Depends(get_current_user_id),
    service: CreatorService = Depends(get_creator_service)
):
    """Creators listed under a solution category"""
    return service.list_by_category(category)


@router.get("/video-preview", response_model=VideoPreviewResponse)
async def video_preview(
    url: str = Query(...),
    user_data: Dict = Depends(get_current_user_id),
    service: CreatorService = Depends(get_creator_service)
):
    return await service.video_preview(url)


@router.get("/me", response_model=CreatorProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: CreatorService = Depends(get_creator_service)
):
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=CreatorProfileResponse)
async def save_my_profile(
    profile_data: CreatorProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: CreatorService = Depends(get_creator_service)
):
    """Create or update the caller's creator profile"""
    return service.save_my_profile(user_data, profile_data)


@router.post("/me/avatar", response_model=AvatarUploadResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: CreatorService = Depends(get_creator_service)
):
    """Upload a profile picture (images only)"""
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Avatar must be an image")
    avatar_url = await service.upload_avatar(user_data, file)
    return AvatarUploadResponse(avatar_url=avatar_url)


@router.get("/{profile_id}", response_model=CreatorProfileResponse)
async def get_profile(
    profile_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: CreatorService = Depends(get_creator_service)
):
    return service.get_profile(profile_id)
