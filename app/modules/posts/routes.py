from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.posts.schemas import (
    PostCreate, PostUpdate, PostResponse, PostDetailResponse, PostSummary, ActivePostsResponse
)
from app.modules.posts.service import PostService
from app.core.dependencies import get_current_user_id, require_verified_business
from supabase import Client
from typing import List, Dict, Optional, Literal

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(supabase: Client = Depends(get_supabase)) -> PostService:
    return PostService(supabase)


@router.get("", response_model=List[PostSummary])
async def list_projects(
    service: PostService = Depends(get_post_service)
):
    """Public project board: active posts that have not expired"""
    return service.list_public()


@router.get("/has-active", response_model=ActivePostsResponse)
async def has_active_posts(
    service: PostService = Depends(get_post_service)
):
    return ActivePostsResponse(has_active=service.has_active_posts())


@router.get("/mine", response_model=List[PostResponse])
async def list_my_posts(
    tab: Optional[Literal["active", "archived"]] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    """The caller's posts; expired active posts are archived on the way out"""
    return service.list_mine(user_data["id"], tab)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user_data: Dict = Depends(require_verified_business),
    service: PostService = Depends(get_post_service)
):
    """Publish a project (verified businesses only)"""
    return service.create_post(post_data, user_data["id"])


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service)
):
    return service.get_post(post_id)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.update_post(post_id, post_data, user_data["id"])


@router.post("/{post_id}/archive", response_model=PostResponse)
async def archive_post(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.archive_post(post_id, user_data["id"])


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    service.delete_post(post_id, user_data["id"])
    return None
