from supabase import Client
from pydantic import TypeAdapter
from app.modules.posts.schemas import (
    PostCreate, PostUpdate, PostResponse, PostDetailResponse, PostSummary
)
from app.config import settings
from typing import List, Optional, Dict, Any, Tuple
from fastapi import HTTPException
from datetime import datetime, timedelta, timezone
import logging

logger = logging.getLogger(__name__)

TABLE = "business_posts"

_datetime_adapter = TypeAdapter(datetime)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a PostgREST timestamp; naive values are taken as UTC"""
    if value is None or value == "":
        return None
    parsed = _datetime_adapter.validate_python(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_expired(post: Dict[str, Any], now: Optional[datetime] = None) -> bool:
    expires_at = parse_timestamp(post.get("expires_at"))
    if expires_at is None:
        return False
    return expires_at < (now or _utcnow())


def auto_archive(posts: List[Dict[str, Any]], now: Optional[datetime] = None) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Report expired active posts as archived. Returns (posts, ids that need the status write-back)."""
    now = now or _utcnow()
    to_archive = []
    updated = []
    for post in posts:
        if post.get("status") == "active" and is_expired(post, now):
            to_archive.append(post["id"])
            post = {**post, "status": "archived"}
        updated.append(post)
    return updated, to_archive


class PostService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_public(self) -> List[PostSummary]:
        """Active, unexpired posts for the public project board, newest first"""
        try:
            result = self.supabase.table(TABLE)\
                .select("id, project_title, company_name, created_at")\
                .eq("status", "active")\
                .gt("expires_at", _utcnow().isoformat())\
                .order("created_at", desc=True)\
                .execute()
            return [PostSummary(**post) for post in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching posts: {e}")
            raise HTTPException(status_code=500, detail="Failed to load projects")

    def has_active_posts(self) -> bool:
        """True if any business has a published project; drives the 'Projects' nav link"""
        try:
            result = self.supabase.table(TABLE)\
                .select("id")\
                .eq("status", "active")\
                .gt("expires_at", _utcnow().isoformat())\
                .limit(1)\
                .execute()
            return bool(result.data)
        except Exception as e:
            logger.error(f"Error checking active posts: {e}")
            return False

    def _get_row(self, post_id: str) -> Dict[str, Any]:
        result = self.supabase.table(TABLE)\
            .select("*")\
            .eq("id", post_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return result.data

    def _get_owned(self, post_id: str, user_id: str) -> Dict[str, Any]:
        post = self._get_row(post_id)
        if post.get("user_id") != user_id:
            raise HTTPException(status_code=403, detail="You can only manage your own posts")
        return post

    def get_post(self, post_id: str) -> PostDetailResponse:
        try:
            post = self._get_row(post_id)
            return PostDetailResponse(**post, is_expired=is_expired(post))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_mine(self, user_id: str, tab: Optional[str] = None) -> List[PostResponse]:
        """
        The owner's posts. Expired active posts are archived on read: the
        response already shows them archived and the status is written back
        in one batch update, best effort.
        """
        try:
            result = self.supabase.table(TABLE)\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching posts: {e}")
            raise HTTPException(status_code=500, detail="Failed to load posts")

        posts, to_archive = auto_archive(result.data or [])
        if to_archive:
            try:
                self.supabase.table(TABLE)\
                    .update({"status": "archived"})\
                    .in_("id", to_archive)\
                    .execute()
                logger.info(f"Auto-archived {len(to_archive)} expired post(s) for user {user_id}")
            except Exception as e:
                logger.error(f"Error auto-archiving posts: {e}")

        if tab:
            posts = [p for p in posts if p.get("status") == tab]
        return [PostResponse(**post) for post in posts]

    def create_post(self, post_data: PostCreate, user_id: str) -> PostResponse:
        """Create a new post, live for POST_TTL_DAYS"""
        try:
            now = _utcnow()
            result = self.supabase.table(TABLE).insert({
                **post_data.model_dump(),
                "user_id": user_id,
                "status": "active",
                "created_at": now.isoformat(),
                "expires_at": (now + timedelta(days=settings.post_ttl_days)).isoformat(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save post")

            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_post(self, post_id: str, post_data: PostUpdate, user_id: str) -> PostResponse:
        """Replace the post's fields and put it back on the board; an expired post gets a fresh TTL"""
        try:
            post = self._get_owned(post_id, user_id)
            update_data = {**post_data.model_dump(), "status": "active"}
            if is_expired(post):
                update_data["expires_at"] = (_utcnow() + timedelta(days=settings.post_ttl_days)).isoformat()

            result = self.supabase.table(TABLE)\
                .update(update_data)\
                .eq("id", post_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Post not found")

            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def archive_post(self, post_id: str, user_id: str) -> PostResponse:
        try:
            self._get_owned(post_id, user_id)
            result = self.supabase.table(TABLE)\
                .update({"status": "archived"})\
                .eq("id", post_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Post not found")
            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_post(self, post_id: str, user_id: str) -> bool:
        try:
            self._get_owned(post_id, user_id)
            result = self.supabase.table(TABLE)\
                .delete()\
                .eq("id", post_id)\
                .execute()
            return len(result.data or []) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def archive_expired_posts(self) -> int:
        """Archive every expired active post across all owners. Returns the number archived."""
        try:
            result = self.supabase.table(TABLE)\
                .update({"status": "archived"})\
                .eq("status", "active")\
                .lt("expires_at", _utcnow().isoformat())\
                .execute()
            return len(result.data or [])
        except Exception as e:
            logger.error(f"Error archiving expired posts: {str(e)}")
            return 0
