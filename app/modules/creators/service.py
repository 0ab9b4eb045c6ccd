from supabase import Client
from app.modules.creators.schemas import (
    CreatorProfileUpdate, CreatorProfileResponse, CreatorSummary, VideoPreviewResponse
)
from app.modules.creators.s3_storage import S3Storage
from app.modules.creators.video import extract_video_id, get_video_thumbnail, fetch_video_metadata
from app.config import settings
from app.config.categories import is_known_category
from typing import List, Optional, Dict, Any
from fastapi import HTTPException, UploadFile
from datetime import datetime, timezone
import os
import time
import logging

logger = logging.getLogger(__name__)

TABLE = "ams_creator_profiles"


class CreatorService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.upload_path = "avatars"

        # Initialize S3 storage if credentials are available
        self.s3_storage = None
        if settings.s3_configured:
            try:
                self.s3_storage = S3Storage()
            except Exception as e:
                logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
                self.s3_storage = None

    def _get_row(self, profile_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table(TABLE)\
            .select("*")\
            .eq("id", profile_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            return None
        return result.data

    def get_profile(self, profile_id: str) -> CreatorProfileResponse:
        """Get creator profile by ID"""
        try:
            row = self._get_row(profile_id)
            if not row:
                raise HTTPException(status_code=404, detail="Profile not found")
            return CreatorProfileResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_by_category(self, category: str) -> List[CreatorSummary]:
        """Creators offering solutions in a category; incomplete profiles (no name or title) are hidden"""
        if not is_known_category(category):
            raise HTTPException(status_code=404, detail="Category not found")
        try:
            result = self.supabase.table(TABLE)\
                .select("id, full_name, title, solutions_for, avatar_url, video_url")\
                .contains("solutions_for", [category])\
                .execute()
            summaries = []
            for row in result.data or []:
                if not row.get("full_name") or not row.get("title"):
                    continue
                if category not in (row.get("solutions_for") or []):
                    continue
                summaries.append(CreatorSummary(
                    id=row["id"],
                    full_name=row["full_name"],
                    title=row["title"],
                    solutions_for=row.get("solutions_for") or [],
                    avatar_url=row.get("avatar_url"),
                    video_url=row.get("video_url"),
                    video_thumbnail_url=get_video_thumbnail(row.get("video_url")),
                ))
            return summaries
        except Exception as e:
            logger.error(f"Error fetching profiles: {e}")
            raise HTTPException(status_code=500, detail="Failed to load profiles")

    def save_my_profile(self, user_data: dict, profile_data: CreatorProfileUpdate) -> CreatorProfileResponse:
        """Insert the caller's profile on first save, update it afterwards"""
        user_id = user_data["id"]
        try:
            existing = self._get_row(user_id)
            data = profile_data.model_dump()
            data["username"] = (data.get("username") or "").strip() or user_data.get("email")
            data["updated_at"] = datetime.now(timezone.utc).isoformat()

            if existing:
                result = self.supabase.table(TABLE)\
                    .update(data)\
                    .eq("id", user_id)\
                    .execute()
                if not result.data:
                    raise HTTPException(status_code=500, detail="Failed to update profile")
            else:
                result = self.supabase.table(TABLE).insert({"id": user_id, **data}).execute()
                if not result.data:
                    raise HTTPException(status_code=500, detail="Failed to create profile")

            return CreatorProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving profile: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    async def upload_avatar(self, user_data: dict, file: UploadFile) -> str:
        """Upload avatar image to S3 or Supabase Storage and store its public URL on the profile"""
        user_id = user_data["id"]
        extension = os.path.splitext(file.filename or "")[1].lstrip(".") or "png"
        file_name = f"avatar-{user_id}-{int(time.time() * 1000)}.{extension}"
        file_path = f"{self.upload_path}/{file_name}"
        content_type = file.content_type or "image/png"

        file_content = await file.read()
        if not file_content:
            raise HTTPException(status_code=400, detail="Empty file")

        if self.s3_storage:
            logger.info(f"Uploading avatar to S3: {file_path}")
            try:
                avatar_url = self.s3_storage.upload_file(file_content, file_path, content_type)
            except Exception as e:
                logger.error(f"S3 upload failed: {str(e)}")
                raise HTTPException(status_code=500, detail="Failed to upload avatar")
        else:
            try:
                bucket = self.supabase.storage.from_(settings.media_bucket)
                bucket.upload(file_path, file_content, file_options={"content-type": content_type})
                avatar_url = bucket.get_public_url(file_path)
                logger.info(f"Uploaded avatar to Supabase Storage: {file_path}")
            except Exception as e:
                logger.error(f"Supabase Storage upload failed: {str(e)}")
                raise HTTPException(status_code=500, detail="Failed to upload avatar")

        try:
            update = {"avatar_url": avatar_url, "updated_at": datetime.now(timezone.utc).isoformat()}
            result = self.supabase.table(TABLE)\
                .update(update)\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                self.supabase.table(TABLE).insert({
                    "id": user_id,
                    "username": user_data.get("email"),
                    **update,
                }).execute()
        except Exception as e:
            logger.error(f"Error saving avatar URL: {e}")
            raise HTTPException(status_code=500, detail="Failed to save avatar")

        return avatar_url

    async def video_preview(self, url: str) -> VideoPreviewResponse:
        info = extract_video_id(url)
        if not info:
            raise HTTPException(status_code=400, detail="Only YouTube and Loom links are supported")
        return VideoPreviewResponse(
            url=url,
            platform=info["platform"],
            video_id=info["id"],
            thumbnail_url=get_video_thumbnail(url),
            metadata=await fetch_video_metadata(url),
        )
