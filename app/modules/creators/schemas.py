from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from app.config.categories import is_known_category


def _clean_list(values: Optional[List[str]]) -> List[str]:
    """Trim entries, drop blanks and duplicates, keep first-seen order"""
    cleaned: List[str] = []
    for value in values or []:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class CreatorProfileUpdate(BaseModel):
    username: Optional[str] = None
    full_name: Optional[str] = None
    title: Optional[str] = None
    languages: List[str] = []
    bio: Optional[str] = None
    experience: Optional[str] = None
    tools_skills: List[str] = []
    solutions_for: List[str] = []
    video_url: Optional[str] = None
    additional_info: Optional[str] = None
    approximate_pricing: Optional[str] = None
    contact_email: Optional[str] = None
    linkedin_url: Optional[str] = None
    booking_url: Optional[str] = None

    @field_validator("languages", "tools_skills")
    @classmethod
    def dedupe(cls, values: List[str]) -> List[str]:
        return _clean_list(values)

    @field_validator("solutions_for")
    @classmethod
    def known_categories(cls, values: List[str]) -> List[str]:
        values = _clean_list(values)
        unknown = [v for v in values if not is_known_category(v)]
        if unknown:
            raise ValueError(f"Unknown solution categories: {', '.join(unknown)}")
        return values


class CreatorProfileResponse(BaseModel):
    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    title: Optional[str] = None
    languages: List[str] = []
    bio: Optional[str] = None
    experience: Optional[str] = None
    avatar_url: Optional[str] = None
    tools_skills: List[str] = []
    solutions_for: List[str] = []
    video_url: Optional[str] = None
    additional_info: Optional[str] = None
    approximate_pricing: Optional[str] = None
    contact_email: Optional[str] = None
    linkedin_url: Optional[str] = None
    booking_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("languages", "tools_skills", "solutions_for", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return value or []

    class Config:
        from_attributes = True


class CreatorSummary(BaseModel):
    id: str
    full_name: str
    title: str
    solutions_for: List[str] = []
    avatar_url: Optional[str] = None
    video_url: Optional[str] = None
    video_thumbnail_url: Optional[str] = None


class CategoryResponse(BaseModel):
    title: str
    description: str


class AvatarUploadResponse(BaseModel):
    avatar_url: str


class VideoPreviewResponse(BaseModel):
    url: str
    platform: str
    video_id: str
    thumbnail_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
