from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime


class PostCreate(BaseModel):
    project_title: str
    company_name: str
    automation_needs: str
    technical_stack: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    languages: Optional[str] = None
    additional_info: Optional[str] = None
    contact_email: EmailStr

    @field_validator("project_title", "company_name", "automation_needs")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("technical_stack", "budget", "timeline", "languages", "additional_info")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


# Edits resubmit the whole form
PostUpdate = PostCreate


class PostResponse(BaseModel):
    id: str
    user_id: str
    project_title: str
    company_name: str
    automation_needs: str
    technical_stack: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    languages: Optional[str] = None
    additional_info: Optional[str] = None
    contact_email: str
    status: str
    created_at: datetime
    expires_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PostDetailResponse(PostResponse):
    is_expired: bool


class PostSummary(BaseModel):
    id: str
    project_title: str
    company_name: str
    created_at: datetime


class ActivePostsResponse(BaseModel):
    has_active: bool
