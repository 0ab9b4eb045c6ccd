from pydantic import BaseModel, field_validator
from typing import Optional, Literal
from datetime import datetime

VerificationView = Literal["form", "pending", "verified", "rejected", "contact_support"]


class VerificationSubmit(BaseModel):
    company_website: str
    linkedin_url: Optional[str] = None

    @field_validator("company_website")
    @classmethod
    def require_http_scheme(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("http://") and not value.startswith("https://"):
            raise ValueError("Please include http:// or https:// in your website URL")
        return value

    @field_validator("linkedin_url")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class BusinessProfileResponse(BaseModel):
    id: str
    user_id: str
    company_email: Optional[str] = None
    company_website: str
    linkedin_url: Optional[str] = None
    verification_status: str
    attempt_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VerificationStatusResponse(BaseModel):
    view: VerificationView
    profile: Optional[BusinessProfileResponse] = None
    attempts_remaining: int
    can_submit: bool
    support_email: Optional[str] = None
