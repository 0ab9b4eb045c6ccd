from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ConsentCreate(BaseModel):
    session_id: Optional[str] = Field(default=None, max_length=128)
    analytics: bool = False
    marketing: bool = False
    version: str = "1.0"


class ConsentResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    essential: bool = True
    analytics: bool = False
    marketing: bool = False
    consent_version: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
