from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class SupportMessage(BaseModel):
    email: EmailStr
    name: Optional[str] = Field(default=None, max_length=200)
    subject: Optional[str] = Field(default=None, max_length=200)
    message: str = Field(min_length=1, max_length=5000)


class SupportMessageResponse(BaseModel):
    message: str
