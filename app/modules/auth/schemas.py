from pydantic import BaseModel, EmailStr
from typing import Optional, Literal

UserType = Literal["creator", "business"]


class EmailCheckRequest(BaseModel):
    email: EmailStr


class EmailCheckResponse(BaseModel):
    email: str
    exists: bool
    requires_terms: bool


class MagicLinkRequest(BaseModel):
    email: EmailStr
    user_type: UserType = "creator"
    terms_accepted: bool = False


class MagicLinkResponse(BaseModel):
    email: str
    new_account: bool
    message: str


class RecoverRequest(BaseModel):
    email: EmailStr


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_type: UserType
    user_metadata: dict = {}


class LandingResponse(BaseModel):
    redirect_to: str
