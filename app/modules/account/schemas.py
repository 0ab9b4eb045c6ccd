from pydantic import BaseModel
from typing import Literal


class AccountSummaryResponse(BaseModel):
    id: str
    email: str
    user_type: Literal["creator", "business"]
    has_active_posts: bool
