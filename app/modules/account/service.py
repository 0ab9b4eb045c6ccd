from supabase import Client
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "DELETE"

# (table, column holding the owner's user id)
USER_OWNED_TABLES = [
    ("business_posts", "user_id"),
    ("ams_creator_profiles", "id"),
    ("ams_business_profiles", "user_id"),
    ("ams_pending_requests", "user_id"),
]


class AccountService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def delete_account(self, user_id: str, confirm: str) -> None:
        """Remove every row the user owns. Signing out is left to the caller."""
        if confirm != DELETE_CONFIRMATION:
            raise HTTPException(status_code=400, detail="Please type DELETE to confirm")

        try:
            for table, column in USER_OWNED_TABLES:
                self.supabase.table(table)\
                    .delete()\
                    .eq(column, user_id)\
                    .execute()
        except Exception as e:
            logger.error(f"Error deleting account {user_id}: {e}")
            raise HTTPException(
                status_code=500,
                detail="Error deleting account. Please try again or contact support."
            )

        logger.info(f"Deleted account data for user {user_id}")
