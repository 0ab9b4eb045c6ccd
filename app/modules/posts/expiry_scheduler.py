import asyncio
import logging
from app.config import settings
from app.database.supabase_client import get_service_supabase
from app.modules.posts.service import PostService

logger = logging.getLogger(__name__)


async def archive_expired_posts():
    """Archive expired posts that no owner has looked at since they expired."""
    try:
        service = PostService(get_service_supabase())
        archived = await asyncio.to_thread(service.archive_expired_posts)
        if not archived:
            logger.debug("No expired posts found")
            return
        logger.info(f"Archived {archived} expired post(s)")
    except Exception as e:
        logger.error(f"Error in post expiry sweep: {str(e)}")


async def expiry_scheduler_loop():
    """Background task that periodically archives expired posts"""
    while True:
        try:
            await archive_expired_posts()
        except Exception as e:
            logger.error(f"Error in post expiry loop: {str(e)}")

        await asyncio.sleep(settings.post_expiry_sweep_seconds)
