import re
import logging
from typing import Optional, Dict, Any

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

YOUTUBE_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=)([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:youtu\.be/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:youtube\.com/v/)([a-zA-Z0-9_-]{11})"),
]
LOOM_PATTERN = re.compile(r"loom\.com/share/([a-zA-Z0-9]+)")


def extract_video_id(url: Optional[str]) -> Optional[Dict[str, str]]:
    """Return {"platform", "id"} for YouTube and Loom links, None for anything else"""
    if not url:
        return None
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match:
            return {"platform": "youtube", "id": match.group(1)}
    match = LOOM_PATTERN.search(url)
    if match:
        return {"platform": "loom", "id": match.group(1)}
    return None


def get_video_thumbnail(url: Optional[str]) -> Optional[str]:
    # Loom has no static thumbnail URL
    info = extract_video_id(url)
    if not info or info["platform"] != "youtube":
        return None
    return f"https://img.youtube.com/vi/{info['id']}/mqdefault.jpg"


async def fetch_video_metadata(
    url: str,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Dict[str, Any]]:
    """oEmbed lookup through noembed. Any failure yields None."""
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(settings.oembed_url, params={"url": url})
            response.raise_for_status()
            data = response.json()
        if not isinstance(data, dict) or data.get("error"):
            return None
        return data
    except Exception as e:
        logger.warning(f"Error fetching video metadata for {url}: {e}")
        return None
