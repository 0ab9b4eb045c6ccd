from fastapi import APIRouter, Depends
from app.modules.support.schemas import SupportMessage, SupportMessageResponse
from app.modules.support.service import SupportRelay, get_support_relay

router = APIRouter(prefix="/support", tags=["support"])


@router.post("/contact", response_model=SupportMessageResponse, status_code=202)
async def contact_support(
    support_message: SupportMessage,
    relay: SupportRelay = Depends(get_support_relay)
):
    """Send a message to the support inbox (one per email every 15 minutes)"""
    await relay.send(support_message)
    return SupportMessageResponse(message="Thanks! We'll get back to you soon.")
