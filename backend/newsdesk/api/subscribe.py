import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.database import get_db
from newsdesk.schemas.subscriber import MessageResponse, SubscribeRequest
from newsdesk.services.subscription_service import subscribe as subscribe_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["subscribe"])


@router.post("/subscribe", response_model=MessageResponse)
async def subscribe(data: SubscribeRequest, db: AsyncSession = Depends(get_db)):
    """Join the mailing list from the public landing page. No authentication required."""
    try:
        message = await subscribe_email(db, data.email, data.name)
        return MessageResponse(message=message)
    except SQLAlchemyError as e:
        logger.error(f"Subscribe error: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
