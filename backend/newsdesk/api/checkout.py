"""Mock checkout routes. Both are public: the checkout page is reached from the landing page."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.database import get_db
from newsdesk.schemas.checkout import (
    CheckoutConfirmRequest,
    CheckoutConfirmResponse,
    CheckoutRequest,
    CheckoutResponse,
)
from newsdesk.services.checkout_service import confirm_checkout, create_checkout

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/stripe/create-checkout", response_model=CheckoutResponse)
async def create_checkout_link(body: CheckoutRequest, db: AsyncSession = Depends(get_db)):
    """Return the local checkout page URL for a known subscriber. No payment gateway is called."""
    try:
        url = await create_checkout(db, body.email, body.tier)
    except SQLAlchemyError as e:
        logger.error(f"Checkout error: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return CheckoutResponse(url=url)


@router.post("/checkout/confirm", response_model=CheckoutConfirmResponse)
async def confirm(body: CheckoutConfirmRequest):
    """Finish the simulated payment. Nothing is charged and no subscriber row changes."""
    await confirm_checkout(body.email, body.tier)
    return CheckoutConfirmResponse(
        success=True,
        message="Payment Successful! Your subscription has been activated.",
    )
