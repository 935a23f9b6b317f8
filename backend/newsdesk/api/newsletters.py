import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.auth.guard import current_profile
from newsdesk.database import get_db
from newsdesk.models.profile import Profile
from newsdesk.schemas.newsletter import (
    NewsletterListResponse,
    NewsletterRead,
    NewsletterSave,
    SendNewsletterRequest,
    SendNewsletterResponse,
)
from newsdesk.schemas.subscriber import MessageResponse
from newsdesk.services import newsletter_service
from newsdesk.services.send_dispatcher import send_newsletter as dispatch_newsletter

logger = logging.getLogger(__name__)

router = APIRouter()


def _store_failure(action: str, e: SQLAlchemyError) -> HTTPException:
    logger.error(f"{action} error: {type(e).__name__}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post("/send", response_model=SendNewsletterResponse)
async def send_newsletter(
    body: SendNewsletterRequest,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """
    Send a published newsletter to every eligible active subscriber.

    Premium newsletters only reach pro-tier subscribers. Delivery is simulated:
    one send record is stored per recipient and each delivery is logged.
    """
    try:
        result = await dispatch_newsletter(db, body.newsletter_id)
    except SQLAlchemyError as e:
        raise _store_failure("Send newsletter", e)
    return SendNewsletterResponse(
        message="Newsletter sent successfully",
        sent_count=result.sent_count,
        newsletter_title=result.newsletter_title,
    )


@router.get("", response_model=NewsletterListResponse)
async def list_newsletters(
    limit: Optional[int] = Query(None, ge=1, le=500),
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """List newsletters newest first."""
    try:
        newsletters = await newsletter_service.list_newsletters(db, limit=limit)
    except SQLAlchemyError as e:
        raise _store_failure("List newsletters", e)
    return {"newsletters": newsletters}


@router.post("", response_model=NewsletterRead, status_code=status.HTTP_201_CREATED)
async def create_newsletter(
    payload: NewsletterSave,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Create a newsletter as a draft, or published straight away when ``publish`` is set."""
    try:
        return await newsletter_service.save_newsletter(db, payload, author_id=profile.id)
    except SQLAlchemyError as e:
        raise _store_failure("Create newsletter", e)


@router.get("/{newsletter_id}", response_model=NewsletterRead)
async def get_newsletter(
    newsletter_id: UUID,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await newsletter_service.get_newsletter(db, newsletter_id)
    except SQLAlchemyError as e:
        raise _store_failure("Get newsletter", e)


@router.put("/{newsletter_id}", response_model=NewsletterRead)
async def update_newsletter(
    newsletter_id: UUID,
    payload: NewsletterSave,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Overwrite a newsletter from the editor; ``publish`` decides the resulting state."""
    try:
        return await newsletter_service.save_newsletter(
            db, payload, author_id=profile.id, newsletter_id=newsletter_id
        )
    except SQLAlchemyError as e:
        raise _store_failure("Update newsletter", e)


@router.post("/{newsletter_id}/toggle-publish", response_model=NewsletterRead)
async def toggle_publish(
    newsletter_id: UUID,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Flip between draft and published. Publishing stamps ``published_at``; unpublishing clears it."""
    try:
        return await newsletter_service.toggle_publish(db, newsletter_id)
    except SQLAlchemyError as e:
        raise _store_failure("Publish", e)


@router.delete("/{newsletter_id}", response_model=MessageResponse)
async def delete_newsletter(
    newsletter_id: UUID,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    try:
        await newsletter_service.delete_newsletter(db, newsletter_id)
    except SQLAlchemyError as e:
        raise _store_failure("Delete", e)
    return MessageResponse(message="Newsletter deleted")
