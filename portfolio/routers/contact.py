import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import require_admin
from ..database import get_db
from ..schemas import ArchiveFlag, ContactCreate, ContactCreated, ContactRead, OkResponse, ReviewFlag, ReviewRead
from ..services import contact
from ..settings.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])
admin_router = APIRouter(
    prefix="/api/admin/contact",
    tags=["admin", "contact"],
    dependencies=[Depends(require_admin)],
)


# ----------------------
# Public
# ----------------------
@router.post("/api/contact", status_code=201, response_model=ContactCreated)
async def contact_submit(
    payload: ContactCreate,
    db: AsyncSession = Depends(get_db),
):
    if payload.website:
        # honeypot tripped: acknowledge like a normal submission, store nothing
        logger.info("Dropped contact submission with honeypot field set")
        return JSONResponse({"ok": True, "message": ContactCreated.model_fields["message"].default}, status_code=201)
    msg = await contact.submit_message(db, payload.model_dump())
    return ContactCreated(id=msg.id, created_at=msg.created_at, rating=msg.rating)


@router.get("/api/reviews", response_model=list[ReviewRead])
async def reviews_list(
    min_rating: Optional[int] = Query(None, alias="minRating", ge=1, le=5),
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    threshold = min_rating if min_rating is not None else settings.REVIEWS_MIN_RATING
    return await contact.list_reviews(db, threshold, limit=limit, offset=offset)


# ----------------------
# Admin moderation
# ----------------------
@admin_router.get("", response_model=list[ContactRead])
async def admin_contact_list(archived: Optional[bool] = Query(None), db: AsyncSession = Depends(get_db)):
    return await contact.list_messages(db, archived=archived)


@admin_router.get("/{message_id}", response_model=ContactRead)
async def admin_contact_get(message_id: int, db: AsyncSession = Depends(get_db)):
    return await contact.messages.get(db, message_id)


@admin_router.patch("/{message_id}/review", response_model=ContactRead)
async def admin_contact_review(message_id: int, payload: Optional[ReviewFlag] = None,
                               db: AsyncSession = Depends(get_db)):
    reviewed = payload.reviewed if payload else True
    return await contact.mark_reviewed(db, message_id, reviewed)


@admin_router.patch("/{message_id}/archive", response_model=ContactRead)
async def admin_contact_archive(message_id: int, payload: Optional[ArchiveFlag] = None,
                                db: AsyncSession = Depends(get_db)):
    archived = payload.archived if payload else True
    return await contact.set_archived(db, message_id, archived)


@admin_router.delete("/{message_id}", response_model=OkResponse)
async def admin_contact_delete(message_id: int, db: AsyncSession = Depends(get_db)):
    await contact.messages.delete(db, message_id)
    return OkResponse()
