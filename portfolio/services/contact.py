# services/contact.py
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ContactMessage
from .repository import Repository

logger = logging.getLogger(__name__)

REVIEWS_MAX_LIMIT = 100

messages: Repository[ContactMessage] = Repository(
    ContactMessage,
    order_by=(ContactMessage.created_at.desc(), ContactMessage.id.desc()),
    required=("name", "email", "message", "rating"),
    label="Message",
)


async def submit_message(db: AsyncSession, fields: dict) -> ContactMessage:
    msg = await messages.create(
        db,
        {
            "name": fields["name"],
            "email": fields["email"],
            "message": fields["message"],
            "rating": fields["rating"],
            "reviewed": False,
            "archived": False,
        },
    )
    logger.info("Contact message %s received (rating %s)", msg.id, msg.rating)
    return msg


async def list_reviews(db: AsyncSession, min_rating: int, limit: int = 20, offset: int = 0) -> list[ContactMessage]:
    limit = max(1, min(limit, REVIEWS_MAX_LIMIT))
    return await messages.list(
        db,
        ContactMessage.archived.is_(False),
        ContactMessage.rating >= min_rating,
        limit=limit,
        offset=max(0, offset),
    )


async def list_messages(db: AsyncSession, archived: Optional[bool] = None) -> list[ContactMessage]:
    where = [] if archived is None else [ContactMessage.archived.is_(archived)]
    return await messages.list(db, *where)


async def mark_reviewed(db: AsyncSession, message_id: int, reviewed: bool = True) -> ContactMessage:
    return await messages.update(db, message_id, {"reviewed": reviewed})


async def set_archived(db: AsyncSession, message_id: int, archived: bool = True) -> ContactMessage:
    return await messages.update(db, message_id, {"archived": archived})


__all__ = [
    "messages", "submit_message", "list_reviews",
    "list_messages", "mark_reviewed", "set_archived",
]
