# services/seed.py
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import hash_password
from ..models import AdminUser
from ..settings.config import Settings

logger = logging.getLogger(__name__)


async def ensure_admin_user(db: AsyncSession, settings: Settings) -> bool:
    """Create the bootstrap admin if missing. Returns True when a row was inserted."""
    username = (settings.ADMIN_USERNAME or "").strip()
    password = settings.ADMIN_PASSWORD

    if not username or not password:
        logger.warning("ADMIN_USERNAME or ADMIN_PASSWORD not set, skipping admin creation.")
        return False

    existing = (await db.execute(select(AdminUser).where(AdminUser.username == username))).scalars().first()
    if existing:
        logger.info("Admin user already exists: %s", username)
        return False

    db.add(AdminUser(username=username, password_hash=hash_password(password), role=settings.ADMIN_ROLE))
    await db.commit()
    logger.info("Admin user created: %s", username)
    return True
