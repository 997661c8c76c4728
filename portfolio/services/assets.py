# services/assets.py
"""Binary payloads kept in-row: immutable images and one CV per member."""
import logging
from typing import Collection, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only

from ..errors import NotFound, PayloadTooLarge, ServerError, UnsupportedMediaType, ValidationError
from ..models import CvDocument, ImageBlob
from ..utils import clean_filename, normalize_mime

logger = logging.getLogger(__name__)

MiB = 1024 * 1024
IMAGE_MAX_BYTES = 10 * MiB
CV_MAX_BYTES = 15 * MiB
IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})
CV_MIME_TYPES = frozenset({"application/pdf"})

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def check_upload(data: bytes, mime: Optional[str], *, max_bytes: int, allowed: Collection[str]) -> str:
    """Validate size and declared type; returns the normalized mime."""
    mime = normalize_mime(mime)
    if mime not in allowed:
        logger.info("Rejected upload with type %r", mime)
        raise UnsupportedMediaType(f"Unsupported file type; allowed: {', '.join(sorted(allowed))}")
    if not data:
        raise ValidationError("Empty file")
    if len(data) > max_bytes:
        logger.info("Rejected %s upload of %d bytes (limit %d)", mime, len(data), max_bytes)
        raise PayloadTooLarge(f"File too large (max {max_bytes // MiB} MB)")
    return mime


# ---------------------------
# Images
# ---------------------------
async def store_image(db: AsyncSession, data: bytes, mime: Optional[str], title: Optional[str] = None,
                      *, max_bytes: int = IMAGE_MAX_BYTES) -> ImageBlob:
    mime = check_upload(data, mime, max_bytes=max_bytes, allowed=IMAGE_MIME_TYPES)
    blob = ImageBlob(title=(title or "").strip() or None, data=data, mime=mime, bytes=len(data))
    db.add(blob)
    await db.commit()
    await db.refresh(blob)
    logger.info("Stored image %s (%s, %d bytes)", blob.id, mime, blob.bytes)
    return blob


async def fetch_image(db: AsyncSession, image_id: int) -> ImageBlob:
    blob = await db.get(ImageBlob, image_id)
    if blob is None:
        raise NotFound("Image not found")
    return blob


async def list_images(db: AsyncSession) -> list[ImageBlob]:
    stmt = (
        select(ImageBlob)
        .options(load_only(ImageBlob.id, ImageBlob.title, ImageBlob.mime, ImageBlob.bytes, ImageBlob.created_at))
        .order_by(ImageBlob.created_at.desc(), ImageBlob.id.desc())
    )
    return list((await db.execute(stmt)).scalars().all())


# ---------------------------
# CVs
# ---------------------------
def _normalize_member(member: Optional[str]) -> str:
    return (member or "").strip().lower()


async def store_cv(db: AsyncSession, member: str, data: bytes, mime: Optional[str],
                   filename: Optional[str] = None, *, members: Collection[str],
                   max_bytes: int = CV_MAX_BYTES) -> CvDocument:
    """Insert-or-replace the CV for ``member`` in one statement keyed on the unique member column."""
    member = _normalize_member(member)
    if member not in members:
        raise ValidationError(f"member must be one of: {', '.join(members)}")
    mime = check_upload(data, mime, max_bytes=max_bytes, allowed=CV_MIME_TYPES)
    filename = clean_filename(filename or "") or f"{member}-cv.pdf"

    insert = _UPSERT_INSERTS.get(db.bind.dialect.name)
    if insert is None:
        raise ServerError(f"CV upsert not supported on {db.bind.dialect.name}")
    stmt = insert(CvDocument).values(
        member=member, filename=filename, data=data, mime=mime, bytes=len(data), updated_at=func.now(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[CvDocument.member],
        set_={
            "filename": stmt.excluded.filename,
            "data": stmt.excluded.data,
            "mime": stmt.excluded.mime,
            "bytes": stmt.excluded.bytes,
            "updated_at": func.now(),
        },
    )
    await db.execute(stmt)
    await db.commit()
    logger.info("Stored CV for %s (%d bytes)", member, len(data))

    doc = (await db.execute(
        select(CvDocument).where(CvDocument.member == member).execution_options(populate_existing=True)
    )).scalars().one()
    return doc


async def fetch_latest_cv(db: AsyncSession, member: Optional[str]) -> CvDocument:
    member = _normalize_member(member)
    doc = (await db.execute(select(CvDocument).where(CvDocument.member == member))).scalars().first()
    if doc is None:
        raise NotFound("CV not found")
    return doc


async def list_cvs(db: AsyncSession, member: Optional[str] = None) -> list[CvDocument]:
    stmt = (
        select(CvDocument)
        .options(load_only(CvDocument.id, CvDocument.member, CvDocument.filename, CvDocument.mime,
                           CvDocument.bytes, CvDocument.updated_at))
        .order_by(CvDocument.member.asc())
    )
    if member:
        stmt = stmt.where(CvDocument.member == _normalize_member(member))
    return list((await db.execute(stmt)).scalars().all())


__all__ = [
    "IMAGE_MAX_BYTES", "CV_MAX_BYTES", "IMAGE_MIME_TYPES", "CV_MIME_TYPES",
    "check_upload", "store_image", "fetch_image", "list_images",
    "store_cv", "fetch_latest_cv", "list_cvs",
]
