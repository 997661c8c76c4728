"""Admin CRUD for the resume timeline and media references."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import require_admin
from ..database import get_db
from ..schemas import (
    MediaAssetCreate, MediaAssetRead, MediaAssetUpdate, OkResponse,
    ResumeItemCreate, ResumeItemRead, ResumeItemUpdate,
)
from ..services.content import media_assets, resume_items

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# ----------------------
# Resume
# ----------------------
@router.get("/resume", response_model=list[ResumeItemRead])
async def admin_resume_list(db: AsyncSession = Depends(get_db)):
    return await resume_items.list(db)


@router.get("/resume/{item_id}", response_model=ResumeItemRead)
async def admin_resume_get(item_id: int, db: AsyncSession = Depends(get_db)):
    return await resume_items.get(db, item_id)


@router.post("/resume", response_model=ResumeItemRead, status_code=201)
async def admin_resume_create(payload: ResumeItemCreate, db: AsyncSession = Depends(get_db)):
    return await resume_items.create(db, payload.model_dump())


@router.put("/resume/{item_id}", response_model=ResumeItemRead)
async def admin_resume_update(item_id: int, payload: ResumeItemUpdate, db: AsyncSession = Depends(get_db)):
    return await resume_items.update(db, item_id, payload.model_dump(exclude_unset=True))


@router.delete("/resume/{item_id}", response_model=OkResponse)
async def admin_resume_delete(item_id: int, db: AsyncSession = Depends(get_db)):
    await resume_items.delete(db, item_id)
    return OkResponse()


# ----------------------
# Media
# ----------------------
@router.get("/media", response_model=list[MediaAssetRead])
async def admin_media_list(db: AsyncSession = Depends(get_db)):
    return await media_assets.list(db)


@router.get("/media/{media_id}", response_model=MediaAssetRead)
async def admin_media_get(media_id: int, db: AsyncSession = Depends(get_db)):
    return await media_assets.get(db, media_id)


@router.post("/media", response_model=MediaAssetRead, status_code=201)
async def admin_media_create(payload: MediaAssetCreate, db: AsyncSession = Depends(get_db)):
    return await media_assets.create(db, payload.model_dump())


@router.put("/media/{media_id}", response_model=MediaAssetRead)
async def admin_media_update(media_id: int, payload: MediaAssetUpdate, db: AsyncSession = Depends(get_db)):
    return await media_assets.update(db, media_id, payload.model_dump(exclude_unset=True))


@router.delete("/media/{media_id}", response_model=OkResponse)
async def admin_media_delete(media_id: int, db: AsyncSession = Depends(get_db)):
    await media_assets.delete(db, media_id)
    return OkResponse()
