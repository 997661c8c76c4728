from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import require_admin
from ..database import get_db
from ..errors import NotFound
from ..schemas import CvDocumentRead, ImageBlobRead
from ..services import assets
from ..settings.config import Settings, get_settings
from ..utils import clean_filename, is_truthy, read_limited

router = APIRouter(tags=["assets"])


# ----------------------
# Images
# ----------------------
@router.post("/api/images-blob", response_model=ImageBlobRead, status_code=201)
async def image_blob_upload(
    image: UploadFile = File(...),
    title: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    admin=Depends(require_admin),
):
    data = await read_limited(image, settings.IMAGE_MAX_BYTES)
    return await assets.store_image(
        db, data, image.content_type, title or image.filename, max_bytes=settings.IMAGE_MAX_BYTES,
    )


@router.get("/api/images-blob", response_model=list[ImageBlobRead])
async def image_blob_list(db: AsyncSession = Depends(get_db)):
    return await assets.list_images(db)


@router.get("/api/images-blob/{image_id}")
async def image_blob_get(image_id: int, db: AsyncSession = Depends(get_db)):
    try:
        blob = await assets.fetch_image(db, image_id)
    except NotFound:
        return Response(status_code=404)
    return Response(
        content=blob.data,
        media_type=blob.mime,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )


# ----------------------
# CVs
# ----------------------
async def _upload_cv(file: UploadFile, member: str, db: AsyncSession, settings: Settings):
    data = await read_limited(file, settings.CV_MAX_BYTES)
    return await assets.store_cv(
        db, member, data, file.content_type, file.filename,
        members=settings.CV_MEMBERS, max_bytes=settings.CV_MAX_BYTES,
    )


@router.post("/api/cv", response_model=CvDocumentRead)
async def cv_upload(
    file: UploadFile = File(...),
    member: str = Form(...),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    admin=Depends(require_admin),
):
    return await _upload_cv(file, member, db, settings)


@router.post("/api/admin/cv", response_model=CvDocumentRead)
async def admin_cv_upload(
    file: UploadFile = File(...),
    member: str = Form(...),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    admin=Depends(require_admin),
):
    return await _upload_cv(file, member, db, settings)


@router.get("/api/cv", response_model=list[CvDocumentRead])
async def cv_list(member: Optional[str] = Query(None), db: AsyncSession = Depends(get_db)):
    return await assets.list_cvs(db, member)


@router.get("/api/cv/latest")
async def cv_latest(
    member: str = Query(...),
    download: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    doc = await assets.fetch_latest_cv(db, member)
    disposition = "attachment" if is_truthy(download) else "inline"
    filename = clean_filename(doc.filename or "") or f"{doc.member}-cv.pdf"
    return Response(
        content=doc.data,
        media_type=doc.mime,
        headers={
            "Content-Disposition": f'{disposition}; filename="{filename}"',
            "Cache-Control": "no-cache",
        },
    )
