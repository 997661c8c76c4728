from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import require_admin
from ..database import get_db
from ..schemas import BlogPostCreate, BlogPostRead, BlogPostUpdate, OkResponse, PublishRequest
from ..services import blog

router = APIRouter(
    prefix="/api/admin/blog",
    tags=["admin", "blog"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[BlogPostRead])
async def admin_blog_list(db: AsyncSession = Depends(get_db)):
    # drafts included, newest first
    return await blog.posts.list(db)


@router.get("/{post_id}", response_model=BlogPostRead)
async def admin_blog_get(post_id: int, db: AsyncSession = Depends(get_db)):
    return await blog.posts.get(db, post_id)


@router.post("", response_model=BlogPostRead, status_code=201)
async def admin_blog_create(payload: BlogPostCreate, db: AsyncSession = Depends(get_db)):
    return await blog.create_post(db, payload.model_dump())


@router.put("/{post_id}", response_model=BlogPostRead)
async def admin_blog_update(post_id: int, payload: BlogPostUpdate, db: AsyncSession = Depends(get_db)):
    return await blog.update_post(db, post_id, payload.model_dump(exclude_unset=True))


@router.patch("/{post_id}/publish", response_model=BlogPostRead)
async def admin_blog_publish(post_id: int, payload: PublishRequest, db: AsyncSession = Depends(get_db)):
    return await blog.set_published(db, post_id, payload.publish)


@router.delete("/{post_id}", response_model=OkResponse)
async def admin_blog_delete(post_id: int, db: AsyncSession = Depends(get_db)):
    await blog.posts.delete(db, post_id)
    return OkResponse()
