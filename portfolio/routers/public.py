"""Unauthenticated reads. Blog posts are limited to published rows."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas import BlogPostRead, MediaAssetRead, ProjectRead, ResumeItemRead
from ..services import blog
from ..services.content import media_assets, projects, resume_items

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/projects", response_model=list[ProjectRead])
async def projects_list(db: AsyncSession = Depends(get_db)):
    return await projects.list(db)


@router.get("/blog", response_model=list[BlogPostRead])
async def blog_list(db: AsyncSession = Depends(get_db)):
    return await blog.list_published(db)


@router.get("/blog/{slug}", response_model=BlogPostRead)
async def blog_get(slug: str, db: AsyncSession = Depends(get_db)):
    return await blog.get_published(db, slug)


@router.get("/resume", response_model=list[ResumeItemRead])
async def resume_list(db: AsyncSession = Depends(get_db)):
    return await resume_items.list(db)


@router.get("/media", response_model=list[MediaAssetRead])
async def media_list(db: AsyncSession = Depends(get_db)):
    return await media_assets.list(db)
