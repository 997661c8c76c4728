# services/blog.py
"""Blog posts and their draft/published lifecycle.

A post is either a draft (``is_published`` false, ``published_at`` null) or
published (both set). Only ``set_published`` moves a post between the two;
``update_post`` never touches publish state.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import ValidationError
from ..models import BlogPost
from ..utils import slugify, utcnow
from .repository import Repository

logger = logging.getLogger(__name__)

PUBLISH_FIELDS = {"is_published", "published_at"}

posts: Repository[BlogPost] = Repository(
    BlogPost,
    order_by=(BlogPost.created_at.desc(), BlogPost.id.desc()),
    required=("title", "slug", "html"),
    label="Post",
    conflict_message="A post with this slug already exists",
)


def _normalize_slug(fields: dict) -> dict:
    raw = fields.get("slug")
    if raw is None:
        return fields
    slug = slugify(raw)
    if not slug:
        raise ValidationError("slug is required")
    return {**fields, "slug": slug}


async def create_post(db: AsyncSession, fields: dict) -> BlogPost:
    fields = dict(fields)
    fields.pop("published_at", None)
    publish = bool(fields.pop("is_published", False))
    if not (fields.get("slug") or "").strip():
        fields["slug"] = slugify(fields.get("title") or "")
    fields = _normalize_slug(fields)
    fields["is_published"] = publish
    fields["published_at"] = utcnow() if publish else None
    post = await posts.create(db, fields)
    logger.info("Created post %s (%s)", post.id, "published" if publish else "draft")
    return post


async def update_post(db: AsyncSession, post_id: int, fields: dict) -> BlogPost:
    fields = {k: v for k, v in fields.items() if k not in PUBLISH_FIELDS}
    return await posts.update(db, post_id, _normalize_slug(fields))


async def set_published(db: AsyncSession, post_id: int, publish: bool) -> BlogPost:
    """Draft -> Published stamps published_at; Published -> Draft clears it.

    Repeating the current state is a no-op, so a re-publish keeps the first
    published_at.
    """
    post = await posts.get(db, post_id)
    if publish == bool(post.is_published):
        return post
    post.is_published = publish
    post.published_at = utcnow() if publish else None
    await db.commit()
    await db.refresh(post)
    logger.info("Post %s %s", post.id, "published" if publish else "moved to draft")
    return post


async def list_published(db: AsyncSession) -> list[BlogPost]:
    return await posts.list(
        db,
        BlogPost.is_published.is_(True),
        order_by=(BlogPost.published_at.desc(), BlogPost.id.desc()),
    )


async def get_published(db: AsyncSession, slug: str) -> BlogPost:
    return await posts.first(db, BlogPost.slug == slugify(slug), BlogPost.is_published.is_(True))


__all__ = ["posts", "create_post", "update_post", "set_published", "list_published", "get_published"]
