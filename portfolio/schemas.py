from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator,
)


def _join_tech(value):
    # the admin form sends chips as a list; storage keeps one comma separated string
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v).strip() for v in value if str(v).strip())
    return value


# =========================
# AUTH SCHEMAS
# =========================
class LoginRequest(BaseModel):
    username: str
    password: str


class AdminUserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str
    last_login: Optional[datetime] = None


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: AdminUserRead


class IdentityRead(BaseModel):
    id: int
    username: str
    role: str


class MeResponse(BaseModel):
    ok: bool = True
    user: IdentityRead


class OkResponse(BaseModel):
    ok: bool = True


# =========================
# PROJECT SCHEMAS
# =========================
# `details` is canonical; `description` / `github_link` / `live_demo_link` are legacy keys.
class ProjectCreate(BaseModel):
    title: str
    summary: Optional[str] = None
    details: Optional[str] = Field(default=None, validation_alias=AliasChoices("details", "description"))
    image_url: Optional[str] = None
    github_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("github_url", "github_link"))
    youtube_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("youtube_url", "live_demo_link"))
    embed_code: Optional[str] = None
    tech_stack: Optional[Union[str, list[str]]] = None

    @field_validator("tech_stack")
    @classmethod
    def _tech_as_text(cls, value):
        return _join_tech(value)


class ProjectUpdate(ProjectCreate):
    title: Optional[str] = None


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: Optional[str] = None
    details: Optional[str] = None
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    youtube_url: Optional[str] = None
    embed_code: Optional[str] = None
    tech_stack: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def description(self) -> Optional[str]:
        return self.details


# =========================
# BLOG SCHEMAS
# =========================
class BlogPostCreate(BaseModel):
    title: str
    slug: Optional[str] = None
    html: str
    cover_image_url: Optional[str] = None
    video_embed_url: Optional[str] = None
    is_published: bool = False


class BlogPostUpdate(BaseModel):
    # publish state is only changed through PublishRequest
    title: Optional[str] = None
    slug: Optional[str] = None
    html: Optional[str] = None
    cover_image_url: Optional[str] = None
    video_embed_url: Optional[str] = None


class PublishRequest(BaseModel):
    publish: bool


class BlogPostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    html: str
    cover_image_url: Optional[str] = None
    video_embed_url: Optional[str] = None
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


# =========================
# RESUME SCHEMAS
# =========================
class ResumeItemCreate(BaseModel):
    title: str
    org: Optional[str] = None
    description: Optional[str] = None
    start_year: Optional[int] = Field(default=None, ge=1900, le=2200)
    end_year: Optional[int] = Field(default=None, ge=1900, le=2200)
    order_index: int = 0


class ResumeItemUpdate(ResumeItemCreate):
    title: Optional[str] = None
    order_index: Optional[int] = None


class ResumeItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    org: Optional[str] = None
    description: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    order_index: int


# =========================
# MEDIA SCHEMAS
# =========================
class MediaAssetCreate(BaseModel):
    kind: Literal["image", "video"]
    title: str
    url: Optional[str] = None
    embed_code: Optional[str] = None


class MediaAssetUpdate(BaseModel):
    kind: Optional[Literal["image", "video"]] = None
    title: Optional[str] = None
    url: Optional[str] = None
    embed_code: Optional[str] = None


class MediaAssetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    kind: str
    title: str
    url: Optional[str] = None
    embed_code: Optional[str] = None
    created_at: Optional[datetime] = None


# =========================
# CONTACT / REVIEW SCHEMAS
# =========================
class ContactCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(min_length=1, max_length=5000)
    rating: int = Field(ge=1, le=5, strict=True)
    website: Optional[str] = None  # honeypot, real visitors leave it empty


class ContactCreated(BaseModel):
    id: int
    created_at: Optional[datetime] = None
    rating: int
    message: str = "Thanks! Your message was sent successfully."


class ContactRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    message: str
    rating: int
    created_at: Optional[datetime] = None
    reviewed: bool
    archived: bool


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    message: str
    rating: int
    created_at: Optional[datetime] = None


class ReviewFlag(BaseModel):
    reviewed: bool = True


class ArchiveFlag(BaseModel):
    archived: bool = True


# =========================
# BINARY ASSET SCHEMAS
# =========================
class ImageBlobRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    mime: str
    bytes: int
    created_at: Optional[datetime] = None


class CvDocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    member: str
    filename: Optional[str] = None
    mime: str
    bytes: int
    updated_at: Optional[datetime] = None
