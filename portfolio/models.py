from sqlalchemy import (
    Column, Integer, String, Boolean, Text, DateTime, LargeBinary, func,
    CheckConstraint, Index,
)
from .database import Base


# ---------------------------
# ADMIN USERS
# ---------------------------
class AdminUser(Base):
    __tablename__ = "admin_user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(64), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="admin")
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<AdminUser {self.username}>"


# ---------------------------
# PROJECTS
# ---------------------------
class Project(Base):
    __tablename__ = "project"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    summary = Column(Text, nullable=True)
    details = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    github_url = Column(String(1024), nullable=True)
    youtube_url = Column(String(1024), nullable=True)
    embed_code = Column(Text, nullable=True)
    tech_stack = Column(Text, nullable=True)  # comma separated
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


# ---------------------------
# BLOG
# ---------------------------
class BlogPost(Base):
    __tablename__ = "blog_post"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    html = Column(Text, nullable=False)
    cover_image_url = Column(String(1024), nullable=True)
    video_embed_url = Column(String(1024), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    published_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_blog_post_published", "is_published", "published_at"),
    )

    def __repr__(self):
        return f"<BlogPost {self.slug}>"


# ---------------------------
# RESUME / TIMELINE
# ---------------------------
class ResumeItem(Base):
    __tablename__ = "resume_item"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    org = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    start_year = Column(Integer, nullable=True)
    end_year = Column(Integer, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)


# ---------------------------
# CONTACT MESSAGES / REVIEWS
# ---------------------------
class ContactMessage(Base):
    __tablename__ = "contact_message"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    reviewed = Column(Boolean, nullable=False, default=False)
    archived = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_contact_message_rating"),
    )


# ---------------------------
# MEDIA REFERENCES (no payload)
# ---------------------------
class MediaAsset(Base):
    __tablename__ = "media_asset"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String(16), nullable=False)  # image | video
    title = Column(String(255), nullable=False)
    url = Column(String(1024), nullable=True)
    embed_code = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("kind IN ('image', 'video')", name="ck_media_asset_kind"),
    )


# ---------------------------
# BINARY PAYLOADS
# ---------------------------
class ImageBlob(Base):
    __tablename__ = "image_blob"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=True)
    data = Column(LargeBinary, nullable=False)
    mime = Column(String(64), nullable=False)
    bytes = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class CvDocument(Base):
    __tablename__ = "cv_document"

    id = Column(Integer, primary_key=True, index=True)
    member = Column(String(32), unique=True, nullable=False)  # one row per member
    filename = Column(String(255), nullable=True)
    data = Column(LargeBinary, nullable=False)
    mime = Column(String(64), nullable=False)
    bytes = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<CvDocument {self.member}>"
