# services/content.py
from ..models import MediaAsset, Project, ResumeItem
from .repository import Repository

projects: Repository[Project] = Repository(
    Project,
    order_by=(Project.created_at.desc(), Project.id.desc()),
    required=("title",),
)

resume_items: Repository[ResumeItem] = Repository(
    ResumeItem,
    order_by=(ResumeItem.order_index.asc(), ResumeItem.id.asc()),
    required=("title",),
    label="Resume item",
)

media_assets: Repository[MediaAsset] = Repository(
    MediaAsset,
    order_by=(MediaAsset.created_at.desc(), MediaAsset.id.desc()),
    required=("title", "kind"),
    label="Media",
)

__all__ = ["projects", "resume_items", "media_assets"]
