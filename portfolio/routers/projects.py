from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import require_admin
from ..database import get_db
from ..schemas import OkResponse, ProjectCreate, ProjectRead, ProjectUpdate
from ..services.content import projects

router = APIRouter(
    prefix="/api/admin/projects",
    tags=["admin", "projects"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[ProjectRead])
async def admin_projects_list(db: AsyncSession = Depends(get_db)):
    return await projects.list(db)


@router.get("/{project_id}", response_model=ProjectRead)
async def admin_project_get(project_id: int, db: AsyncSession = Depends(get_db)):
    return await projects.get(db, project_id)


@router.post("", response_model=ProjectRead, status_code=201)
async def admin_project_create(payload: ProjectCreate, db: AsyncSession = Depends(get_db)):
    return await projects.create(db, payload.model_dump())


@router.put("/{project_id}", response_model=ProjectRead)
async def admin_project_update(project_id: int, payload: ProjectUpdate, db: AsyncSession = Depends(get_db)):
    return await projects.update(db, project_id, payload.model_dump(exclude_unset=True))


@router.delete("/{project_id}", response_model=OkResponse)
async def admin_project_delete(project_id: int, db: AsyncSession = Depends(get_db)):
    await projects.delete(db, project_id)
    return OkResponse()
