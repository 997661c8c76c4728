from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import Identity, login, require_admin
from ..database import get_db
from ..schemas import AdminUserRead, IdentityRead, LoginRequest, LoginResponse, MeResponse
from ..settings.config import Settings, get_settings

router = APIRouter(prefix="/api/admin", tags=["admin", "auth"])


@router.post("/login", response_model=LoginResponse)
async def admin_login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = await login(db, settings, payload.username, payload.password)
    return LoginResponse(
        token=token,
        expires_in=settings.TOKEN_LIFETIME_SECONDS,
        user=AdminUserRead.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
async def admin_me(identity: Identity = Depends(require_admin)):
    return MeResponse(
        ok=True,
        user=IdentityRead(id=identity.subject_id, username=identity.username, role=identity.role),
    )
