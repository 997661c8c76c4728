import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from fastapi_users.jwt import decode_jwt, generate_jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import Unauthorized, ValidationError
from .models import AdminUser
from .settings.config import Settings
from .utils import utcnow

logger = logging.getLogger(__name__)

TOKEN_AUDIENCE = ["portfolio:admin"]
ADMIN_PREFIX = "/api/admin/"
OPEN_ADMIN_PATHS = frozenset({"/api/admin/login"})

# pbkdf2_sha256 keeps us off the native bcrypt backend
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@dataclass(frozen=True)
class Identity:
    subject_id: int
    username: str
    role: str
    issued_at: Optional[datetime]
    expires_at: datetime


# -------------------------
# Token issue / validation
# -------------------------
def issue_token(subject_id: int, username: str, role: str, settings: Settings,
                lifetime_seconds: Optional[int] = None) -> str:
    data = {
        "sub": str(subject_id),
        "username": username,
        "role": role,
        "aud": TOKEN_AUDIENCE,
        "iat": utcnow(),
    }
    lifetime = settings.TOKEN_LIFETIME_SECONDS if lifetime_seconds is None else lifetime_seconds
    return generate_jwt(data, settings.SECRET, lifetime)


def validate_token(token: Optional[str], settings: Settings) -> Identity:
    """Decode a bearer token. Every failure collapses to the same Unauthorized."""
    if not token:
        raise Unauthorized()
    try:
        payload = decode_jwt(token, settings.SECRET, TOKEN_AUDIENCE)
        iat = payload.get("iat")
        return Identity(
            subject_id=int(payload["sub"]),
            username=str(payload["username"]),
            role=str(payload["role"]),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if iat is not None else None,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        raise Unauthorized()


# -------------------------
# Login
# -------------------------
async def login(db: AsyncSession, settings: Settings, username: str, password: str) -> tuple[str, AdminUser]:
    username = (username or "").strip()
    if not username or not (password or "").strip():
        raise ValidationError("Username and password are required")

    user = (await db.execute(select(AdminUser).where(AdminUser.username == username))).scalars().first()
    if user is None:
        pwd_context.dummy_verify()
        logger.info("Login failed for unknown user %s", username)
        raise Unauthorized("Invalid credentials")
    if not verify_password(password, user.password_hash):
        logger.info("Login failed for %s: bad password", username)
        raise Unauthorized("Invalid credentials")

    user.last_login = utcnow()
    await db.commit()
    await db.refresh(user)

    token = issue_token(user.id, user.username, user.role, settings)
    logger.info("Admin %s logged in", user.username)
    return token, user


# -------------------------
# Request dependency
# -------------------------
bearer_scheme = HTTPBearer(auto_error=False)


async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    token = credentials.credentials if credentials else None
    return validate_token(token, request.app.state.settings)


def is_admin_path(path: str) -> bool:
    return path.startswith(ADMIN_PREFIX) and path.rstrip("/") not in OPEN_ADMIN_PATHS


def authenticate_request(request: Request) -> Identity:
    """Same check as ``require_admin``, usable where dependencies have not run (body parse failures)."""
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer":
        raise Unauthorized()
    return validate_token(token, request.app.state.settings)
