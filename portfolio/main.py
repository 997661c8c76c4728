import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .auth import authenticate_request, is_admin_path
from .database import Database
from .errors import PortfolioError, Unauthorized
from .routers import assets, auth, blog, contact, content, projects, public
from .services.seed import ensure_admin_user
from .settings.config import Settings

logger = logging.getLogger(__name__)


def _first_error_message(errors: list) -> str:
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
    msg = err.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def _error_response(exc: PortfolioError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse({"message": exc.message}, status_code=exc.status_code, headers=headers)


# -----------------------------------------------------
# Error handlers: every failure becomes {"message": ...}
# -----------------------------------------------------
def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortfolioError)
    async def _portfolio_error_handler(request: Request, exc: PortfolioError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        # bodies are parsed before dependencies run; an admin route must still answer 401 first
        if is_admin_path(request.url.path):
            try:
                authenticate_request(request)
            except Unauthorized as auth_exc:
                return _error_response(auth_exc)
        errors = jsonable_encoder(exc.errors())
        return JSONResponse({"message": _first_error_message(errors), "errors": errors}, status_code=400)

    @app.exception_handler(SQLAlchemyError)
    async def _database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
        return JSONResponse({"message": "Server error"}, status_code=500)


# ----------------------
# App factory
# ----------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
        app.state.db = database
        try:
            if settings.DB_CREATE_ALL:
                await database.create_all()
            async with database.session_maker() as session:
                await ensure_admin_user(session, settings)
            logger.info("Portfolio API ready (%s)", database.dialect_name)
            yield
        finally:
            await database.dispose()

    app = FastAPI(title="Portfolio API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ----------------------
    # Route Includes
    # ----------------------
    app.include_router(auth.router)
    app.include_router(projects.router)
    app.include_router(blog.router)
    app.include_router(content.router)
    app.include_router(contact.router)
    app.include_router(contact.admin_router)
    app.include_router(assets.router)
    app.include_router(public.router)

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {"status": "ok", "service": "portfolio-api"}

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app
