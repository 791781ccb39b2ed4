import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.api import router as api_router
from .core.config import Settings, get_settings
from .core.errors import AppError, InternalError, UnauthenticatedError
from .core.logging_setup import setup_logging
from .core.security import PasswordHasher, TokenService
from .core.time_utils import isoformat_utc, utc_now
from .db.session import create_db_engine, create_db_and_tables

logger = logging.getLogger(__name__)


def first_validation_message(exc: RequestValidationError) -> str:
    """Render the first failing rule as ``"<field>: <message>"``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    # Drop the "body"/"query"/"path" prefix FastAPI puts in front of field names
    loc = [str(part) for part in error.get("loc", ())[1:]]
    msg = str(error.get("msg", "Invalid value"))
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    field = ".".join(loc) or "body"
    return f"{field}: {msg}"


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": first_validation_message(exc)},
        )

    # Anything not handled above becomes a logged 500
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            content = {"error": InternalError.default_message}
            if settings.is_development:
                content["message"] = str(exc)
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, db_echo=settings.DB_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create tables on startup
        create_db_and_tables(app.state.engine)
        logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
        yield
        app.state.engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Personal task management API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Built once, read-only for the life of the process
    app.state.settings = settings
    app.state.engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = PasswordHasher.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, settings)

    # Include API routers
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def read_root():
        return {"message": settings.PROJECT_NAME}

    @app.get("/health")
    def health_check():
        return {"status": "ok", "timestamp": isoformat_utc(utc_now())}

    return app


app = create_app()
