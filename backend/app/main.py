import asyncio
import contextlib
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from backend.app.api.v1.router import api_router
from backend.app.core.config import settings
from backend.app.core.exceptions import AppError, AuthenticationError
from backend.app.core.logging import setup_logging
from backend.app.core.messages import pick_language, translate
from backend.app.db.base import Base, engine
from backend.app.security.rate_limit import RateLimiter, run_sweeper
from backend.app.security.session import clear_session_cookies

# --- Import Models so SQLAlchemy knows every table ---
from backend.app import models  # noqa: F401

logger = logging.getLogger(__name__)


def create_rate_limiters(app: FastAPI) -> list:
    """One limiter per concern, owned by this process only."""
    app.state.login_limiter = RateLimiter(
        max_attempts=settings.LOGIN_MAX_ATTEMPTS,
        window_seconds=settings.LOGIN_WINDOW_SECONDS,
        backoff_multiplier=2,
        max_lockout_seconds=settings.LOGIN_MAX_LOCKOUT_SECONDS,
    )
    app.state.vote_limiter = RateLimiter(
        max_attempts=settings.VOTE_RATE_LIMIT,
        window_seconds=settings.VOTE_RATE_WINDOW_SECONDS,
    )
    app.state.register_limiter = RateLimiter(
        max_attempts=settings.REGISTER_RATE_LIMIT,
        window_seconds=settings.REGISTER_RATE_WINDOW_SECONDS,
    )
    return [app.state.login_limiter, app.state.vote_limiter, app.state.register_limiter]


# --- LIFESPAN: create tables, start the rate limiter sweep ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    limiters = create_rate_limiters(app)
    sweeper = asyncio.create_task(run_sweeper(limiters, settings.RATE_LIMIT_SWEEP_SECONDS))
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)

    yield

    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        # Cookies carry the admin session
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _language(request: Request) -> str:
    return pick_language(request.headers.get("accept-language"))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    content = {"detail": translate(exc.message_key, _language(request), **exc.params)}
    content.update(exc.extra)
    response = JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)
    if isinstance(exc, AuthenticationError) and exc.clear_session:
        clear_session_cookies(response)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query")),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": translate("invalid_input", _language(request)), "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Details stay in the server log, the client only gets the generic message
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": translate("internal_error", _language(request))},
    )


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}
