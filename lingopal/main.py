import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv


# Load .env before the settings are first read
PROJECT_DIR = Path(__file__).parent.parent
load_dotenv(PROJECT_DIR / ".env")

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .auth.exceptions import AuthenticationError
from .chat.router import router as chat_router
from .config.logging import setup_logging
from .config.settings import get_settings
from .courses.router import router as courses_router
from .database.engine import engine
from .database.init import init_database
from .mail.router import router as mail_router
from .materials.router import router as materials_router
from .middleware.error_handlers import handle_authentication_errors, register_exception_handlers
from .middleware.security import SimpleSecurityMiddleware, limiter
from .practices.router import router as practices_router
from .quizzes.router import router as quizzes_router
from .speech.router import router as speech_router
from .users.router import router as users_router
from .words.router import router as words_router


setup_logging(get_settings().LOG_LEVEL)
logger = logging.getLogger(__name__)

ROUTERS = (
    users_router,
    courses_router,
    practices_router,
    quizzes_router,
    words_router,
    materials_router,
    speech_router,
    chat_router,
    mail_router,
)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create missing tables on startup and release pooled connections on shutdown."""
    await init_database(engine)
    logger.info("Database ready")

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="LingoPal API",
        description="Backend for the LingoPal English learning app",
        version="1.0.0",
        debug=settings.DEBUG,
        # Tests drive the app without a database
        lifespan=None if settings.ENVIRONMENT == "test" else lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SimpleSecurityMiddleware)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app, {AuthenticationError: handle_authentication_errors})

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from lingopal.config import env

    uvicorn.run(app, host=env("API_HOST", "127.0.0.1"), port=int(env("API_PORT", "2001")))
