# Main application entry point
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import auth_router, notes_router, register_exception_handlers
from .config import get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import Database

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle at startup, close it at shutdown."""
    logger.info(
        "Starting NoteKeep application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect()

    if settings.create_tables_on_startup:
        try:
            await database.create_tables()
            logger.info("Database tables created/verified")
        except Exception:
            logger.error("Failed to create database tables", exc_info=True)
            await database.disconnect()
            raise

    app.state.database = database

    yield

    logger.info("Shutting down NoteKeep application")
    await database.disconnect()


def create_app() -> FastAPI:
    """Build the FastAPI app: middleware, error handlers and routers."""
    app = FastAPI(
        title="NoteKeep",
        description="Personal notes with tags, pinning and colors",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")

    @app.get("/health")
    async def basic_health():
        return {"success": True, "status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run("notekeep.main:app", host=settings.host, port=settings.port, reload=settings.reload)


if __name__ == "__main__":
    run()
