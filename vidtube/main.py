"""VidTube API - FastAPI application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidtube.api.v1.api import api_router
from vidtube.core.config import settings
from vidtube.core.errors import register_exception_handlers
from vidtube.db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("vidtube")


async def _database_reachable() -> str | None:
    """Return None when the database answers, otherwise the error text."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        return str(e)
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    error = await _database_reachable()
    if error is None:
        logger.info("[Backend] Database: OK")
    else:
        logger.warning("[Backend] Database connection failed: %s", error)
        logger.warning("[Backend] Ensure PostgreSQL is running (e.g. docker compose up -d postgres)")
    logger.info("[Backend] API: /api/v1 | Docs: /docs | Health: /health | Ready (DB): /ready")
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(api_router, prefix="/api")

# Serve uploaded media files (uploads/users/{user_id}/{kind}/...)
uploads_dir = Path(settings.UPLOAD_DIR).resolve()
uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(uploads_dir)), name="uploads")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "api": "/api/v1",
    }


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=204)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/ready")
async def ready():
    """Health check including DB."""
    error = await _database_reachable()
    if error is not None:
        return JSONResponse(status_code=503, content={"status": "error", "database": error})
    return {"status": "ok", "database": "connected"}
