from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from capacity_tracker.routers import projects, resources
from capacity_tracker.core.config import settings
from capacity_tracker.core.errors import register_exception_handlers
from capacity_tracker.database.engine import create_db_and_tables

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}...")

    if settings.CREATE_TABLES_ON_STARTUP:
        create_db_and_tables()
        logger.info("✓ Database tables ready")

    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown complete")

app = FastAPI(
    title=settings.APP_NAME,
    description="Resource capacity tracking: weekly workload, RAG status, heatmaps and capacity summaries",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, *settings.CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(projects.router)
app.include_router(resources.router)

@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "modules": {
            "projects": "/projects/* (project lookup)",
            "resources": "/resources/* (resource register, weekly workload, heatmap and capacity summary)"
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }

@app.get("/health")
def health_check():
    return {"status": "healthy"}
