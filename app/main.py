from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
import logging

# Database migrations are managed exclusively via Alembic
from app.routers import blog, taxonomy, uploads
from app.models import blog as blog_models, job as job_models
from app.core.config import settings
from app.core.sitemap import get_sitemap_path

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # NOTE: Database migrations are managed by Alembic exclusively.
    # Run: alembic upgrade head
    logger.info("Starting application...")

    # Initialize and start background tasks
    from app.core.background_tasks import BackgroundTaskManager
    import app.core.background_tasks as background_tasks_module
    if settings.BACKGROUND_JOBS_ENABLED:
        background_tasks_module.background_task_manager = BackgroundTaskManager()
        await background_tasks_module.background_task_manager.start()
        logger.info("✓ Background tasks started")
    else:
        logger.info("Background jobs disabled, queued generations will not run")

    logger.info("Application startup complete")

    yield

    # Cleanup on shutdown
    logger.info("Application shutdown initiated...")

    # Stop background tasks
    if background_tasks_module.background_task_manager:
        await background_tasks_module.background_task_manager.stop()
        background_tasks_module.background_task_manager = None
        logger.info("✓ Background tasks stopped")

    logger.info("Application shutdown complete")

app = FastAPI(
    title="Blog Framework Backend",
    description="Backend API for AI-generated, multilingual blogs",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,  # Frontend URL from settings
        settings.CLIENT_URL,
        "http://localhost:3000",  # React default
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],  # Allow all HTTP methods (GET, POST, PUT, DELETE, etc.)
    allow_headers=["*"],  # Allow all headers
)

# Include routers
app.include_router(blog.router, prefix=settings.API_PREFIX)                     # Blogs: /blog/*
app.include_router(taxonomy.category_router, prefix=settings.API_PREFIX)        # Categories: /category/*
app.include_router(taxonomy.subcategory_router, prefix=settings.API_PREFIX)     # SubCategories: /subcategory/*
app.include_router(taxonomy.tag_router, prefix=settings.API_PREFIX)             # Tags: /tag/*
app.include_router(uploads.router, prefix=settings.API_PREFIX)                  # Uploads: /upload

# Uploaded images
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(f"{settings.API_PREFIX}/public", StaticFiles(directory=settings.UPLOAD_DIR), name="public")


@app.get(f"{settings.API_PREFIX}/sitemap.txt", include_in_schema=False)
def get_sitemap():
    path = get_sitemap_path()
    if not path.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sitemap not found"
        )
    return FileResponse(path, media_type="text/plain")

@app.get("/")
def read_root():
    return {
        "message": "Welcome to Blog Framework API",
        "version": "1.0.0",
        "modules": {
            "blog": f"{settings.API_PREFIX}/blog/* (blogs, generation and translation jobs)",
            "category": f"{settings.API_PREFIX}/category/*",
            "subcategory": f"{settings.API_PREFIX}/subcategory/*",
            "tag": f"{settings.API_PREFIX}/tag/*",
            "upload": f"{settings.API_PREFIX}/upload",
            "sitemap": f"{settings.API_PREFIX}/sitemap.txt"
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }

@app.get("/health")
def health_check():
    return {"status": "healthy"}
