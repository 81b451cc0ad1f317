# app/routers/blog.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List
import logging

from app.database.engine import get_db
from app.core.auth import require_auth_key
from app.core.sitemap import add_to_sitemap, blog_url
from app.models.blog import BlogStatus, Category, SubCategory
from app.crud.blog import blog_crud
from app.services.job_service import GenerationJobService
from app.schemas.common import PaginatedResponse, SuccessResponse, create_pagination_metadata
from app.schemas.blog import (
    AuthRequest, BlogCreate, BlogUpdate, BlogSummary, BlogDetail, BlogWithRelated,
    GenerateBlogRequest, GenerationStartedResponse, GenerationJobRead, TranslateBlogRequest
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/blog",
    tags=["blog"],
    responses={404: {"description": "Not found"}},
)


# ========================================
# GENERATION ENDPOINTS
# ========================================

@router.post("/generateBlog", response_model=GenerationStartedResponse, status_code=status.HTTP_201_CREATED)
def generate_blog(
    request: GenerateBlogRequest,
    db: Session = Depends(get_db)
):
    """
    Queue generation of a blog about `title`.

    The blog is written, saved, translated and added to the sitemap by the
    background job processor once the generation delay has passed.

    **Permissions**: `auth` must match AUTH_KEY
    """
    require_auth_key(request.auth)

    if not request.title or not request.title.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="title is Required"
        )

    try:
        job = GenerationJobService.enqueue_generation(
            db,
            title=request.title.strip(),
            cta_type=request.cta_type,
            cta_link=request.cta_link,
            main_image=request.image,
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to start blog generation: {str(e)}"
        )

    logger.info(f"Started: {job.title}")
    return GenerationStartedResponse(message="Blog generation started", job_id=job.id, run_after=job.run_after)


@router.get("/jobs/{job_id}", response_model=GenerationJobRead)
def get_generation_job(job_id: int, db: Session = Depends(get_db)):
    """Get the status of a queued generation or translation."""
    job = GenerationJobService.get_job(db, job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found"
        )
    return job


@router.post("/{blog_id}/translate", response_model=GenerationJobRead, status_code=status.HTTP_202_ACCEPTED)
def translate_blog(
    blog_id: int,
    request: TranslateBlogRequest,
    db: Session = Depends(get_db)
):
    """
    Queue a translation of a blog into `language`.

    **Permissions**: `auth` must match AUTH_KEY
    """
    require_auth_key(request.auth)

    blog = blog_crud.get_blog(db, blog_id)
    if not blog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog not found"
        )

    return GenerationJobService.enqueue_translation(db, blog_id, request.language)


# ========================================
# BLOG ENDPOINTS
# ========================================

@router.post("/", response_model=BlogDetail, status_code=status.HTTP_201_CREATED)
async def create_blog(
    blog_data: BlogCreate,
    db: Session = Depends(get_db)
):
    """
    Create a blog by hand, with English content.

    **Permissions**: `auth` must match AUTH_KEY
    """
    require_auth_key(blog_data.auth)

    try:
        blog = blog_crud.create_blog(db, blog_data)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create blog: {str(e)}"
        )

    if blog.status == BlogStatus.published:
        await add_to_sitemap(blog_url(blog.slug, "en"))

    return BlogDetail.from_blog(blog, "en")


@router.get("/", response_model=List[BlogSummary])
def get_blogs(
    lang: str = Query("en", min_length=2, max_length=10),
    db: Session = Depends(get_db)
):
    """Get every blog with its category, localized to `lang` (English fallback)."""
    blogs = blog_crud.get_blogs(db)
    return [BlogSummary.from_blog(blog, lang) for blog in blogs]


@router.get("/latest", response_model=PaginatedResponse[BlogSummary])
def get_latest_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    lang: str = Query("en", min_length=2, max_length=10),
    db: Session = Depends(get_db)
):
    """
    Get the newest blogs, one page at a time.

    **Query Parameters**:
    - page: Page number (1-indexed)
    - limit: Blogs per page (max 100)
    - lang: Language of titles and overviews
    """
    blogs, total = blog_crud.get_latest_blogs(db, page=page, limit=limit)
    return PaginatedResponse[BlogSummary](
        data=[BlogSummary.from_blog(blog, lang) for blog in blogs],
        metadata=create_pagination_metadata(total, page, limit)
    )


@router.get("/{slug}", response_model=BlogWithRelated)
def get_blog_by_slug(
    slug: str,
    lang: str = Query("en", min_length=2, max_length=10),
    db: Session = Depends(get_db)
):
    """Get a blog by slug with up to six related blogs sharing a tag."""
    blog = blog_crud.get_blog_by_slug(db, slug)
    if not blog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog not found"
        )

    related = blog_crud.get_related_blogs(db, blog, limit=6)
    return BlogWithRelated(
        blog=BlogDetail.from_blog(blog, lang),
        related=[BlogSummary.from_blog(r, lang) for r in related]
    )


@router.put("/{blog_id}", response_model=BlogDetail)
def update_blog(
    blog_id: int,
    blog_data: BlogUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a blog. Text fields apply to the `language` version (default en).

    **Permissions**: `auth` must match AUTH_KEY
    """
    require_auth_key(blog_data.auth)

    blog = blog_crud.get_blog(db, blog_id)
    if not blog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog Not Found"
        )

    category = None
    if blog_data.category:
        category = blog_crud.get_term_by_name(db, Category, blog_data.category)
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found"
            )

    subcategory = None
    if blog_data.subcategory:
        subcategory = blog_crud.get_term_by_name(db, SubCategory, blog_data.subcategory)
        if not subcategory:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="SubCategory not found"
            )

    try:
        updated = blog_crud.update_blog(db, blog, blog_data, category, subcategory)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update blog: {str(e)}"
        )

    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog Content not found"
        )

    return BlogDetail.from_blog(updated, blog_data.language)


@router.delete("/{blog_id}", response_model=SuccessResponse)
def delete_blog(
    blog_id: int,
    request: AuthRequest,
    db: Session = Depends(get_db)
):
    """
    Delete a blog with all its language versions.

    **Permissions**: `auth` must match AUTH_KEY
    """
    require_auth_key(request.auth)

    if not blog_crud.delete_blog(db, blog_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog not found"
        )

    return SuccessResponse(message="Blog deleted successfully")
