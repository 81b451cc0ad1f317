# app/routers/taxonomy.py
"""
Category, subcategory and tag endpoints.

The three taxonomies share the same routes; `build_term_router` registers
them for one model.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List, Optional, Type
import logging

from app.database.engine import get_db
from app.core.auth import require_auth_key
from app.crud.blog import blog_crud, term_name_max_length
from app.models.blog import Category, SubCategory, Tag
from app.schemas.common import SuccessResponse
from app.schemas import blog as schemas
from app.schemas.blog import AuthRequest, BlogSummary, TermCreate, TermUpdate, TermWithBlogs

logger = logging.getLogger(__name__)


def build_term_router(
    model_class: Type,
    read_schema: Type,
    prefix: str,
    label: str,
    not_found_when_empty: bool = False
) -> APIRouter:
    """
    Build list/get/create/update/delete routes for one taxonomy model.

    Args:
        model_class: Category, SubCategory or Tag
        read_schema: Response schema of a single term
        prefix: Route prefix, e.g. "/category"
        label: Human-readable name used in messages
        not_found_when_empty: Answer 404 instead of [] when no term exists
    """
    router = APIRouter(
        prefix=prefix,
        tags=[label.lower()],
        responses={404: {"description": "Not found"}},
    )
    max_name_length = term_name_max_length(model_class)

    def check_name_length(name: str):
        if len(name) > max_name_length:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{label} name must be at most {max_name_length} characters"
            )

    @router.get("/", response_model=List[read_schema])
    def list_terms(db: Session = Depends(get_db)):
        terms = blog_crud.get_terms(db, model_class)
        if not terms and not_found_when_empty:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No {label.lower()} found"
            )
        return terms

    @router.get("/{slug}", response_model=TermWithBlogs)
    def get_term_by_slug(
        slug: str,
        limit: Optional[int] = Query(None, ge=1, le=100),
        lang: str = Query("en", min_length=2, max_length=10),
        db: Session = Depends(get_db)
    ):
        """Get a term by slug with its blogs, newest first."""
        term = blog_crud.get_term_by_slug(db, model_class, slug)
        if not term:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label} not found"
            )

        blogs = sorted(term.blogs, key=lambda b: (b.created_at, b.id), reverse=True)
        if limit:
            blogs = blogs[:limit]

        return TermWithBlogs(
            id=term.id,
            name=term.name,
            slug=term.slug,
            created_at=term.created_at,
            blogs=[BlogSummary.from_blog(blog, lang) for blog in blogs]
        )

    @router.post("/", response_model=read_schema, status_code=status.HTTP_201_CREATED)
    def create_term(term_data: TermCreate, db: Session = Depends(get_db)):
        """
        **Permissions**: `auth` must match AUTH_KEY
        """
        require_auth_key(term_data.auth)
        check_name_length(term_data.name)

        if blog_crud.get_term_by_name(db, model_class, term_data.name):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{label} with this name already exists"
            )

        try:
            return blog_crud.create_term(db, model_class, term_data.name)
        except Exception as e:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to create {label.lower()}: {str(e)}"
            )

    @router.put("/{term_id}", response_model=read_schema)
    def update_term(term_id: int, term_data: TermUpdate, db: Session = Depends(get_db)):
        """
        **Permissions**: `auth` must match AUTH_KEY
        """
        require_auth_key(term_data.auth)
        if term_data.name:
            check_name_length(term_data.name)

        term = blog_crud.update_term(db, model_class, term_id, term_data.name)
        if not term:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label} not found"
            )
        return term

    @router.delete("/{term_id}", response_model=SuccessResponse)
    def delete_term(term_id: int, request: AuthRequest, db: Session = Depends(get_db)):
        """
        Delete a term. Tags are unlinked from their blogs; categories and
        subcategories still used by a blog are refused.

        **Permissions**: `auth` must match AUTH_KEY
        """
        require_auth_key(request.auth)

        if not blog_crud.get_term(db, model_class, term_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label} not found"
            )

        if not blog_crud.delete_term(db, model_class, term_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot delete {label.lower()} with blogs"
            )

        return SuccessResponse(message=f"{label} deleted successfully")

    return router


category_router = build_term_router(Category, schemas.Category, "/category", "Category", not_found_when_empty=True)
subcategory_router = build_term_router(SubCategory, schemas.SubCategory, "/subcategory", "SubCategory")
tag_router = build_term_router(Tag, schemas.Tag, "/tag", "Tag")
