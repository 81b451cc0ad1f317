# app/schemas/blog.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any
from datetime import datetime
from app.models.blog import BlogStatus
from app.models.job import JobKind, JobStatus


class AuthRequest(BaseModel):
    """Body carrying only the shared secret (used by DELETE endpoints)."""
    auth: Optional[str] = None


# Taxonomy Schemas (categories, subcategories, tags)
class TermCreate(AuthRequest):
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class TermUpdate(AuthRequest):
    name: Optional[str] = Field(None, max_length=255)

    @field_validator('name')
    def validate_name(cls, v):
        if v is not None and len(v.strip()) == 0:
            raise ValueError('Name cannot be empty')
        return v.strip() if v else v


class Category(BaseModel):
    id: int
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SubCategory(Category):
    pass


class Tag(BaseModel):
    id: int
    name: str
    slug: str
    created_at: datetime

    class Config:
        from_attributes = True


# Per-language parts of a blog
class BlogTranslationRead(BaseModel):
    language: str
    title: str
    subtitle: Optional[str] = None
    overview: Optional[str] = None
    author: Optional[dict] = None

    class Config:
        from_attributes = True


class ContentRead(BaseModel):
    language: str
    introduction: str
    content: str
    content1: Optional[str] = None
    content2: Optional[str] = None
    conclusion: str
    seo: Optional[dict] = Field(None, serialization_alias="SEO")
    cta: Optional[str] = None
    cta_link: Optional[str] = None
    cta_type: Optional[str] = None

    class Config:
        from_attributes = True


# Blog Schemas
class BlogSummary(BaseModel):
    """Lightweight blog for list views, localized to one language"""
    id: int
    slug: str
    status: BlogStatus
    views: int
    featured: bool
    main_image: Optional[Any] = None
    language: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    overview: Optional[str] = None
    author: Optional[dict] = None
    category: Optional[Category] = None
    subcategory: Optional[SubCategory] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_blog(cls, blog, language: str = "en", **extra):
        """Localize `blog` to `language`, falling back to English."""
        translation = blog.get_translation(language) or blog.get_translation("en")
        return cls(
            id=blog.id,
            slug=blog.slug,
            status=blog.status,
            views=blog.views,
            featured=blog.featured,
            main_image=blog.main_image,
            language=translation.language if translation else None,
            title=translation.title if translation else None,
            subtitle=translation.subtitle if translation else None,
            overview=translation.overview if translation else None,
            author=translation.author if translation else None,
            category=Category.model_validate(blog.category) if blog.category else None,
            subcategory=SubCategory.model_validate(blog.subcategory) if blog.subcategory else None,
            created_at=blog.created_at,
            updated_at=blog.updated_at,
            **extra
        )


class BlogDetail(BlogSummary):
    content: Optional[ContentRead] = None
    tags: List[Tag] = []
    languages: List[str] = []

    @classmethod
    def from_blog(cls, blog, language: str = "en", **extra):
        content = blog.get_content(language) or blog.get_content("en")
        return super().from_blog(
            blog,
            language,
            content=ContentRead.model_validate(content) if content else None,
            tags=[Tag.model_validate(tag) for tag in blog.tags],
            languages=sorted(t.language for t in blog.translations),
            **extra
        )


class BlogWithRelated(BaseModel):
    blog: BlogDetail
    related: List[BlogSummary] = []


class BlogCreate(AuthRequest):
    """Manual creation of a blog with its source-language content."""
    title: str = Field(..., max_length=500)
    subtitle: Optional[str] = Field(None, max_length=500)
    overview: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    subcategory: Optional[str] = Field(None, max_length=255)
    tags: List[str] = []
    introduction: str
    content: str
    content1: Optional[str] = None
    content2: Optional[str] = None
    conclusion: str
    SEO: Optional[dict] = None
    cta: Optional[str] = None
    cta_link: Optional[str] = Field(None, max_length=500)
    cta_type: Optional[str] = Field(None, max_length=100)
    author: Optional[dict] = None
    main_image: Optional[Any] = None
    status: BlogStatus = BlogStatus.draft
    featured: bool = False

    @field_validator('title')
    def validate_title(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError('Title cannot be empty')
        return v

    @field_validator('content')
    def validate_content(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError('Content cannot be empty')
        return v


class BlogUpdate(AuthRequest):
    """Partial update; text fields apply to the Content/BlogTranslation of `language`."""
    language: str = Field("en", min_length=2, max_length=10)
    title: Optional[str] = Field(None, max_length=500)
    subtitle: Optional[str] = Field(None, max_length=500)
    overview: Optional[str] = None
    author: Optional[dict] = None
    category: Optional[str] = Field(None, max_length=255)
    subcategory: Optional[str] = Field(None, max_length=255)
    tags: Optional[List[str]] = None
    introduction: Optional[str] = None
    content: Optional[str] = None
    content1: Optional[str] = None
    content2: Optional[str] = None
    conclusion: Optional[str] = None
    SEO: Optional[dict] = None
    cta: Optional[str] = None
    cta_link: Optional[str] = Field(None, max_length=500)
    cta_type: Optional[str] = Field(None, max_length=100)
    main_image: Optional[Any] = None
    status: Optional[BlogStatus] = None
    featured: Optional[bool] = None

    @field_validator('title')
    def validate_title(cls, v):
        if v is not None and len(v.strip()) == 0:
            raise ValueError('Title cannot be empty')
        return v


class GenerateBlogRequest(AuthRequest):
    title: Optional[str] = None
    cta_type: Optional[str] = None
    cta_link: Optional[str] = None
    image: Optional[str] = None


class TranslateBlogRequest(AuthRequest):
    language: str = Field(..., min_length=2, max_length=2, description="Two-letter language code")

    @field_validator('language')
    def validate_language(cls, v):
        if not v.isalpha():
            raise ValueError('Language must be a two-letter code')
        return v.lower()


class TermWithBlogs(BaseModel):
    """Category, subcategory or tag together with its localized blogs"""
    id: int
    name: str
    slug: str
    created_at: datetime
    blogs: List[BlogSummary] = []


class GenerationJobRead(BaseModel):
    id: int
    kind: JobKind
    status: JobStatus
    title: Optional[str] = None
    blog_id: Optional[int] = None
    language: Optional[str] = None
    attempts: int
    error: Optional[str] = None
    run_after: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class GenerationStartedResponse(BaseModel):
    message: str
    job_id: int
    run_after: datetime
