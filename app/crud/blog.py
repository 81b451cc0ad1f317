# app/crud/blog.py
from sqlmodel import Session, select, func
from typing import List, Optional, Type, TypeVar
from datetime import datetime
import re

from app.models.blog import (
    Blog, BlogStatus, BlogTagLink, BlogTranslation, Category, Content, SubCategory, Tag
)
from app.schemas.blog import BlogCreate, BlogUpdate

T = TypeVar("T", Category, SubCategory, Tag)

REQUIRED_TEXT_FIELDS = ("title", "introduction", "content", "conclusion")
TAG_NAME_MAX_LENGTH = 50
TERM_NAME_MAX_LENGTH = 255


def term_name_max_length(model_class) -> int:
    return TAG_NAME_MAX_LENGTH if model_class is Tag else TERM_NAME_MAX_LENGTH


def slugify(text: str) -> str:
    """Lowercase URL-safe slug: word characters joined by single hyphens."""
    slug = text.lower().strip()
    slug = re.sub(r'[^\w\s-]', '', slug)  # Remove special characters
    slug = re.sub(r'[-\s_]+', '-', slug)  # Replace spaces/underscores/multiple hyphens with single hyphen
    return slug.strip('-')


def slug_exists(db: Session, model_class, slug: str) -> bool:
    return db.exec(select(model_class.id).where(model_class.slug == slug)).first() is not None


def generate_slug(text: str, db: Session, model_class) -> str:
    """Generate a unique slug from text."""
    slug = slugify(text) or "untitled"

    # Ensure uniqueness
    original_slug = slug
    counter = 1
    while slug_exists(db, model_class, slug):
        slug = f"{original_slug}-{counter}"
        counter += 1

    return slug


class BlogCRUD:
    # ============ Blog Operations ============

    def get_blog(self, db: Session, blog_id: int) -> Optional[Blog]:
        """Get blog by ID."""
        return db.get(Blog, blog_id)

    def get_blog_by_slug(self, db: Session, slug: str) -> Optional[Blog]:
        """Get blog by slug."""
        return db.exec(select(Blog).where(Blog.slug == slug)).first()

    def get_blogs(self, db: Session) -> List[Blog]:
        """Get every blog, newest first."""
        return db.exec(select(Blog).order_by(Blog.created_at.desc(), Blog.id.desc())).all()

    def get_latest_blogs(
        self,
        db: Session,
        page: int = 1,
        limit: int = 10
    ) -> tuple[List[Blog], int]:
        """Get a page of blogs ordered by creation date. Returns (blogs, total_count)."""
        total = db.exec(select(func.count(Blog.id))).first() or 0

        query = (
            select(Blog)
            .order_by(Blog.created_at.desc(), Blog.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return db.exec(query).all(), total

    def get_related_blogs(self, db: Session, blog: Blog, limit: int = 6) -> List[Blog]:
        """Get other blogs sharing at least one tag with `blog`."""
        tag_ids = [tag.id for tag in blog.tags]
        if not tag_ids:
            return []

        tagged = select(BlogTagLink.blog_id).where(BlogTagLink.tag_id.in_(tag_ids))
        query = (
            select(Blog)
            .where(Blog.id.in_(tagged), Blog.id != blog.id)
            .order_by(Blog.created_at.desc())
            .limit(limit)
        )
        return db.exec(query).all()

    def build_blog(
        self,
        db: Session,
        *,
        slug: str,
        language: str,
        title: str,
        subtitle: Optional[str],
        overview: Optional[str],
        author: Optional[dict],
        introduction: str,
        content: str,
        conclusion: str,
        content1: Optional[str] = None,
        content2: Optional[str] = None,
        seo: Optional[dict] = None,
        cta: Optional[str] = None,
        cta_link: Optional[str] = None,
        cta_type: Optional[str] = None,
        category: Optional[Category] = None,
        subcategory: Optional[SubCategory] = None,
        tags: Optional[List[Tag]] = None,
        main_image=None,
        main_image_prompt: Optional[str] = None,
        status: BlogStatus = BlogStatus.draft,
        featured: bool = False,
    ) -> Blog:
        """
        Stage a blog with its first Content and BlogTranslation in the session.

        Nothing is committed; the caller owns the transaction.
        """
        blog = Blog(
            slug=slug,
            status=status,
            featured=featured,
            main_image=main_image,
            main_image_prompt=main_image_prompt,
            category=category,
            subcategory=subcategory,
            tags=tags or [],
        )
        blog.contents.append(Content(
            language=language,
            introduction=introduction,
            content=content,
            content1=content1,
            content2=content2,
            conclusion=conclusion,
            seo=seo,
            cta=cta,
            cta_link=cta_link,
            cta_type=cta_type,
        ))
        blog.translations.append(BlogTranslation(
            language=language,
            title=title,
            subtitle=subtitle,
            overview=overview,
            author=author,
        ))
        db.add(blog)
        return blog

    def get_or_create_tags(self, db: Session, names: List[str]) -> List[Tag]:
        """Resolve tag names to rows, one per distinct slug."""
        tags = {}
        for name in names:
            if not name or not slugify(name):
                continue
            tag = self.get_or_create_term(db, Tag, name)
            tags.setdefault(tag.id, tag)
        return list(tags.values())

    def create_blog(self, db: Session, blog_data: BlogCreate) -> Blog:
        """Create a blog from a manual submission, in the source language."""
        try:
            category = None
            if blog_data.category:
                category = self.get_or_create_term(db, Category, blog_data.category)
            subcategory = None
            if blog_data.subcategory:
                subcategory = self.get_or_create_term(db, SubCategory, blog_data.subcategory)

            blog = self.build_blog(
                db,
                slug=generate_slug(blog_data.slug or blog_data.title, db, Blog),
                language="en",
                title=blog_data.title,
                subtitle=blog_data.subtitle,
                overview=blog_data.overview,
                author=blog_data.author,
                introduction=blog_data.introduction,
                content=blog_data.content,
                content1=blog_data.content1,
                content2=blog_data.content2,
                conclusion=blog_data.conclusion,
                seo=blog_data.SEO,
                cta=blog_data.cta,
                cta_link=blog_data.cta_link,
                cta_type=blog_data.cta_type,
                category=category,
                subcategory=subcategory,
                tags=self.get_or_create_tags(db, blog_data.tags),
                main_image=blog_data.main_image,
                status=blog_data.status,
                featured=blog_data.featured,
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(blog)
        return blog

    def update_blog(
        self,
        db: Session,
        blog: Blog,
        blog_data: BlogUpdate,
        category: Optional[Category] = None,
        subcategory: Optional[SubCategory] = None
    ) -> Optional[Blog]:
        """
        Apply a partial update to a blog and its `blog_data.language` rows.

        Returns None when the blog has no Content/BlogTranslation in that language.
        """
        content = blog.get_content(blog_data.language)
        translation = blog.get_translation(blog_data.language)
        if not content or not translation:
            return None

        update_data = blog_data.model_dump(exclude_unset=True, exclude={"auth", "language"})
        # NOT NULL columns keep their value when null is sent
        for field in REQUIRED_TEXT_FIELDS:
            if update_data.get(field) is None:
                update_data.pop(field, None)

        for field in ("title", "subtitle", "overview", "author"):
            if field in update_data:
                setattr(translation, field, update_data[field])

        for field in ("introduction", "content", "content1", "content2", "conclusion",
                      "cta", "cta_link", "cta_type"):
            if field in update_data:
                setattr(content, field, update_data[field])
        if "SEO" in update_data:
            content.seo = update_data["SEO"]

        for field in ("main_image", "status", "featured"):
            if update_data.get(field) is not None:
                setattr(blog, field, update_data[field])

        if category:
            blog.category = category
        if subcategory:
            blog.subcategory = subcategory

        try:
            if blog_data.tags is not None:
                blog.tags = self.get_or_create_tags(db, blog_data.tags)
            blog.updated_at = datetime.utcnow()
            db.add(blog)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(blog)
        return blog

    def delete_blog(self, db: Session, blog_id: int) -> bool:
        """Delete blog together with its contents, translations and tag links."""
        blog = db.get(Blog, blog_id)
        if not blog:
            return False

        db.delete(blog)
        db.commit()
        return True

    # ============ Taxonomy Operations (Category, SubCategory, Tag) ============

    def get_term(self, db: Session, model_class: Type[T], term_id: int) -> Optional[T]:
        return db.get(model_class, term_id)

    def get_term_by_slug(self, db: Session, model_class: Type[T], slug: str) -> Optional[T]:
        return db.exec(select(model_class).where(model_class.slug == slug)).first()

    def get_term_by_name(self, db: Session, model_class: Type[T], name: str) -> Optional[T]:
        return db.exec(select(model_class).where(model_class.name == name)).first()

    def get_terms(self, db: Session, model_class: Type[T]) -> List[T]:
        return db.exec(select(model_class).order_by(model_class.name)).all()

    def get_or_create_term(self, db: Session, model_class: Type[T], name: str) -> T:
        """
        Find a term by the slug of `name`, or stage a new one.

        The new row is flushed, not committed, so it joins the caller's transaction.
        """
        slug = slugify(name)
        term = self.get_term_by_slug(db, model_class, slug)
        if term:
            return term

        name = name.strip()[:term_name_max_length(model_class)]
        term = model_class(name=name, slug=slug)
        db.add(term)
        db.flush()
        return term

    def create_term(self, db: Session, model_class: Type[T], name: str) -> T:
        """Create a term with a unique slug derived from its name."""
        term = model_class(name=name, slug=generate_slug(name, db, model_class))
        db.add(term)
        db.commit()
        db.refresh(term)
        return term

    def update_term(self, db: Session, model_class: Type[T], term_id: int, name: Optional[str]) -> Optional[T]:
        term = db.get(model_class, term_id)
        if not term:
            return None

        # Update slug if name changed
        if name and name != term.name:
            term.slug = generate_slug(name, db, model_class)
            term.name = name
        if hasattr(term, "updated_at"):
            term.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(term)
        return term

    def count_term_blogs(self, db: Session, model_class: Type[T], term_id: int) -> int:
        """Get the number of blogs attached to a term."""
        if model_class is Tag:
            query = select(func.count(BlogTagLink.blog_id)).where(BlogTagLink.tag_id == term_id)
        elif model_class is Category:
            query = select(func.count(Blog.id)).where(Blog.category_id == term_id)
        else:
            query = select(func.count(Blog.id)).where(Blog.subcategory_id == term_id)
        return db.exec(query).first() or 0

    def delete_term(self, db: Session, model_class: Type[T], term_id: int) -> bool:
        """
        Delete a term.

        Categories and subcategories with blogs are kept (returns False);
        a tag is unlinked from its blogs before it is removed.
        """
        term = db.get(model_class, term_id)
        if not term:
            return False

        if model_class is not Tag and self.count_term_blogs(db, model_class, term_id) > 0:
            return False

        db.delete(term)
        db.commit()
        return True


# Create singleton instance
blog_crud = BlogCRUD()
