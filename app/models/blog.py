# app/models/blog.py
from sqlmodel import SQLModel, Field, Relationship, Column, Text
from sqlalchemy import JSON, UniqueConstraint
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum


class BlogStatus(str, Enum):
    draft = "draft"
    published = "published"


class BlogTagLink(SQLModel, table=True):
    __tablename__ = "blog_tags"

    blog_id: Optional[int] = Field(
        default=None, foreign_key="blogs.id", primary_key=True, ondelete="CASCADE"
    )
    tag_id: Optional[int] = Field(
        default=None, foreign_key="tags.id", primary_key=True, ondelete="CASCADE"
    )


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, index=True)
    slug: str = Field(max_length=255, unique=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    blogs: List["Blog"] = Relationship(back_populates="category")


class SubCategory(SQLModel, table=True):
    __tablename__ = "subcategories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, index=True)
    slug: str = Field(max_length=255, unique=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    blogs: List["Blog"] = Relationship(back_populates="subcategory")


class Tag(SQLModel, table=True):
    __tablename__ = "tags"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50, unique=True, index=True)
    slug: str = Field(max_length=100, unique=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    blogs: List["Blog"] = Relationship(back_populates="tags", link_model=BlogTagLink)


class Blog(SQLModel, table=True):
    __tablename__ = "blogs"

    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(max_length=255, unique=True, index=True)
    status: BlogStatus = Field(default=BlogStatus.draft, index=True)
    views: int = Field(default=0)
    featured: bool = Field(default=False, index=True)
    main_image: Optional[Any] = Field(default=None, sa_column=Column(JSON, nullable=True))
    main_image_prompt: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    subcategory_id: Optional[int] = Field(default=None, foreign_key="subcategories.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    category: Optional[Category] = Relationship(back_populates="blogs")
    subcategory: Optional[SubCategory] = Relationship(back_populates="blogs")
    contents: List["Content"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    translations: List["BlogTranslation"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    tags: List[Tag] = Relationship(back_populates="blogs", link_model=BlogTagLink)

    def get_content(self, language: str) -> Optional["Content"]:
        return next((c for c in self.contents if c.language == language), None)

    def get_translation(self, language: str) -> Optional["BlogTranslation"]:
        return next((t for t in self.translations if t.language == language), None)


class Content(SQLModel, table=True):
    """Language-specific article body of a blog."""
    __tablename__ = "contents"
    __table_args__ = (UniqueConstraint("blog_id", "language", name="uq_contents_blog_language"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    blog_id: Optional[int] = Field(default=None, foreign_key="blogs.id", index=True, ondelete="CASCADE")
    language: str = Field(max_length=10, index=True)
    introduction: str = Field(sa_column=Column(Text, nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    content1: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    content2: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    conclusion: str = Field(sa_column=Column(Text, nullable=False))
    seo: Optional[dict] = Field(default=None, sa_column=Column("seo", JSON, nullable=True))
    cta: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    cta_link: Optional[str] = Field(default=None, max_length=500)
    cta_type: Optional[str] = Field(default=None, max_length=100)

    # Relationships
    blog: Optional[Blog] = Relationship(back_populates="contents")


class BlogTranslation(SQLModel, table=True):
    """Language-specific title and author metadata of a blog."""
    __tablename__ = "blog_translations"
    __table_args__ = (UniqueConstraint("blog_id", "language", name="uq_blog_translations_blog_language"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    blog_id: Optional[int] = Field(default=None, foreign_key="blogs.id", index=True, ondelete="CASCADE")
    language: str = Field(max_length=10, index=True)
    title: str = Field(max_length=500)
    subtitle: Optional[str] = Field(default=None, max_length=500)
    overview: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    author: Optional[dict] = Field(default=None, sa_column=Column(JSON, nullable=True))

    # Relationships
    blog: Optional[Blog] = Relationship(back_populates="translations")
