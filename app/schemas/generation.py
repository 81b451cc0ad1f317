# app/schemas/generation.py
"""Shapes of the JSON objects exchanged with the language model."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


class SEOBlock(BaseModel):
    metaTitle: Optional[str] = None
    metaDescription: str
    metaKeywords: List[str] = []
    OGtitle: Optional[str] = None
    OGdescription: Optional[str] = None


class AuthorInfo(BaseModel):
    name: str
    about: Optional[str] = None


class GeneratedBlog(BaseModel):
    """A drafted blog as returned by the generation prompt."""
    title: str = Field(..., min_length=1)
    subtitle: str = ""
    slug: str = ""
    overview: str = ""
    category: str = Field(..., min_length=1)
    subcategory: Optional[str] = None
    seo: SEOBlock = Field(..., alias="SEO")
    tags: List[str] = []
    introduction: str
    content: str = Field(..., min_length=1)
    content1: Optional[str] = None
    content2: Optional[str] = None
    conclusion: str
    call_to_action: Optional[str] = Field(None, alias="callToAction")
    image_prompt: Optional[str] = Field(None, alias="image")
    author: Optional[AuthorInfo] = None

    class Config:
        populate_by_name = True

    @field_validator('tags')
    def strip_tags(cls, v):
        return [tag.strip() for tag in v if tag and tag.strip()]


class TranslatedBlog(BaseModel):
    """Translated text fields of a blog, keyed like the translation payload."""
    title: str = Field(..., min_length=1)
    subtitle: Optional[str] = None
    overview: Optional[str] = None
    author: Optional[dict] = None
    introduction: str
    content: str = Field(..., min_length=1)
    content1: Optional[str] = None
    content2: Optional[str] = None
    conclusion: str
    call_to_action: Optional[str] = Field(None, alias="callToAction")
    seo: Optional[dict] = Field(None, alias="SEO")

    class Config:
        populate_by_name = True
