# app/services/exceptions.py
"""Errors raised by the blog generation pipeline."""
from typing import Optional


class SlugGenerationError(Exception):
    """No unused slug was found within the configured number of attempts."""


class TranslationError(Exception):
    """A translation could not be produced within the configured number of attempts."""

    def __init__(self, message: str, blog_id: Optional[int], language: str):
        super().__init__(message)
        self.blog_id = blog_id
        self.language = language
