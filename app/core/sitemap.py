# app/core/sitemap.py
"""
Plain-text sitemap: one absolute URL per line, appended as blogs are published.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiofiles

from app.core.config import settings

logger = logging.getLogger(__name__)

_sitemap_lock = asyncio.Lock()


def blog_url(slug: str, language: Optional[str] = None) -> str:
    """Public URL of a blog, prefixed with the language segment when given."""
    base = settings.CLIENT_URL.rstrip("/")
    path = settings.BLOG_PATH.strip("/")
    if language:
        return f"{base}/{language}/{path}/{slug}"
    return f"{base}/{path}/{slug}"


def get_sitemap_path() -> Path:
    return Path(settings.SITEMAP_PATH)


async def add_to_sitemap(url: str) -> bool:
    """
    Append `url` to the sitemap file unless it is already listed.

    Returns:
        True if the URL was added, False if it was already present
    """
    path = get_sitemap_path()

    async with _sitemap_lock:
        existing = set()
        if path.exists():
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                existing = {line.strip() for line in await f.readlines()}

        if url in existing:
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "a", encoding="utf-8") as f:
            await f.write(f"{url}\n")

    logger.info(f"Added to sitemap: {url}")
    return True
