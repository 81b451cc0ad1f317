# app/services/unsplash.py
"""
Unsplash photo lookup for blog main images.
"""
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

UNSPLASH_API_URL = "https://api.unsplash.com"


class UnsplashClient:
    """
    Finds a photo for a text query and returns a hotlinkable URL with attribution.

    Usage:
        client = UnsplashClient(access_key)
        image = await client.find_image("mountain lake at sunrise")
    """

    def __init__(
        self,
        access_key: str,
        size: str = "regular",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.access_key = access_key
        self.size = size
        self.timeout = timeout
        self.transport = transport

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Client-ID {self.access_key}"}

    async def find_image(self, query: str) -> Optional[dict]:
        """
        Search photos for `query` and return the first hit.

        Returns:
            {"url", "attribution", "attributionLink"} or None when nothing matches

        Raises:
            httpx.HTTPError: the API request failed
            ValueError: the response body is not JSON
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(
                f"{UNSPLASH_API_URL}/search/photos",
                params={"query": query, "per_page": 1},
                headers=self.headers,
            )
            response.raise_for_status()
            results = response.json().get("results", [])
            if not results:
                logger.info(f"No Unsplash images found for '{query}'")
                return None

            image = results[0]
            links = image.get("links") or {}
            download_location = links.get("download_location")
            if download_location:
                await self._track_download(client, download_location)

            urls = image.get("urls") or {}
            url = urls.get(self.size) or urls.get("regular")
            if not url:
                logger.info(f"Unsplash result for '{query}' has no usable URL")
                return None

            photographer = (image.get("user") or {}).get("name") or "Unknown"
            return {
                "url": url,
                "attribution": f"Photo by {photographer} on Unsplash",
                "attributionLink": links.get("html"),
            }

    async def _track_download(self, client: httpx.AsyncClient, download_location: str) -> None:
        # Unsplash API guidelines require a download event for hotlinked photos
        try:
            await client.get(download_location, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning(f"Error triggering Unsplash download: {e}")
