import asyncio
import httpx
import pytest
from pathlib import Path
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.core.auth import require_auth_key, verify_auth_key
from app.core.config import settings
from app.core.email import send_generation_success_email
from app.core.sitemap import add_to_sitemap, blog_url
from app.services.unsplash import UnsplashClient
from tests.conftest import AUTH_KEY


class TestAuthKey:
    def test_matching_key(self):
        assert verify_auth_key(AUTH_KEY) is True

    def test_wrong_or_missing_key(self):
        assert verify_auth_key("nope") is False
        assert verify_auth_key(None) is False

    def test_empty_configured_key_rejects_everything(self):
        assert verify_auth_key("", expected="") is False
        assert verify_auth_key("anything", expected="") is False

    def test_require_raises_not_authorized(self):
        with pytest.raises(HTTPException) as exc_info:
            require_auth_key("nope")
        assert exc_info.value.status_code == 408
        assert exc_info.value.detail == "Not Authorized"


class TestSitemap:
    def test_blog_url(self):
        assert blog_url("hello", "es") == "https://example.com/es/blog/hello"
        assert blog_url("hello") == "https://example.com/blog/hello"

    def test_add_is_idempotent(self):
        url = blog_url("hello", "en")

        assert asyncio.run(add_to_sitemap(url)) is True
        assert asyncio.run(add_to_sitemap(url)) is False

        assert Path(settings.SITEMAP_PATH).read_text(encoding="utf-8") == f"{url}\n"

    def test_served_as_text(self, client: TestClient):
        asyncio.run(add_to_sitemap("https://example.com/en/blog/hello"))

        response = client.get("/framework/sitemap.txt")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "https://example.com/en/blog/hello" in response.text

    def test_missing_sitemap(self, client: TestClient):
        assert client.get("/framework/sitemap.txt").status_code == 404


class TestEmail:
    def test_skipped_when_smtp_not_configured(self):
        assert asyncio.run(send_generation_success_email("Growing tomatoes", "https://example.com/en/blog/x")) is False


class TestUpload:
    def test_upload_image(self, client: TestClient):
        response = client.post(
            "/framework/upload",
            files={"file": ("tomato.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
            data={"auth": AUTH_KEY},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["filename"].endswith(".png")
        assert data["url"] == f"/framework/public/{data['filename']}"
        assert (Path(settings.UPLOAD_DIR) / data["filename"]).read_bytes() == b"\x89PNG\r\n\x1a\nfake"

    def test_unsupported_type(self, client: TestClient):
        response = client.post(
            "/framework/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            data={"auth": AUTH_KEY},
        )
        assert response.status_code == 415

    def test_too_large(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "MAX_FILE_SIZE", 4)
        response = client.post(
            "/framework/upload",
            files={"file": ("tomato.png", b"\x89PNG\r\n", "image/png")},
            data={"auth": AUTH_KEY},
        )
        assert response.status_code == 413

    def test_wrong_auth(self, client: TestClient):
        response = client.post(
            "/framework/upload",
            files={"file": ("tomato.png", b"\x89PNG", "image/png")},
            data={"auth": "nope"},
        )
        assert response.status_code == 408


class TestUnsplashClient:
    def test_find_image(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path == "/search/photos":
                return httpx.Response(200, json={"results": [{
                    "urls": {"regular": "https://images.example.com/regular.jpg"},
                    "user": {"name": "Ana"},
                    "links": {
                        "html": "https://unsplash.com/photos/abc",
                        "download_location": "https://api.unsplash.com/photos/abc/download",
                    },
                }]})
            return httpx.Response(200, json={})

        client = UnsplashClient("key", transport=httpx.MockTransport(handler))
        image = asyncio.run(client.find_image("tomatoes"))

        assert image == {
            "url": "https://images.example.com/regular.jpg",
            "attribution": "Photo by Ana on Unsplash",
            "attributionLink": "https://unsplash.com/photos/abc",
        }
        assert requests[0].headers["Authorization"] == "Client-ID key"
        assert requests[0].url.params["query"] == "tomatoes"
        assert requests[1].url.path == "/photos/abc/download"

    def test_no_results(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"results": []}))
        client = UnsplashClient("key", transport=transport)

        assert asyncio.run(client.find_image("nothing")) is None

    def test_result_without_photographer(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"results": [{"urls": {"regular": "https://images.example.com/u.jpg"}}]})
        )
        client = UnsplashClient("key", transport=transport)

        image = asyncio.run(client.find_image("tomatoes"))

        assert image == {
            "url": "https://images.example.com/u.jpg",
            "attribution": "Photo by Unknown on Unsplash",
            "attributionLink": None,
        }

    def test_result_without_url(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"results": [{"user": {"name": "Ana"}}]}))
        client = UnsplashClient("key", transport=transport)

        assert asyncio.run(client.find_image("tomatoes")) is None
