import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlmodel import Session, select, func

from app.crud.blog import blog_crud
from app.models.blog import Blog, BlogStatus, Category, Tag
from app.models.job import GenerationJob, JobKind, JobStatus
from tests.conftest import AUTH_KEY

API = "/framework/blog"


def make_blog(session: Session, slug: str, title: str, tags=None, created_at=None) -> Blog:
    blog = blog_crud.build_blog(
        session,
        slug=slug,
        language="en",
        title=title,
        subtitle=None,
        overview=None,
        author=None,
        introduction="<p>Intro</p>",
        content="<p>Body</p>",
        conclusion="<p>End</p>",
        tags=tags or [],
        status=BlogStatus.published,
    )
    if created_at:
        blog.created_at = created_at
    session.commit()
    session.refresh(blog)
    return blog


class TestGenerateBlog:
    def test_queues_job(self, client: TestClient, session: Session):
        response = client.post(f"{API}/generateBlog", json={
            "title": "Growing tomatoes",
            "cta_type": "newsletter",
            "cta_link": "https://example.com/join",
            "image": "https://cdn.example.com/t.jpg",
            "auth": AUTH_KEY,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Blog generation started"

        job = session.get(GenerationJob, data["job_id"])
        assert job.kind == JobKind.generate
        assert job.status == JobStatus.pending
        assert job.title == "Growing tomatoes"
        assert job.main_image == "https://cdn.example.com/t.jpg"
        assert job.run_after > datetime.utcnow() + timedelta(seconds=200)

    def test_wrong_auth(self, client: TestClient, session: Session):
        response = client.post(f"{API}/generateBlog", json={"title": "Growing tomatoes", "auth": "nope"})

        assert response.status_code == 408
        assert response.json()["detail"] == "Not Authorized"
        assert session.exec(select(func.count(GenerationJob.id))).one() == 0

    def test_missing_title(self, client: TestClient):
        response = client.post(f"{API}/generateBlog", json={"auth": AUTH_KEY})
        assert response.status_code == 400

    def test_empty_auth_key_rejects_everything(self, client: TestClient, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "AUTH_KEY", "")
        response = client.post(f"{API}/generateBlog", json={"title": "Growing tomatoes", "auth": ""})
        assert response.status_code == 408

    def test_job_status(self, client: TestClient):
        job_id = client.post(f"{API}/generateBlog", json={"title": "Growing tomatoes", "auth": AUTH_KEY}).json()["job_id"]

        response = client.get(f"{API}/jobs/{job_id}")

        assert response.status_code == 200
        assert response.json()["status"] == "pending"
        assert response.json()["kind"] == "generate"

    def test_unknown_job(self, client: TestClient):
        assert client.get(f"{API}/jobs/999").status_code == 404


class TestTranslateEndpoint:
    def test_queues_translation(self, client: TestClient, blog):
        response = client.post(f"{API}/{blog.id}/translate", json={"language": "DE", "auth": AUTH_KEY})

        assert response.status_code == 202
        assert response.json()["kind"] == "translate"
        assert response.json()["language"] == "de"
        assert response.json()["blog_id"] == blog.id

    def test_unknown_blog(self, client: TestClient):
        response = client.post(f"{API}/999/translate", json={"language": "de", "auth": AUTH_KEY})
        assert response.status_code == 404

    def test_wrong_auth(self, client: TestClient, blog):
        response = client.post(f"{API}/{blog.id}/translate", json={"language": "de", "auth": "nope"})
        assert response.status_code == 408


class TestCreateBlog:
    def test_create(self, client: TestClient, session: Session):
        response = client.post(f"{API}/", json={
            "title": "Composting 101",
            "category": "Gardening",
            "tags": ["Compost", "Soil"],
            "introduction": "<p>Start small.</p>",
            "content": "<p>Greens and browns.</p>",
            "conclusion": "<p>Happy composting.</p>",
            "SEO": {"metaDescription": "Composting basics"},
            "status": "published",
            "auth": AUTH_KEY,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "composting-101"
        assert data["title"] == "Composting 101"
        assert data["category"]["slug"] == "gardening"
        assert sorted(t["slug"] for t in data["tags"]) == ["compost", "soil"]
        assert data["content"]["SEO"] == {"metaDescription": "Composting basics"}
        assert data["languages"] == ["en"]

    def test_duplicate_slug_is_suffixed(self, client: TestClient, blog):
        response = client.post(f"{API}/", json={
            "title": "Growing Tomatoes Indoors",
            "introduction": "<p>a</p>",
            "content": "<p>b</p>",
            "conclusion": "<p>c</p>",
            "auth": AUTH_KEY,
        })

        assert response.status_code == 201
        assert response.json()["slug"] == "growing-tomatoes-indoors-1"

    def test_wrong_auth(self, client: TestClient, session: Session):
        response = client.post(f"{API}/", json={
            "title": "Composting 101",
            "introduction": "<p>a</p>",
            "content": "<p>b</p>",
            "conclusion": "<p>c</p>",
            "auth": "nope",
        })

        assert response.status_code == 408
        assert session.exec(select(func.count(Blog.id))).one() == 0


class TestReadBlogs:
    def test_list(self, client: TestClient, blog):
        response = client.get(f"{API}/")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["title"] == "Growing Tomatoes Indoors"
        assert data[0]["category"]["name"] == "Gardening"

    def test_language_falls_back_to_english(self, client: TestClient, blog):
        response = client.get(f"{API}/", params={"lang": "ja"})
        assert response.json()[0]["language"] == "en"

    def test_latest_pagination(self, client: TestClient, session: Session):
        now = datetime.utcnow()
        for i in range(5):
            make_blog(session, f"post-{i}", f"Post {i}", created_at=now - timedelta(days=i))

        response = client.get(f"{API}/latest", params={"page": 2, "limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert [b["slug"] for b in data["data"]] == ["post-2", "post-3"]
        assert data["metadata"]["total"] == 5
        assert data["metadata"]["total_pages"] == 3
        assert data["metadata"]["has_next"] is True
        assert data["metadata"]["has_previous"] is True

    def test_get_by_slug_with_related(self, client: TestClient, session: Session, blog):
        tomato = session.exec(select(Tag).where(Tag.slug == "tomatoes")).one()
        make_blog(session, "tomato-sauce", "Tomato Sauce", tags=[tomato])
        make_blog(session, "unrelated", "Unrelated", tags=[])

        response = client.get(f"{API}/{blog.slug}")

        assert response.status_code == 200
        data = response.json()
        assert data["blog"]["slug"] == blog.slug
        assert data["blog"]["content"]["introduction"] == "<p>Tomatoes love light.</p>"
        assert [t["slug"] for t in data["blog"]["tags"]] == ["tomatoes"]
        assert [r["slug"] for r in data["related"]] == ["tomato-sauce"]

    def test_related_is_capped_at_six(self, client: TestClient, session: Session, blog):
        tomato = session.exec(select(Tag).where(Tag.slug == "tomatoes")).one()
        for i in range(8):
            make_blog(session, f"tomato-{i}", f"Tomato {i}", tags=[tomato])

        response = client.get(f"{API}/{blog.slug}")

        assert len(response.json()["related"]) == 6

    def test_unknown_slug(self, client: TestClient):
        response = client.get(f"{API}/does-not-exist")
        assert response.status_code == 404


class TestUpdateBlog:
    def test_update_fields(self, client: TestClient, session: Session, blog):
        session.add(Category(name="Cooking", slug="cooking"))
        session.commit()

        response = client.put(f"{API}/{blog.id}", json={
            "title": "Tomatoes Indoors",
            "conclusion": "<p>Done.</p>",
            "category": "Cooking",
            "featured": True,
            "auth": AUTH_KEY,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Tomatoes Indoors"
        assert data["subtitle"] == "A windowsill guide"
        assert data["content"]["conclusion"] == "<p>Done.</p>"
        assert data["category"]["name"] == "Cooking"
        assert data["featured"] is True

    def test_null_required_fields_are_ignored(self, client: TestClient, blog):
        response = client.put(f"{API}/{blog.id}", json={
            "title": None,
            "introduction": None,
            "content": None,
            "conclusion": None,
            "subtitle": None,
            "auth": AUTH_KEY,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Growing Tomatoes Indoors"
        assert data["subtitle"] is None
        assert data["content"]["introduction"] == "<p>Tomatoes love light.</p>"
        assert data["content"]["conclusion"] == "<p>Enjoy the harvest.</p>"

    def test_unknown_category(self, client: TestClient, blog):
        response = client.put(f"{API}/{blog.id}", json={"category": "Nope", "auth": AUTH_KEY})
        assert response.status_code == 404

    def test_missing_language_version(self, client: TestClient, blog):
        response = client.put(f"{API}/{blog.id}", json={"language": "fr", "title": "Tomates", "auth": AUTH_KEY})
        assert response.status_code == 404

    def test_unknown_blog(self, client: TestClient):
        response = client.put(f"{API}/999", json={"title": "x", "auth": AUTH_KEY})
        assert response.status_code == 404

    def test_non_numeric_id(self, client: TestClient):
        response = client.put(f"{API}/abc", json={"title": "x", "auth": AUTH_KEY})
        assert response.status_code == 422

    def test_wrong_auth_changes_nothing(self, client: TestClient, session: Session, blog):
        response = client.put(f"{API}/{blog.id}", json={"title": "Hacked", "auth": "nope"})

        assert response.status_code == 408
        session.refresh(blog)
        assert blog.get_translation("en").title == "Growing Tomatoes Indoors"


class TestDeleteBlog:
    def test_delete_cascades(self, client: TestClient, session: Session, blog):
        response = client.request("DELETE", f"{API}/{blog.id}", json={"auth": AUTH_KEY})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert session.exec(select(func.count(Blog.id))).one() == 0
        # Tags survive, only the link is removed
        assert session.exec(select(func.count(Tag.id))).one() == 1

    def test_unknown_blog(self, client: TestClient):
        response = client.request("DELETE", f"{API}/999", json={"auth": AUTH_KEY})
        assert response.status_code == 404

    def test_wrong_auth(self, client: TestClient, session: Session, blog):
        response = client.request("DELETE", f"{API}/{blog.id}", json={"auth": "nope"})

        assert response.status_code == 408
        assert session.exec(select(func.count(Blog.id))).one() == 1
