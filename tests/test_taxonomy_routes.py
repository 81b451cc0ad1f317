import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select, func

from app.models.blog import BlogTagLink, Category, SubCategory, Tag
from tests.conftest import AUTH_KEY

API = "/framework"


class TestCategoryRoutes:
    def test_empty_list_is_not_found(self, client: TestClient):
        response = client.get(f"{API}/category/")
        assert response.status_code == 404

    def test_list(self, client: TestClient, blog):
        response = client.get(f"{API}/category/")

        assert response.status_code == 200
        assert [c["slug"] for c in response.json()] == ["gardening"]

    def test_get_by_slug_with_blogs(self, client: TestClient, blog):
        response = client.get(f"{API}/category/gardening", params={"lang": "fr"})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Gardening"
        assert len(data["blogs"]) == 1
        assert data["blogs"][0]["slug"] == blog.slug
        assert data["blogs"][0]["title"] == "Growing Tomatoes Indoors"

    def test_limit(self, client: TestClient, client_blogs):
        response = client.get(f"{API}/category/gardening", params={"limit": 2})
        assert len(response.json()["blogs"]) == 2

    def test_unknown_slug(self, client: TestClient):
        assert client.get(f"{API}/category/nope").status_code == 404

    def test_create(self, client: TestClient):
        response = client.post(f"{API}/category/", json={"name": "Home Cooking", "auth": AUTH_KEY})

        assert response.status_code == 201
        assert response.json()["slug"] == "home-cooking"

    def test_create_duplicate_name(self, client: TestClient, blog):
        response = client.post(f"{API}/category/", json={"name": "Gardening", "auth": AUTH_KEY})
        assert response.status_code == 400

    def test_create_wrong_auth(self, client: TestClient, session: Session):
        response = client.post(f"{API}/category/", json={"name": "Home Cooking", "auth": "nope"})

        assert response.status_code == 408
        assert session.exec(select(func.count(Category.id))).one() == 0

    def test_update(self, client: TestClient, blog):
        response = client.put(f"{API}/category/{blog.category_id}", json={"name": "Urban Gardening", "auth": AUTH_KEY})

        assert response.status_code == 200
        assert response.json()["slug"] == "urban-gardening"

    def test_delete_refused_while_used(self, client: TestClient, session: Session, blog):
        response = client.request("DELETE", f"{API}/category/{blog.category_id}", json={"auth": AUTH_KEY})

        assert response.status_code == 400
        assert session.exec(select(func.count(Category.id))).one() == 1

    def test_delete_unused(self, client: TestClient, session: Session):
        category = Category(name="Empty", slug="empty")
        session.add(category)
        session.commit()

        response = client.request("DELETE", f"{API}/category/{category.id}", json={"auth": AUTH_KEY})

        assert response.status_code == 200
        assert session.exec(select(func.count(Category.id))).one() == 0


class TestSubCategoryRoutes:
    def test_empty_list(self, client: TestClient):
        response = client.get(f"{API}/subcategory/")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_and_get(self, client: TestClient):
        client.post(f"{API}/subcategory/", json={"name": "Vegetables", "auth": AUTH_KEY})

        response = client.get(f"{API}/subcategory/vegetables")

        assert response.status_code == 200
        assert response.json()["blogs"] == []


class TestTagRoutes:
    def test_get_by_slug(self, client: TestClient, blog):
        response = client.get(f"{API}/tag/tomatoes")

        assert response.status_code == 200
        assert [b["slug"] for b in response.json()["blogs"]] == [blog.slug]

    def test_delete_unlinks_blogs(self, client: TestClient, session: Session, blog):
        tag_id = blog.tags[0].id

        response = client.request("DELETE", f"{API}/tag/{tag_id}", json={"auth": AUTH_KEY})

        assert response.status_code == 200
        assert session.exec(select(func.count(Tag.id))).one() == 0
        assert session.exec(select(func.count(BlogTagLink.tag_id))).one() == 0
        session.refresh(blog)
        assert blog.tags == []

    def test_delete_unknown(self, client: TestClient):
        response = client.request("DELETE", f"{API}/tag/999", json={"auth": AUTH_KEY})
        assert response.status_code == 404

    def test_delete_wrong_auth(self, client: TestClient, session: Session, blog):
        tag_id = blog.tags[0].id

        response = client.request("DELETE", f"{API}/tag/{tag_id}", json={"auth": "nope"})

        assert response.status_code == 408
        assert session.exec(select(func.count(Tag.id))).one() == 1

    def test_create_name_too_long(self, client: TestClient, session: Session):
        response = client.post(f"{API}/tag/", json={"name": "t" * 51, "auth": AUTH_KEY})

        assert response.status_code == 400
        assert session.exec(select(func.count(Tag.id))).one() == 0

    def test_create_name_at_limit(self, client: TestClient):
        response = client.post(f"{API}/tag/", json={"name": "t" * 50, "auth": AUTH_KEY})
        assert response.status_code == 201

    def test_update_name_too_long(self, client: TestClient, session: Session, blog):
        tag_id = blog.tags[0].id

        response = client.put(f"{API}/tag/{tag_id}", json={"name": "t" * 51, "auth": AUTH_KEY})

        assert response.status_code == 400
        assert session.get(Tag, tag_id).name == "Tomatoes"


@pytest.fixture(name="client_blogs")
def client_blogs_fixture(client: TestClient):
    for title in ("Tomatoes", "Peppers", "Basil"):
        response = client.post(f"{API}/blog/", json={
            "title": title,
            "category": "Gardening",
            "introduction": "<p>a</p>",
            "content": "<p>b</p>",
            "conclusion": "<p>c</p>",
            "auth": AUTH_KEY,
        })
        assert response.status_code == 201
