import copy
from types import SimpleNamespace
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.main import app
from app.database.engine import get_db
from app.core.config import settings
from app.crud.blog import blog_crud
from app.models.blog import BlogStatus, Category, Tag
from app.services.llm import LLMProvider, LLMError, LLMResponseError
import app.core.storage as storage_module

AUTH_KEY = "test-auth-key"


def make_generated_blog(**overrides) -> dict:
    """A model response matching the generation schema."""
    data = {
        "title": "Growing Tomatoes Indoors",
        "subtitle": "A windowsill guide",
        "slug": "growing-tomatoes-indoors",
        "overview": "Everything you need to grow tomatoes inside.",
        "category": "Gardening",
        "subcategory": "Vegetables",
        "SEO": {
            "metaTitle": "Growing Tomatoes Indoors",
            "metaDescription": "Grow tomatoes on a windowsill all year.",
            "metaKeywords": ["tomatoes", "indoor gardening"],
            "OGtitle": "Growing Tomatoes Indoors",
            "OGdescription": "A windowsill guide",
        },
        "tags": ["Tomatoes", "Indoor Gardening"],
        "introduction": "<p>Tomatoes love light.</p>",
        "content": "<h2>Light</h2><p>Six hours at least.</p>",
        "content1": "<h2>Soil</h2><p>Use a rich mix.</p>",
        "content2": "<h2>Water</h2><p>Keep it even.</p>",
        "conclusion": "<p>Enjoy the harvest.</p>",
        "callToAction": "Subscribe for more guides",
        "image": "tomato plants on a sunny windowsill",
        "author": {"name": "Jane Doe", "about": "Urban gardener"},
    }
    data.update(overrides)
    return data


class FakeLLMProvider(LLMProvider):
    """Scripted provider: canned blog, queued slug suggestions, prefixed translations."""

    name = "fake"

    def __init__(self, blog=None, slugs=None, failing_languages=()):
        self.blog = make_generated_blog() if blog is None else blog
        self.slugs = list(slugs or [])
        self.failing_languages = set(failing_languages)
        self.generate_calls = []
        self.slug_calls = []
        self.translate_calls = []

    async def generate_blog(self, title, cta_type):
        self.generate_calls.append((title, cta_type))
        if isinstance(self.blog, Exception):
            raise self.blog
        return copy.deepcopy(self.blog)

    async def generate_slug(self, existing_slug):
        self.slug_calls.append(existing_slug)
        if not self.slugs:
            raise LLMError("No slug suggestion available")
        return self.slugs.pop(0)

    async def translate_blog(self, payload, language):
        self.translate_calls.append(language)
        if language in self.failing_languages:
            raise LLMResponseError("Invalid JSON in model output", "{\"title\": ")
        translated = copy.deepcopy(payload)
        translated["title"] = f"[{language}] {payload['title']}"
        translated["introduction"] = f"[{language}] {payload['introduction']}"
        return translated


class FakeCompletions:
    """Stands in for `client.chat.completions`, returning queued message texts."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai_client(replies):
    completions = FakeCompletions(replies)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


# Test database setup
@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session

@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_db] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture(autouse=True)
def test_settings(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "AUTH_KEY", AUTH_KEY)
    monkeypatch.setattr(settings, "SITEMAP_PATH", str(tmp_path / "sitemap.txt"))
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "public"))
    monkeypatch.setattr(settings, "CLIENT_URL", "https://example.com")
    monkeypatch.setattr(settings, "TRANSLATION_LANGUAGES", ["es", "fr"])
    monkeypatch.setattr(settings, "SMTP_HOST", None)
    monkeypatch.setattr(settings, "NOTIFY_EMAIL_TO", None)
    monkeypatch.setattr(settings, "UNSPLASH_ACCESS_KEY", None)
    monkeypatch.setattr(storage_module, "_storage_instance", None)
    return settings

@pytest.fixture(name="provider")
def provider_fixture():
    return FakeLLMProvider()

@pytest.fixture(name="blog")
def blog_fixture(session: Session):
    """A published English blog in "Gardening" tagged "Tomatoes"."""
    category = blog_crud.get_or_create_term(session, Category, "Gardening")
    tag = blog_crud.get_or_create_term(session, Tag, "Tomatoes")
    blog = blog_crud.build_blog(
        session,
        slug="growing-tomatoes-indoors",
        language="en",
        title="Growing Tomatoes Indoors",
        subtitle="A windowsill guide",
        overview="Everything you need to grow tomatoes inside.",
        author={"name": "Jane Doe", "about": "Urban gardener"},
        introduction="<p>Tomatoes love light.</p>",
        content="<p>Six hours at least.</p>",
        conclusion="<p>Enjoy the harvest.</p>",
        seo={"metaDescription": "Grow tomatoes on a windowsill all year."},
        cta="Subscribe",
        cta_link="https://example.com/subscribe",
        cta_type="newsletter",
        category=category,
        tags=[tag],
        status=BlogStatus.published,
    )
    session.commit()
    session.refresh(blog)
    return blog
