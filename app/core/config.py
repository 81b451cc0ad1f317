from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Shared secret checked against the `auth` field of mutating requests
    AUTH_KEY: str = ""

    # API
    API_PREFIX: str = "/framework"

    # Database
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "framework"
    DB_PASSWORD: str = "framework_password"
    DB_NAME: str = "framework_db"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # LLM providers
    LLM_PROVIDER: str = "gemini"  # "gemini" or "openai"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TRANSLATION_MODEL: str = "gpt-4o-mini"
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Generation pipeline
    GENERATION_DELAY_SECONDS: int = 280  # Delay before a queued generation job becomes due
    JOB_POLL_INTERVAL_SECONDS: float = 10.0
    JOB_BATCH_SIZE: int = 5
    BACKGROUND_JOBS_ENABLED: bool = True
    SOURCE_LANGUAGE: str = "en"
    TRANSLATION_LANGUAGES: list[str] = ["es", "fr", "de", "ar", "ja"]
    TRANSLATION_MAX_ATTEMPTS: int = 3
    SLUG_LLM_ATTEMPTS: int = 3  # New slugs requested from the model before suffixing
    SLUG_MAX_SUFFIX: int = 50

    # URLs
    FRONTEND_URL: str = "http://localhost:3000"
    CLIENT_URL: str = "http://localhost:3000"
    BLOG_PATH: str = "blog"
    SITEMAP_PATH: str = "./sitemap.txt"

    # Email
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    EMAIL_FROM: Optional[str] = None
    EMAIL_FROM_NAME: str = "Blog Framework"
    NOTIFY_EMAIL_TO: Optional[str] = None  # Recipient of generation notifications

    # Images
    UNSPLASH_ACCESS_KEY: Optional[str] = None
    UNSPLASH_IMAGE_SIZE: str = "regular"

    # File Storage
    UPLOAD_DIR: str = "./public"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB in bytes
    ALLOWED_IMAGE_TYPES: list[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

    class Config:
        env_file = ".env"
        extra = "ignore"  # Allow extra fields in .env file

settings = Settings()
