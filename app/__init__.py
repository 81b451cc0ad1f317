# Import all models to ensure they are registered with SQLModel
from app.models import blog, job
from app.core import config
from app.database import engine

__all__ = [
    "blog",
    "job",
    "config",
    "engine",
]
