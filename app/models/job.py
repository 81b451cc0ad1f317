# app/models/job.py
from sqlmodel import SQLModel, Field, Column, Text
from typing import Optional
from datetime import datetime
from enum import Enum


class JobKind(str, Enum):
    """Work a queued job performs."""
    generate = "generate"
    translate = "translate"


class JobStatus(str, Enum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"


class GenerationJob(SQLModel, table=True):
    """
    Durable record of a deferred blog generation or translation.

    Jobs become due at `run_after` and are picked up by the background
    job processor; a job left `running` by a stopped process is put back
    to `pending` on the next startup.
    """
    __tablename__ = "generation_jobs"

    id: Optional[int] = Field(default=None, primary_key=True)
    kind: JobKind = Field(default=JobKind.generate, index=True)
    status: JobStatus = Field(default=JobStatus.pending, index=True)

    # Generation input
    title: Optional[str] = Field(default=None, max_length=500)
    cta_type: Optional[str] = Field(default=None, max_length=100)
    cta_link: Optional[str] = Field(default=None, max_length=500)
    main_image: Optional[str] = Field(default=None, max_length=1000)

    # Translation input / generation output
    blog_id: Optional[int] = Field(default=None, foreign_key="blogs.id", index=True, ondelete="SET NULL")
    language: Optional[str] = Field(default=None, max_length=10)

    attempts: int = Field(default=0)
    error: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    run_after: datetime = Field(default_factory=datetime.utcnow, index=True)
    started_at: Optional[datetime] = Field(default=None)
    finished_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
