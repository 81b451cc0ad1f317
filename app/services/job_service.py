# app/services/job_service.py
"""
Job Service for queuing and running deferred blog generation and translation.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlmodel import Session, select

from app.core.config import settings
from app.models.job import GenerationJob, JobKind, JobStatus
from app.services.blog_translator import translate_blog
from app.services.exceptions import SlugGenerationError, TranslationError
from app.services.generation_service import generate_and_save_blog, get_image_client
from app.services.llm import LLMProvider, LLMError

logger = logging.getLogger(__name__)


class GenerationJobService:
    """Service for the durable generation job queue."""

    @staticmethod
    def enqueue_generation(
        db: Session,
        title: str,
        cta_type: Optional[str] = None,
        cta_link: Optional[str] = None,
        main_image: Optional[str] = None,
        delay_seconds: Optional[int] = None
    ) -> GenerationJob:
        """
        Queue a blog generation to run after `delay_seconds`.

        Args:
            db: Database session
            title: Topic of the blog
            cta_type: Kind of call to action
            cta_link: Link attached to the call to action
            main_image: Main image URL; Unsplash is queried when missing
            delay_seconds: Delay before the job is due (defaults to GENERATION_DELAY_SECONDS)

        Returns:
            The pending job
        """
        delay = settings.GENERATION_DELAY_SECONDS if delay_seconds is None else delay_seconds
        job = GenerationJob(
            kind=JobKind.generate,
            title=title,
            cta_type=cta_type,
            cta_link=cta_link,
            main_image=main_image,
            run_after=datetime.utcnow() + timedelta(seconds=delay),
        )
        db.add(job)
        db.commit()
        db.refresh(job)
        logger.info(f"Queued generation job {job.id} for '{title}' at {job.run_after}")
        return job

    @staticmethod
    def enqueue_translation(db: Session, blog_id: int, language: str) -> GenerationJob:
        """Queue a translation of an existing blog, due immediately."""
        job = GenerationJob(kind=JobKind.translate, blog_id=blog_id, language=language.lower())
        db.add(job)
        db.commit()
        db.refresh(job)
        logger.info(f"Queued translation job {job.id} for blog {blog_id} to '{job.language}'")
        return job

    @staticmethod
    def get_job(db: Session, job_id: int) -> Optional[GenerationJob]:
        return db.get(GenerationJob, job_id)

    @staticmethod
    def requeue_stale_jobs(db: Session) -> int:
        """
        Put jobs left `running` by a stopped process back to `pending`.

        Returns:
            Number of requeued jobs
        """
        jobs = db.exec(select(GenerationJob).where(GenerationJob.status == JobStatus.running)).all()
        for job in jobs:
            job.status = JobStatus.pending
            job.started_at = None
            job.updated_at = datetime.utcnow()
            db.add(job)
        db.commit()
        return len(jobs)

    @staticmethod
    def claim_due_jobs(db: Session, limit: Optional[int] = None) -> List[GenerationJob]:
        """
        Mark due pending jobs as running and return them, oldest first.

        Args:
            db: Database session
            limit: Maximum jobs to claim (defaults to JOB_BATCH_SIZE)
        """
        limit = settings.JOB_BATCH_SIZE if limit is None else limit
        now = datetime.utcnow()
        query = (
            select(GenerationJob)
            .where(GenerationJob.status == JobStatus.pending, GenerationJob.run_after <= now)
            .order_by(GenerationJob.run_after, GenerationJob.id)
            .limit(limit)
        )
        jobs = db.exec(query).all()
        for job in jobs:
            job.status = JobStatus.running
            job.attempts += 1
            job.started_at = now
            job.updated_at = now
            db.add(job)
        db.commit()
        for job in jobs:
            db.refresh(job)
        return jobs

    @staticmethod
    def _finish(db: Session, job: GenerationJob, status: JobStatus, error: Optional[str] = None) -> GenerationJob:
        now = datetime.utcnow()
        job.status = status
        job.error = error
        job.finished_at = now
        job.updated_at = now
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    @staticmethod
    async def run_job(db: Session, job: GenerationJob, provider: LLMProvider) -> GenerationJob:
        """
        Run a claimed job and record its outcome on the row.

        Failures are stored in `job.error`; nothing is raised to the caller.
        """
        try:
            if job.kind == JobKind.generate:
                blog = await generate_and_save_blog(
                    db,
                    provider,
                    job.title,
                    cta_type=job.cta_type,
                    cta_link=job.cta_link,
                    main_image={"url": job.main_image} if job.main_image else None,
                    image_client=get_image_client(),
                )
                if blog is None:
                    return GenerationJobService._finish(
                        db, job, JobStatus.failed, "The model did not return a usable blog"
                    )
                job.blog_id = blog.id
            else:
                await translate_blog(db, provider, job.blog_id, job.language)
        except (SlugGenerationError, TranslationError, LLMError) as e:
            db.rollback()
            logger.error(f"Job {job.id} failed: {e}")
            return GenerationJobService._finish(db, job, JobStatus.failed, str(e))
        except Exception as e:
            db.rollback()
            logger.exception(f"Unexpected error in job {job.id}")
            return GenerationJobService._finish(db, job, JobStatus.failed, f"Unexpected error: {e}")

        logger.info(f"Job {job.id} ({job.kind.value}) completed")
        return GenerationJobService._finish(db, job, JobStatus.completed)

