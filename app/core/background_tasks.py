# app/core/background_tasks.py
"""
Background tasks for deferred blog generation and translation.
"""
import asyncio
import logging
from typing import Callable, Optional

from app.core.config import settings
from app.database.engine import get_db
from app.services.job_service import GenerationJobService
from app.services.llm import LLMProvider, create_llm_provider

logger = logging.getLogger(__name__)


class BackgroundTaskManager:
    """Manages periodic background tasks."""

    def __init__(
        self,
        provider_factory: Callable[[], LLMProvider] = create_llm_provider,
        session_factory=get_db,
        poll_interval: Optional[float] = None
    ):
        self.provider_factory = provider_factory
        self.session_factory = session_factory
        self.poll_interval = settings.JOB_POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        self.tasks: list[asyncio.Task] = []
        self._running = False
        self._provider: Optional[LLMProvider] = None

    async def start(self):
        """Start all background tasks."""
        if self._running:
            logger.warning("Background tasks already running")
            return

        self._running = True
        logger.info("Starting background tasks...")

        self.requeue_stale_jobs()
        self.tasks.append(asyncio.create_task(self.process_generation_jobs_task()))

        logger.info(f"Started {len(self.tasks)} background tasks")

    async def stop(self):
        """Stop all background tasks."""
        if not self._running:
            return

        logger.info("Stopping background tasks...")
        self._running = False

        for task in self.tasks:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        self.tasks.clear()
        logger.info("Background tasks stopped")

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = self.provider_factory()
        return self._provider

    def requeue_stale_jobs(self) -> int:
        """Return jobs interrupted by a previous shutdown to the queue."""
        db_gen = self.session_factory()
        db = next(db_gen)
        try:
            count = GenerationJobService.requeue_stale_jobs(db)
            if count > 0:
                logger.info(f"Requeued {count} interrupted generation jobs")
            return count
        finally:
            try:
                next(db_gen)
            except StopIteration:
                pass

    async def run_due_jobs(self) -> int:
        """
        Claim and run every due job, one after another.

        Returns:
            Number of jobs processed
        """
        db_gen = self.session_factory()
        db = next(db_gen)

        try:
            jobs = GenerationJobService.claim_due_jobs(db)
            for job in jobs:
                logger.info(f"Running {job.kind.value} job {job.id}")
                await GenerationJobService.run_job(db, job, self.provider)
            return len(jobs)
        finally:
            # Close the database session
            try:
                next(db_gen)
            except StopIteration:
                pass

    async def process_generation_jobs_task(self):
        """
        Run due generation and translation jobs.
        Runs every JOB_POLL_INTERVAL_SECONDS.
        """
        while self._running:
            try:
                await asyncio.sleep(self.poll_interval)
                await self.run_due_jobs()

            except asyncio.CancelledError:
                logger.info("Generation jobs task cancelled")
                break
            except Exception as e:
                logger.error(f"Error in generation jobs task: {e}")
                # Wait before retrying
                await asyncio.sleep(60)


# Global background task manager instance
background_task_manager: Optional[BackgroundTaskManager] = None
