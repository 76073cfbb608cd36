"""
Bulk re-categorization of a user's transactions as a background job.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from sqlalchemy.orm import Session

from smartbudget.cache import TTLCache
from smartbudget.config import settings
from smartbudget.database import SessionLocal
from smartbudget.jobs import BulkCategorizationJob, InMemoryJobStore, JobStore
from smartbudget.repositories.category import CategoryRepository
from smartbudget.repositories.transaction import TransactionRepository
from smartbudget.schemas.categorization import BulkCategorizationRequest
from smartbudget.services.categorization_service import CategorizationService

logger = logging.getLogger(__name__)


class BulkCategorizationService:
    """Starts bulk jobs on a worker pool and answers status polls."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        job_store: Optional[JobStore] = None,
        max_workers: Optional[int] = None,
        cache: Optional[TTLCache] = None,
    ):
        self.session_factory = session_factory
        self.job_store = job_store if job_store is not None else InMemoryJobStore(
            max_jobs=settings.bulk_max_retained_jobs
        )
        self.cache = cache
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.bulk_max_workers,
            thread_name_prefix="bulk-categorize",
        )

    def start_job(self, user_id: str, request: BulkCategorizationRequest) -> BulkCategorizationJob:
        """Register a pending job and hand it to a worker. Returns immediately."""
        job = BulkCategorizationJob(user_id=user_id)
        self.job_store.add(job)
        logger.info(f"Queued bulk categorization job {job.job_id} for user {user_id}")
        self._executor.submit(self.run_job, job.job_id, user_id, request)
        return job

    def get_job(self, job_id: str) -> Optional[BulkCategorizationJob]:
        return self.job_store.get(job_id)

    def run_job(self, job_id: str, user_id: str, request: BulkCategorizationRequest) -> None:
        """
        Execute a job to completion on the calling thread.

        Any error aborts the whole job as failed; counters keep the progress
        made before the error.
        """
        job = self.job_store.get(job_id)
        if job is None:
            logger.warning(f"Bulk categorization job {job_id} not found; nothing to run")
            return

        job.mark_running()
        threshold = request.confidence_threshold
        if threshold is None:
            threshold = settings.bulk_default_confidence_threshold

        db = None
        try:
            db = self.session_factory()
            engine = CategorizationService(db, cache=self.cache)
            categories = CategoryRepository(db)
            transactions = TransactionRepository(db)

            candidates = transactions.find_for_bulk_categorization(
                user_id,
                transaction_type=request.transaction_type,
                date_from=request.date_from,
                date_to=request.date_to,
                category_id=request.current_category_id,
            )
            logger.info(f"Job {job_id}: {len(candidates)} transactions to evaluate (threshold {threshold})")

            updated = 0
            skipped = 0
            for txn in candidates:
                suggestion = engine.suggest_category(
                    txn.description,
                    txn.amount,
                    txn.transaction_type,
                    user_id,
                )
                if suggestion is None or suggestion.confidence < threshold:
                    skipped += 1
                elif suggestion.category_id == txn.category_id:
                    # Already in the suggested category; nothing to write
                    skipped += 1
                else:
                    # Re-resolve: the category may have been deleted since suggesting
                    target = categories.get_by_id(suggestion.category_id)
                    if target is None:
                        skipped += 1
                    else:
                        txn.category = target
                        transactions.save(txn)
                        updated += 1
                job.record_progress(updated, skipped)

            job.complete(len(candidates))
            logger.info(
                f"Job {job_id} completed: processed={len(candidates)} "
                f"updated={updated} skipped={skipped}"
            )
        except Exception as exc:
            if db is not None:
                db.rollback()
            logger.exception(f"Bulk categorization job {job_id} failed")
            job.fail(str(exc) or type(exc).__name__)
        finally:
            if db is not None:
                db.close()

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs; optionally wait for running ones."""
        self._executor.shutdown(wait=wait)
