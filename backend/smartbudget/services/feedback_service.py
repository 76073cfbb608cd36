"""
Records what was suggested versus what the user actually chose.

Writes run on their own worker thread and database session so a slow or
failing write never affects the transaction save that triggered it.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from sqlalchemy.orm import Session

from smartbudget.config import settings
from smartbudget.database import SessionLocal
from smartbudget.models.categorization_feedback import CategorizationFeedback
from smartbudget.repositories.feedback import FeedbackRepository

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 255


class FeedbackService:
    """Schedules feedback writes on a worker pool with their own sessions."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        max_workers: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.feedback_max_workers,
            thread_name_prefix="categorization-feedback",
        )

    def record_feedback(
        self,
        user_id: Optional[str],
        description: Optional[str],
        suggested_category_id: Optional[str],
        actual_category_id: Optional[str],
        transaction_id: Optional[str],
    ) -> Optional[Future]:
        """
        Schedule one feedback row.

        Returns None without scheduling anything when the user, transaction or
        actual category is missing.
        """
        if not user_id or not transaction_id or not actual_category_id:
            return None
        return self._executor.submit(
            self._write,
            user_id,
            description,
            suggested_category_id,
            actual_category_id,
            transaction_id,
        )

    def _write(self, user_id, description, suggested_category_id, actual_category_id, transaction_id) -> bool:
        db = self.session_factory()
        try:
            FeedbackRepository(db).save(CategorizationFeedback(
                user_id=user_id,
                description=description[:MAX_DESCRIPTION_LENGTH] if description else description,
                suggested_category_id=suggested_category_id,
                actual_category_id=actual_category_id,
                transaction_id=transaction_id,
            ))
            return True
        except Exception:
            db.rollback()
            logger.exception(f"Failed to record categorization feedback for transaction {transaction_id}")
            return False
        finally:
            db.close()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
