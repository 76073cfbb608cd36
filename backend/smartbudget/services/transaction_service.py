"""
Transaction create/update, including feedback on category suggestions.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from smartbudget.exceptions import CategoryNotFoundError, TransactionNotFoundError
from smartbudget.models.transaction import Transaction
from smartbudget.repositories.category import CategoryRepository
from smartbudget.repositories.transaction import TransactionRepository
from smartbudget.schemas.transaction import TransactionCreate, TransactionUpdate
from smartbudget.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)


class TransactionService:

    def __init__(self, db: Session, feedback_service: Optional[FeedbackService] = None):
        self.db = db
        self.transactions = TransactionRepository(db)
        self.categories = CategoryRepository(db)
        self.feedback_service = feedback_service

    def create_transaction(self, user_id: str, request: TransactionCreate) -> Transaction:
        category = self.categories.get_by_id(request.category_id)
        if category is None:
            raise CategoryNotFoundError(request.category_id)

        transaction = Transaction(
            user_id=user_id,
            category_id=category.id,
            amount=request.amount,
            transaction_type=request.transaction_type,
            transaction_date=request.transaction_date,
            description=request.description,
        )
        saved = self.transactions.save(transaction)
        self._maybe_record_feedback(user_id, request.suggested_category_id, saved)
        return saved

    def update_transaction(
        self, user_id: str, transaction_id: str, request: TransactionUpdate
    ) -> Transaction:
        transaction = self.transactions.get_for_user(user_id, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)

        if request.category_id is not None and self.categories.get_by_id(request.category_id) is None:
            raise CategoryNotFoundError(request.category_id)

        update_data = request.model_dump(exclude_unset=True, exclude={"suggested_category_id"})
        for field, value in update_data.items():
            if value is not None:
                setattr(transaction, field, value)

        saved = self.transactions.save(transaction)
        self._maybe_record_feedback(user_id, request.suggested_category_id, saved)
        return saved

    def _maybe_record_feedback(
        self, user_id: str, suggested_category_id: Optional[str], transaction: Transaction
    ) -> None:
        if suggested_category_id is None or self.feedback_service is None:
            return
        # A suggestion that no longer resolves is still feedback, just without a suggested category
        suggested = self.categories.get_by_id(suggested_category_id)
        self.feedback_service.record_feedback(
            user_id=user_id,
            description=transaction.description,
            suggested_category_id=suggested.id if suggested else None,
            actual_category_id=transaction.category_id,
            transaction_id=transaction.id,
        )
