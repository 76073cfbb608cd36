"""Transaction queries used by categorization."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from smartbudget.models.transaction import Transaction, TransactionType
from smartbudget.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):

    def __init__(self, db: Session):
        super().__init__(db, Transaction)

    def get_for_user(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a transaction only if it belongs to the user."""
        return (
            self.db.query(Transaction)
            .filter(Transaction.id == transaction_id, Transaction.user_id == user_id)
            .first()
        )

    def find_for_bulk_categorization(
        self,
        user_id: str,
        transaction_type: Optional[TransactionType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        category_id: Optional[str] = None,
    ) -> List[Transaction]:
        """
        Transactions eligible for bulk categorization.

        Every filter is optional; the result is ordered by date then id so one
        call returns a stable sequence.
        """
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)

        if transaction_type is not None:
            query = query.filter(Transaction.transaction_type == transaction_type)
        if date_from is not None:
            query = query.filter(Transaction.transaction_date >= date_from)
        if date_to is not None:
            query = query.filter(Transaction.transaction_date <= date_to)
        if category_id is not None:
            query = query.filter(Transaction.category_id == category_id)

        return query.order_by(Transaction.transaction_date, Transaction.id).all()

    def list_for_user(
        self,
        user_id: str,
        category_id: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
        page: int = 1,
        per_page: int = 50,
    ):
        """Paged listing; returns (items, total)."""
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)

        if category_id:
            query = query.filter(Transaction.category_id == category_id)
        if transaction_type is not None:
            query = query.filter(Transaction.transaction_type == transaction_type)
        if start_date:
            query = query.filter(Transaction.transaction_date >= start_date)
        if end_date:
            query = query.filter(Transaction.transaction_date <= end_date)
        if search:
            query = query.filter(Transaction.description.ilike(f"%{search}%"))

        total = query.count()
        items = (
            query.order_by(Transaction.transaction_date.desc(), Transaction.id)
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return items, total
