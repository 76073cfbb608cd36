"""Keyword rule lookups."""

from typing import List, Optional

from sqlalchemy.orm import Session

from smartbudget.models.categorization_rule import CategorizationRule
from smartbudget.models.transaction import TransactionType
from smartbudget.repositories.base import BaseRepository


class RuleRepository(BaseRepository[CategorizationRule]):

    def __init__(self, db: Session):
        super().__init__(db, CategorizationRule)

    def find_by_transaction_type(self, transaction_type: TransactionType) -> List[CategorizationRule]:
        """All rules for the given transaction type, in insertion order."""
        return (
            self.db.query(CategorizationRule)
            .filter(CategorizationRule.transaction_type == transaction_type)
            .order_by(CategorizationRule.id)
            .all()
        )

    def list_all(self, transaction_type: Optional[TransactionType] = None) -> List[CategorizationRule]:
        if transaction_type is not None:
            return self.find_by_transaction_type(transaction_type)
        return self.db.query(CategorizationRule).order_by(CategorizationRule.id).all()
