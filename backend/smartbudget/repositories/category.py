"""Category lookups."""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from smartbudget.models.category import Category
from smartbudget.models.transaction import TransactionType
from smartbudget.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):

    def __init__(self, db: Session):
        super().__init__(db, Category)

    def find_first_by_name_ignore_case(self, name: str) -> Optional[Category]:
        """Resolve a category by name, ignoring case."""
        return (
            self.db.query(Category)
            .filter(func.lower(Category.name) == name.strip().lower())
            .order_by(Category.name)
            .first()
        )

    def list_all(self, category_type: Optional[TransactionType] = None) -> List[Category]:
        query = self.db.query(Category)
        if category_type is not None:
            query = query.filter(Category.type == category_type)
        return query.order_by(Category.name).all()
