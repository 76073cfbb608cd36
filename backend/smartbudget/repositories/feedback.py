"""Categorization feedback queries."""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session

from smartbudget.models.categorization_feedback import CategorizationFeedback
from smartbudget.models.category import Category
from smartbudget.repositories.base import BaseRepository


def _accepted_expr():
    return func.coalesce(func.sum(case(
        (and_(
            CategorizationFeedback.suggested_category_id.isnot(None),
            CategorizationFeedback.suggested_category_id == CategorizationFeedback.actual_category_id,
        ), 1),
        else_=0,
    )), 0)


def _rejected_expr():
    return func.coalesce(func.sum(case(
        (and_(
            CategorizationFeedback.suggested_category_id.isnot(None),
            CategorizationFeedback.suggested_category_id != CategorizationFeedback.actual_category_id,
        ), 1),
        else_=0,
    )), 0)


class FeedbackRepository(BaseRepository[CategorizationFeedback]):

    def __init__(self, db: Session):
        super().__init__(db, CategorizationFeedback)

    def find_top_categories_for_user_and_token(
        self, user_id: str, token: str
    ) -> List[Tuple[Category, int]]:
        """
        Categories the user settled on for descriptions containing the token.

        Returns (category, correction_count) pairs, highest count first.
        """
        correction_count = func.count(CategorizationFeedback.id).label("correction_count")
        stmt = (
            select(Category, correction_count)
            .join(CategorizationFeedback, CategorizationFeedback.actual_category_id == Category.id)
            .where(
                CategorizationFeedback.user_id == user_id,
                func.lower(CategorizationFeedback.description).contains(token.lower(), autoescape=True),
            )
            .group_by(Category.id)
            .order_by(correction_count.desc(), Category.name)
        )
        return [(row[0], int(row[1])) for row in self.db.execute(stmt).all()]

    def _bounded(self, stmt, start: Optional[datetime], end: Optional[datetime]):
        if start is not None:
            stmt = stmt.where(CategorizationFeedback.created_at >= start)
        if end is not None:
            stmt = stmt.where(CategorizationFeedback.created_at < end)
        return stmt

    def summarize_totals(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Tuple[int, int, int]:
        """(total, accepted, rejected) over feedback created in [start, end)."""
        stmt = select(
            func.count(CategorizationFeedback.id),
            _accepted_expr(),
            _rejected_expr(),
        )
        row = self.db.execute(self._bounded(stmt, start, end)).one()
        return int(row[0] or 0), int(row[1] or 0), int(row[2] or 0)

    def summarize_by_category(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list:
        """Per actual category: (category_id, category_name, total, accepted, rejected)."""
        total = func.count(CategorizationFeedback.id).label("total")
        stmt = (
            select(
                Category.id.label("category_id"),
                Category.name.label("category_name"),
                total,
                _accepted_expr().label("accepted"),
                _rejected_expr().label("rejected"),
            )
            .join(CategorizationFeedback, CategorizationFeedback.actual_category_id == Category.id)
            .group_by(Category.id, Category.name)
            .order_by(total.desc(), Category.name)
        )
        return self.db.execute(self._bounded(stmt, start, end)).all()
