"""
Suggestion accuracy computed from recorded feedback.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from smartbudget.repositories.feedback import FeedbackRepository
from smartbudget.schemas.categorization import (
    CategorizationMetricsResponse,
    CategoryMetricsBreakdown,
)


def _accuracy(accepted: int, total: int) -> float:
    return accepted / total if total > 0 else 0.0


def get_metrics(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> CategorizationMetricsResponse:
    """
    Accepted/rejected suggestion counts overall and per actual category.

    Both dates are inclusive; either may be omitted.
    """
    start = datetime.combine(start_date, time.min) if start_date else None
    end = datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None

    repo = FeedbackRepository(db)
    total, accepted, rejected = repo.summarize_totals(start, end)

    breakdown = []
    for row in repo.summarize_by_category(start, end):
        cat_total = int(row.total or 0)
        cat_accepted = int(row.accepted or 0)
        breakdown.append(CategoryMetricsBreakdown(
            category_id=row.category_id,
            category_name=row.category_name,
            total=cat_total,
            accepted=cat_accepted,
            rejected=int(row.rejected or 0),
            accuracy=_accuracy(cat_accepted, cat_total),
        ))

    return CategorizationMetricsResponse(
        total_suggestions=total,
        accepted_suggestions=accepted,
        rejected_suggestions=rejected,
        accuracy=_accuracy(accepted, total),
        breakdown=breakdown,
    )
