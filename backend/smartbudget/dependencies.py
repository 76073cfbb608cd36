"""
FastAPI dependencies.
"""

from typing import Generator

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from smartbudget.database import SessionLocal
from smartbudget.exceptions import UserNotFoundError
from smartbudget.models.user import User
from smartbudget.repositories.user import UserRepository
from smartbudget.services.bulk_categorization_service import BulkCategorizationService
from smartbudget.services.feedback_service import FeedbackService


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    x_user_id: str = Header(..., alias="X-User-Id"),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the calling user from the X-User-Id header."""
    user = UserRepository(db).get_by_id(x_user_id)
    if not user:
        raise UserNotFoundError(x_user_id)
    return user


def get_bulk_categorization_service(request: Request) -> BulkCategorizationService:
    """Bulk job runner created at application startup."""
    return request.app.state.bulk_categorization_service


def get_feedback_service(request: Request) -> FeedbackService:
    """Feedback recorder created at application startup."""
    return request.app.state.feedback_service
