"""Base repository with generic CRUD operations."""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from smartbudget.database import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def get_by_id(self, id) -> Optional[T]:
        """Get a single record by ID."""
        return self.db.get(self.model, id)

    def save(self, obj: T) -> T:
        """Insert or update a record and commit."""
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        """Delete a record and commit."""
        self.db.delete(obj)
        self.db.commit()
