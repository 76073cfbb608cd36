"""User lookups."""

from sqlalchemy.orm import Session

from smartbudget.models.user import User
from smartbudget.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, db: Session):
        super().__init__(db, User)

