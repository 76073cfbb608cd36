"""
Keyword categorization rule database model.
"""

from sqlalchemy import Column, Integer, String, Enum, ForeignKey
from sqlalchemy.orm import relationship
from smartbudget.database import Base
from smartbudget.models.transaction import TransactionType


class CategorizationRule(Base):
    """Maps a keyword found in a description to a category for one transaction type."""

    __tablename__ = "categorization_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    keyword = Column(String(120), nullable=False)
    transaction_type = Column(Enum(TransactionType), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="rules", lazy="joined")
