"""
Categorization feedback database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from smartbudget.database import Base


class CategorizationFeedback(Base):
    """Append-only record of what was suggested versus what the user kept."""

    __tablename__ = "categorization_feedback"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    suggested_category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    actual_category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    transaction_id = Column(String(36), ForeignKey("transactions.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="feedback")
    suggested_category = relationship("Category", foreign_keys=[suggested_category_id])
    actual_category = relationship("Category", foreign_keys=[actual_category_id])
    transaction = relationship("Transaction")
