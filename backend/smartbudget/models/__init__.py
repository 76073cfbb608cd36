"""
Database models package.
"""

from smartbudget.models.user import User
from smartbudget.models.transaction import Transaction, TransactionType
from smartbudget.models.category import Category
from smartbudget.models.categorization_rule import CategorizationRule
from smartbudget.models.categorization_feedback import CategorizationFeedback

__all__ = [
    "User",
    "Transaction",
    "TransactionType",
    "Category",
    "CategorizationRule",
    "CategorizationFeedback",
]
