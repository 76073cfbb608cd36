"""
Data access layer used by the services.
"""

from smartbudget.repositories.category import CategoryRepository
from smartbudget.repositories.rule import RuleRepository
from smartbudget.repositories.feedback import FeedbackRepository
from smartbudget.repositories.transaction import TransactionRepository
from smartbudget.repositories.user import UserRepository

__all__ = [
    "CategoryRepository",
    "RuleRepository",
    "FeedbackRepository",
    "TransactionRepository",
    "UserRepository",
]
