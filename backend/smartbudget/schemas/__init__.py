"""
Pydantic schemas package.
"""

from smartbudget.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryResponse,
    CategoryList,
)
from smartbudget.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from smartbudget.schemas.categorization import (
    CategorySuggestionRequest,
    CategorySuggestionResponse,
    BulkCategorizationRequest,
    BulkCategorizationJobResponse,
    CategorizationRuleCreate,
    CategorizationRuleResponse,
    CategoryMetricsBreakdown,
    CategorizationMetricsResponse,
)

__all__ = [
    "CategoryBase",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryList",
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "CategorySuggestionRequest",
    "CategorySuggestionResponse",
    "BulkCategorizationRequest",
    "BulkCategorizationJobResponse",
    "CategorizationRuleCreate",
    "CategorizationRuleResponse",
    "CategoryMetricsBreakdown",
    "CategorizationMetricsResponse",
]
