"""
Categorization schemas.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date
from decimal import Decimal

from smartbudget.jobs import JobStatus
from smartbudget.models.transaction import TransactionType


class CategorySuggestionRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    transaction_type: TransactionType
    user_id: Optional[str] = None


class CategorySuggestionResponse(BaseModel):
    """Empty suggestion is reported as null ids with zero confidence."""
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    confidence: float = 0.0

    @classmethod
    def from_suggestion(cls, suggestion) -> "CategorySuggestionResponse":
        if suggestion is None:
            return cls()
        return cls(
            category_id=suggestion.category_id,
            category_name=suggestion.category_name,
            confidence=suggestion.confidence,
        )


class BulkCategorizationRequest(BaseModel):
    """Filter and threshold for a bulk categorization job."""
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    current_category_id: Optional[str] = None
    transaction_type: Optional[TransactionType] = None
    # None falls back to settings.bulk_default_confidence_threshold
    confidence_threshold: Optional[float] = Field(None, gt=0, le=1)

    @model_validator(mode="after")
    def check_date_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self


class BulkCategorizationJobResponse(BaseModel):
    job_id: str
    status: JobStatus
    total_processed: int
    total_updated: int
    total_skipped_low_confidence: int
    error: Optional[str] = None


class CategorizationRuleCreate(BaseModel):
    keyword: str = Field(..., min_length=1, max_length=120)
    transaction_type: TransactionType
    category_id: str


class CategorizationRuleResponse(BaseModel):
    id: int
    keyword: str
    transaction_type: TransactionType
    category_id: str

    class Config:
        from_attributes = True


class CategoryMetricsBreakdown(BaseModel):
    category_id: str
    category_name: str
    total: int
    accepted: int
    rejected: int
    accuracy: float


class CategorizationMetricsResponse(BaseModel):
    total_suggestions: int
    accepted_suggestions: int
    rejected_suggestions: int
    accuracy: float
    breakdown: list[CategoryMetricsBreakdown]
