"""
Transaction schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from smartbudget.models.transaction import TransactionType


class TransactionBase(BaseModel):
    transaction_date: date
    amount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    transaction_type: TransactionType
    description: Optional[str] = Field(None, max_length=1000)
    category_id: str


class TransactionCreate(TransactionBase):
    # Category the client was offered before the user picked category_id
    suggested_category_id: Optional[str] = None


class TransactionUpdate(BaseModel):
    transaction_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    transaction_type: Optional[TransactionType] = None
    description: Optional[str] = Field(None, max_length=1000)
    category_id: Optional[str] = None
    suggested_category_id: Optional[str] = None


class TransactionResponse(BaseModel):
    id: str
    user_id: str
    transaction_date: date
    amount: Decimal
    transaction_type: TransactionType
    description: Optional[str]
    category_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    pages: int
