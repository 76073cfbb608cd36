"""
Main API router.
"""

from fastapi import APIRouter
from smartbudget.api import categories, categorization, transactions

api_router = APIRouter()

api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(categorization.router)
api_router.include_router(transactions.router)
