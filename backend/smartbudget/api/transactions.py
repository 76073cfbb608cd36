"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from smartbudget.dependencies import (
    get_db,
    get_current_user,
    get_bulk_categorization_service,
    get_feedback_service,
)
from smartbudget.exceptions import TransactionNotFoundError
from smartbudget.models.transaction import TransactionType
from smartbudget.models.user import User
from smartbudget.repositories.transaction import TransactionRepository
from smartbudget.schemas.categorization import (
    BulkCategorizationRequest,
    BulkCategorizationJobResponse,
)
from smartbudget.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse
)
from smartbudget.services.bulk_categorization_service import BulkCategorizationService
from smartbudget.services.feedback_service import FeedbackService
from smartbudget.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    category_id: Optional[str] = None,
    transaction_type: Optional[TransactionType] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's transactions with filtering and pagination"""
    items, total = TransactionRepository(db).list_for_user(
        user.id,
        category_id=category_id,
        transaction_type=transaction_type,
        start_date=start_date,
        end_date=end_date,
        search=search,
        page=page,
        per_page=per_page,
    )
    pages = (total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in items],
        total=total,
        page=page,
        pages=pages
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request: TransactionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    feedback_service: FeedbackService = Depends(get_feedback_service)
):
    """Create a transaction; records feedback when a suggestion was shown"""
    transaction = TransactionService(db, feedback_service).create_transaction(user.id, request)
    return TransactionResponse.model_validate(transaction)


@router.post("/bulk-categorize", response_model=BulkCategorizationJobResponse, status_code=202)
def start_bulk_categorization(
    request: BulkCategorizationRequest,
    user: User = Depends(get_current_user),
    service: BulkCategorizationService = Depends(get_bulk_categorization_service)
):
    """Start a bulk categorization job; poll its status by job_id"""
    job = service.start_job(user.id, request)
    return BulkCategorizationJobResponse(**job.snapshot())


@router.get("/bulk-categorize/{job_id}", response_model=BulkCategorizationJobResponse)
def get_bulk_categorization_status(
    job_id: str,
    service: BulkCategorizationService = Depends(get_bulk_categorization_service)
):
    """Get bulk categorization job status"""
    job = service.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return BulkCategorizationJobResponse(**job.snapshot())


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single transaction"""
    transaction = TransactionRepository(db).get_for_user(user.id, transaction_id)
    if not transaction:
        raise TransactionNotFoundError(transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    feedback_service: FeedbackService = Depends(get_feedback_service)
):
    """Update a transaction; records feedback when a suggestion was shown"""
    transaction = TransactionService(db, feedback_service).update_transaction(
        user.id, transaction_id, update
    )
    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a transaction. Recorded feedback for it is kept."""
    repo = TransactionRepository(db)
    transaction = repo.get_for_user(user.id, transaction_id)
    if not transaction:
        raise TransactionNotFoundError(transaction_id)
    repo.delete(transaction)
    return None
