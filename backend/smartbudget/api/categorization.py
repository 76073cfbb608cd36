"""
Categorization API endpoints: suggestions, keyword rules and accuracy metrics.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from smartbudget.dependencies import get_db
from smartbudget.exceptions import CategoryNotFoundError, RuleNotFoundError
from smartbudget.models.categorization_rule import CategorizationRule
from smartbudget.models.transaction import TransactionType
from smartbudget.repositories.category import CategoryRepository
from smartbudget.repositories.rule import RuleRepository
from smartbudget.schemas.categorization import (
    CategorySuggestionRequest,
    CategorySuggestionResponse,
    CategorizationRuleCreate,
    CategorizationRuleResponse,
    CategorizationMetricsResponse,
)
from smartbudget.services import metrics_service
from smartbudget.services.categorization_service import CategorizationService

router = APIRouter(prefix="/categorization", tags=["categorization"])


@router.post("/suggest", response_model=CategorySuggestionResponse)
def suggest_category(
    request: CategorySuggestionRequest,
    db: Session = Depends(get_db)
):
    """Suggest the most likely category for a description and amount."""
    suggestion = CategorizationService(db).suggest_category(
        request.description,
        request.amount,
        request.transaction_type,
        request.user_id,
    )
    return CategorySuggestionResponse.from_suggestion(suggestion)


@router.get("/metrics", response_model=CategorizationMetricsResponse)
def get_metrics(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Suggestion accuracy from recorded feedback."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    return metrics_service.get_metrics(db, start_date, end_date)


@router.get("/rules", response_model=list[CategorizationRuleResponse])
def list_rules(
    transaction_type: Optional[TransactionType] = None,
    db: Session = Depends(get_db)
):
    """List keyword rules, optionally for one transaction type."""
    return RuleRepository(db).list_all(transaction_type)


@router.post("/rules", response_model=CategorizationRuleResponse, status_code=201)
def create_rule(
    rule: CategorizationRuleCreate,
    db: Session = Depends(get_db)
):
    """Create a keyword rule."""
    if CategoryRepository(db).get_by_id(rule.category_id) is None:
        raise CategoryNotFoundError(rule.category_id)

    return RuleRepository(db).save(CategorizationRule(
        keyword=rule.keyword.strip(),
        transaction_type=rule.transaction_type,
        category_id=rule.category_id,
    ))


@router.delete("/rules/{rule_id}", status_code=204)
def delete_rule(
    rule_id: int,
    db: Session = Depends(get_db)
):
    """Delete a keyword rule."""
    repo = RuleRepository(db)
    rule = repo.get_by_id(rule_id)
    if rule is None:
        raise RuleNotFoundError(rule_id)
    repo.delete(rule)
    return None
