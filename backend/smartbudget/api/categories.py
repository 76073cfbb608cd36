"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from smartbudget.dependencies import get_db
from smartbudget.exceptions import CategoryNotFoundError, DuplicateCategoryError
from smartbudget.models import Category, TransactionType
from smartbudget.repositories.category import CategoryRepository
from smartbudget.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryList,
)

router = APIRouter()


@router.get("", response_model=CategoryList)
def list_categories(
    type: Optional[TransactionType] = None,
    db: Session = Depends(get_db)
):
    """List categories, optionally of one type."""
    categories = CategoryRepository(db).list_all(type)
    return CategoryList(
        items=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories)
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db)
):
    """Create a new category. Names are unique regardless of case."""
    repo = CategoryRepository(db)
    if repo.find_first_by_name_ignore_case(category.name):
        raise DuplicateCategoryError(category.name)

    return repo.save(Category(
        name=category.name.strip(),
        type=category.type,
        description=category.description,
    ))


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    db: Session = Depends(get_db)
):
    """Get a specific category."""
    category = CategoryRepository(db).get_by_id(category_id)
    if not category:
        raise CategoryNotFoundError(category_id)
    return category
