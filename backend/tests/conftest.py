"""Shared test fixtures."""

import os

# Keep the application's own engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from datetime import date, datetime
from decimal import Decimal
import uuid

from smartbudget.cache import TTLCache
from smartbudget.database import Base
from smartbudget.dependencies import (
    get_db,
    get_bulk_categorization_service,
    get_feedback_service,
)
from smartbudget.jobs import InMemoryJobStore
from smartbudget.main import app
from smartbudget.models import (
    CategorizationFeedback,
    CategorizationRule,
    Category,
    Transaction,
    TransactionType,
    User,
)
from smartbudget.services.bulk_categorization_service import BulkCategorizationService
from smartbudget.services.categorization_service import get_personalization_cache
from smartbudget.services.feedback_service import FeedbackService


@pytest.fixture(scope="function")
def engine(tmp_path):
    """Fresh SQLite file per test so background workers can open their own connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clear_personalization_cache():
    get_personalization_cache().clear()
    yield
    get_personalization_cache().clear()


@pytest.fixture
def cache():
    return TTLCache(max_entries=128, ttl_seconds=300)


@pytest.fixture
def bulk_service(session_factory, cache):
    service = BulkCategorizationService(
        session_factory=session_factory,
        job_store=InMemoryJobStore(),
        max_workers=1,
        cache=cache,
    )
    yield service
    service.shutdown(wait=True)


@pytest.fixture
def feedback_service(session_factory):
    service = FeedbackService(session_factory=session_factory, max_workers=1)
    yield service
    service.shutdown(wait=True)


@pytest.fixture(scope="function")
def client(db_session, bulk_service, feedback_service):
    """Create a test client with database and service overrides."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_bulk_categorization_service] = lambda: bulk_service
    app.dependency_overrides[get_feedback_service] = lambda: feedback_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_user(db_session):
    """Create a sample user."""
    user = User(id=str(uuid.uuid4()), email="alex@example.com", full_name="Alex Doe")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(sample_user):
    return {"X-User-Id": sample_user.id}


@pytest.fixture
def categories(db_session):
    """Default categories keyed by name."""
    data = [
        ("Food", TransactionType.expense),
        ("Transport", TransactionType.expense),
        ("Rent", TransactionType.expense),
        ("Entertainment", TransactionType.expense),
        ("Salary", TransactionType.income),
        ("Investments", TransactionType.income),
        ("Other", TransactionType.income),
    ]
    created = {}
    for name, category_type in data:
        category = Category(id=str(uuid.uuid4()), name=name, type=category_type)
        db_session.add(category)
        created[name] = category
    db_session.commit()
    return created


@pytest.fixture
def make_rule(db_session):
    """Factory for keyword rules."""
    def _make(keyword, category, transaction_type=TransactionType.expense):
        rule = CategorizationRule(
            keyword=keyword,
            transaction_type=transaction_type,
            category_id=category.id,
        )
        db_session.add(rule)
        db_session.commit()
        db_session.refresh(rule)
        return rule
    return _make


@pytest.fixture
def make_transaction(db_session, sample_user):
    """Factory for transactions owned by sample_user."""
    def _make(
        description,
        amount="25.00",
        category=None,
        transaction_type=TransactionType.expense,
        transaction_date=date(2024, 1, 15),
        user=None,
    ):
        txn = Transaction(
            id=str(uuid.uuid4()),
            user_id=(user or sample_user).id,
            category_id=category.id if category else None,
            amount=Decimal(amount),
            transaction_type=transaction_type,
            transaction_date=transaction_date,
            description=description,
        )
        db_session.add(txn)
        db_session.commit()
        db_session.refresh(txn)
        return txn
    return _make


@pytest.fixture
def make_feedback(db_session, sample_user, make_transaction):
    """Factory for feedback rows; creates the backing transaction."""
    def _make(description, actual, suggested=None, user=None, created_at=None, times=1):
        rows = []
        for _ in range(times):
            txn = make_transaction(description, category=actual, user=user)
            row = CategorizationFeedback(
                user_id=(user or sample_user).id,
                description=description,
                suggested_category_id=suggested.id if suggested else None,
                actual_category_id=actual.id,
                transaction_id=txn.id,
                created_at=created_at or datetime.utcnow(),
            )
            db_session.add(row)
            rows.append(row)
        db_session.commit()
        return rows
    return _make
