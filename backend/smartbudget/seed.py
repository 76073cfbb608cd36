"""
Seed script for default categories and keyword rules.

Run with ``python -m smartbudget.seed``.
"""

import logging

from sqlalchemy.orm import Session

from smartbudget.database import SessionLocal, init_db
from smartbudget.models import Category, CategorizationRule, TransactionType

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Salary", TransactionType.income, "Regular employment income"),
    ("Investments", TransactionType.income, "Dividends, interest and capital gains"),
    ("Other", TransactionType.income, "Miscellaneous income"),
    ("Rent", TransactionType.expense, "Rent and mortgage payments"),
    ("Food", TransactionType.expense, "Groceries, restaurants and coffee"),
    ("Transport", TransactionType.expense, "Public transport, fuel and taxis"),
    ("Utilities", TransactionType.expense, "Electricity, water, internet and phone"),
    ("Entertainment", TransactionType.expense, "Streaming, games and events"),
    ("Health", TransactionType.expense, "Medical, pharmacy and fitness"),
    ("Shopping", TransactionType.expense, "Clothing, electronics and household"),
]

# keyword -> category name, per transaction type
DEFAULT_RULES = {
    TransactionType.expense: [
        ("coffee", "Food"),
        ("starbucks", "Food"),
        ("restaurant", "Food"),
        ("grocery", "Food"),
        ("supermarket", "Food"),
        ("rent", "Rent"),
        ("landlord", "Rent"),
        ("uber", "Transport"),
        ("taxi", "Transport"),
        ("fuel", "Transport"),
        ("metro", "Transport"),
        ("electricity", "Utilities"),
        ("internet", "Utilities"),
        ("netflix", "Entertainment"),
        ("spotify", "Entertainment"),
        ("cinema", "Entertainment"),
        ("pharmacy", "Health"),
        ("gym", "Health"),
        ("amazon", "Shopping"),
    ],
    TransactionType.income: [
        ("salary", "Salary"),
        ("payroll", "Salary"),
        ("dividend", "Investments"),
        ("interest", "Investments"),
        ("refund", "Other"),
    ],
}


def seed_categories(db: Session) -> int:
    """Insert default categories that do not exist yet. Returns the number added."""
    existing = {name.lower() for (name,) in db.query(Category.name).all()}
    added = 0
    for name, category_type, description in DEFAULT_CATEGORIES:
        if name.lower() in existing:
            continue
        db.add(Category(name=name, type=category_type, description=description))
        added += 1
    db.commit()
    return added


def seed_rules(db: Session) -> int:
    """Insert default keyword rules when no rules exist. Returns the number added."""
    if db.query(CategorizationRule).count() > 0:
        logger.info("Rules already seeded")
        return 0

    categories = {c.name: c for c in db.query(Category).all()}
    added = 0
    for transaction_type, rules in DEFAULT_RULES.items():
        for keyword, category_name in rules:
            category = categories.get(category_name)
            if category is None:
                logger.warning(f"Skipping rule '{keyword}': category {category_name} missing")
                continue
            db.add(CategorizationRule(
                keyword=keyword,
                transaction_type=transaction_type,
                category_id=category.id,
            ))
            added += 1
    db.commit()
    return added


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        categories = seed_categories(db)
        rules = seed_rules(db)
        logger.info(f"Seeded {categories} categories and {rules} rules")
    except Exception:
        db.rollback()
        logger.exception("Error seeding database")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
