"""
Rule-based category suggestions.

A suggestion is the best of several independent candidates:

- personalized: the user's own corrections for a description token (0.95)
- keyword rules: whole-word match (0.9) or substring match (0.6)
- amount heuristics: very large or very small amounts (0.4)

Candidates are folded pairwise; equal confidences resolve to the category
whose name sorts first case-insensitively.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, NamedTuple, Optional, Tuple, Union

from sqlalchemy.orm import Session

from smartbudget.cache import TTLCache
from smartbudget.config import settings
from smartbudget.models.categorization_rule import CategorizationRule
from smartbudget.models.category import Category
from smartbudget.models.transaction import TransactionType
from smartbudget.repositories.category import CategoryRepository
from smartbudget.repositories.feedback import FeedbackRepository
from smartbudget.repositories.rule import RuleRepository

logger = logging.getLogger(__name__)

EXACT_MATCH_CONFIDENCE = 0.9
PARTIAL_MATCH_CONFIDENCE = 0.6
AMOUNT_HEURISTIC_CONFIDENCE = 0.4
PERSONALIZED_CONFIDENCE = 0.95
# No source currently produces less than 0.4; kept as a floor for weaker sources.
MIN_CONFIDENCE_THRESHOLD = 0.3
PERSONALIZATION_THRESHOLD = 3

LARGE_TRANSACTION_THRESHOLD = Decimal("1000")
SMALL_TRANSACTION_THRESHOLD = Decimal("10")
MIN_TOKEN_LENGTH = 3

# (large, small) heuristic category names per type; each entry lists fallbacks in order
AMOUNT_HEURISTICS = {
    TransactionType.expense: (("Rent",), ("Food", "Transport")),
    TransactionType.income: (("Salary",), ("Other", "Investments")),
}


@dataclass(frozen=True)
class CategorySuggestion:
    """Suggested category with a confidence in [0, 1]."""
    category_id: str
    category_name: str
    confidence: float


class Candidate(NamedTuple):
    category_id: str
    category_name: Optional[str]
    confidence: float

    @classmethod
    def of(cls, category: Category, confidence: float) -> "Candidate":
        return cls(category.id, category.name, confidence)


_default_cache: Optional[TTLCache] = None


def get_personalization_cache() -> TTLCache:
    """Process-wide personalization cache sized from settings."""
    global _default_cache
    if _default_cache is None:
        _default_cache = TTLCache(
            max_entries=settings.categorization_cache_max_entries,
            ttl_seconds=settings.categorization_cache_ttl_seconds,
        )
    return _default_cache


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def contains_whole_word(text: Optional[str], keyword: str) -> bool:
    """
    True when ``keyword`` occurs in ``text`` (case-insensitively) with a
    non-word character or a string edge on both sides.
    """
    if not text or not text.strip() or not keyword:
        return False
    haystack = text.lower()
    needle = keyword.lower()
    start = haystack.find(needle)
    while start != -1:
        end = start + len(needle)
        before_ok = start == 0 or not _is_word_char(haystack[start - 1])
        after_ok = end == len(haystack) or not _is_word_char(haystack[end])
        if before_ok and after_ok:
            return True
        start = haystack.find(needle, start + 1)
    return False


def extract_token(description: Optional[str]) -> str:
    """First word of at least three characters, else the whole trimmed description."""
    if description is None:
        return ""
    for part in description.lower().split():
        if len(part) >= MIN_TOKEN_LENGTH:
            return part
    return description.strip().lower()


def pick_better(current: Optional[Candidate], nxt: Optional[Candidate]) -> Optional[Candidate]:
    """Higher confidence wins; ties go to the alphabetically first name."""
    if nxt is None:
        return current
    if current is None:
        return nxt
    if nxt.confidence > current.confidence:
        return nxt
    if nxt.confidence < current.confidence:
        return current

    if current.category_name is None:
        return nxt
    if nxt.category_name is None:
        return current
    if current.category_name.lower() <= nxt.category_name.lower():
        return current
    return nxt


def select_best(candidates: Iterable[Optional[Candidate]]) -> Optional[Candidate]:
    best = None
    for candidate in candidates:
        best = pick_better(best, candidate)
    return best


class CategorizationService:
    """Suggests categories from keyword rules, user history and amount heuristics."""

    def __init__(self, db: Session, cache: Optional[TTLCache] = None):
        self.db = db
        self.rules = RuleRepository(db)
        self.categories = CategoryRepository(db)
        self.feedback = FeedbackRepository(db)
        self.cache = cache if cache is not None else get_personalization_cache()

    def suggest_category(
        self,
        description: Optional[str],
        amount: Optional[Union[Decimal, float, int]] = None,
        transaction_type: Optional[Union[TransactionType, str]] = None,
        user_id: Optional[str] = None,
    ) -> Optional[CategorySuggestion]:
        """
        Suggest a category for a transaction.

        Returns None when there is no transaction type or no candidate clears
        the minimum confidence.
        """
        if transaction_type is None:
            return None
        transaction_type = TransactionType(transaction_type)

        best = select_best(self._candidates(description, amount, transaction_type, user_id))

        if best is None or best.confidence < MIN_CONFIDENCE_THRESHOLD:
            return None

        logger.debug(
            "Suggested %s (%.2f) for type=%s user=%s",
            best.category_name, best.confidence, transaction_type.value, user_id
        )
        return CategorySuggestion(
            category_id=best.category_id,
            category_name=best.category_name,
            confidence=best.confidence,
        )

    def _candidates(self, description, amount, transaction_type, user_id):
        yield self._personalized_candidate(description, user_id)

        normalized = (description or "").strip()
        if normalized:
            normalized_lower = normalized.lower()
            for rule in self.rules.find_by_transaction_type(transaction_type):
                yield self._rule_candidate(rule, description, normalized_lower)

        yield self._amount_candidate(amount, transaction_type)

    def _rule_candidate(
        self, rule: CategorizationRule, description: str, normalized_lower: str
    ) -> Optional[Candidate]:
        if rule.keyword is None or not rule.keyword.strip() or rule.category is None:
            return None

        keyword = rule.keyword.strip().lower()

        if contains_whole_word(description, keyword):
            return Candidate.of(rule.category, EXACT_MATCH_CONFIDENCE)
        if keyword in normalized_lower:
            return Candidate.of(rule.category, PARTIAL_MATCH_CONFIDENCE)
        return None

    def _amount_candidate(self, amount, transaction_type: TransactionType) -> Optional[Candidate]:
        if amount is None:
            return None
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))

        large_names, small_names = AMOUNT_HEURISTICS[transaction_type]
        if amount > LARGE_TRANSACTION_THRESHOLD:
            names = large_names
        elif amount < SMALL_TRANSACTION_THRESHOLD:
            names = small_names
        else:
            return None

        for name in names:
            category = self.categories.find_first_by_name_ignore_case(name)
            if category is not None:
                return Candidate.of(category, AMOUNT_HEURISTIC_CONFIDENCE)
        return None

    def _personalized_candidate(
        self, description: Optional[str], user_id: Optional[str]
    ) -> Optional[Candidate]:
        if user_id is None:
            return None
        token = extract_token(description)
        if not token:
            return None

        category = self.get_personalized_category(user_id, token)
        if category is None:
            return None
        category_id, category_name = category
        return Candidate(category_id, category_name, PERSONALIZED_CONFIDENCE)

    def get_personalized_category(self, user_id: str, token: str) -> Optional[Tuple[str, str]]:
        """
        The user's most-corrected category for the token, as (id, name).

        Hits are cached per (user, token); misses always go to the store.
        """
        key = (str(user_id), token)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        ranked = self.feedback.find_top_categories_for_user_and_token(user_id, token)
        if not ranked:
            return None
        category, correction_count = ranked[0]
        if correction_count < PERSONALIZATION_THRESHOLD:
            return None

        result = (category.id, category.name)
        self.cache.set(key, result)
        return result
