"""
Domain exceptions raised by the service layer.

API routes translate these into HTTP errors; background workers log them.
"""


class SmartBudgetError(Exception):
    """Base class for all domain errors."""


class ResourceNotFoundError(SmartBudgetError):
    """A referenced record does not exist."""

    resource = "Resource"

    def __init__(self, resource_id=None):
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found")


class UserNotFoundError(ResourceNotFoundError):
    resource = "User"


class CategoryNotFoundError(ResourceNotFoundError):
    resource = "Category"


class TransactionNotFoundError(ResourceNotFoundError):
    resource = "Transaction"


class RuleNotFoundError(ResourceNotFoundError):
    resource = "Rule"


class DuplicateCategoryError(SmartBudgetError):
    """A category with the same name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Category '{name}' already exists")
