"""Data models for the review relay."""

from .events import Category, ReviewRequestEvent, ValidationResult
from .records import Base, ProcessedPullRequest, UserIdentity

__all__ = [
    "Base",
    "Category",
    "ProcessedPullRequest",
    "ReviewRequestEvent",
    "UserIdentity",
    "ValidationResult",
]
