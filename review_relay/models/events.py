"""Inbound review request payloads and their validation results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["feature", "release", "hotfix"]

# Pull request numbers are stored as signed 64-bit integers
PR_ID_MIN = -(2**63)
PR_ID_MAX = 2**63 - 1


class ReviewRequestEvent(BaseModel):
    """A request to notify reviewers about a pull request.

    Validation is type-only: empty strings and duplicate reviewers are
    accepted, but a number is never a string and a boolean is never an
    integer. The only range check is that ``pr_id`` fits the 64-bit
    column it is stored in.
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    reviewers: list[str]
    repository: str
    pr_id: int = Field(ge=PR_ID_MIN, le=PR_ID_MAX)
    pr_url: str
    pr_title: str
    category: Category | None = None

    @property
    def key(self) -> str:
        """Readable identifier used in log lines."""
        return f"{self.repository}#{self.pr_id}"


class ValidationResult(BaseModel):
    """Outcome of validating a request body.

    Holds either the parsed event or the list of violations found.
    """

    event: ReviewRequestEvent | None = None
    violations: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.event is not None and not self.violations
