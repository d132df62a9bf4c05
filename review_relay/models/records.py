"""SQLAlchemy models for processed pull requests and the reviewer identity map."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class ProcessedPullRequest(Base):
    """
    Marks a pull request as already notified.

    A row is written once the chat notification went out and is never
    updated afterwards. Its existence for a ``(repository, pr_id)`` pair is
    the only signal used to suppress repeat notifications.
    """

    __tablename__ = "processed_pull_requests"
    __table_args__ = (
        UniqueConstraint("repository", "pr_id", name="uq_processed_repository_pr"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Pull request identity
    repository: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True, comment="e.g., 'owner/repo'"
    )
    pr_id: Mapped[int] = mapped_column(
        BigInteger, nullable=False, comment="Pull request number"
    )

    # Snapshot of what was announced
    pr_url: Mapped[str] = mapped_column(Text, nullable=False)
    pr_title: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="'feature', 'release', 'hotfix' or NULL for legacy requests",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the notification was sent",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<ProcessedPullRequest(id={self.id}, "
            f"repo={self.repository}, "
            f"pr={self.pr_id}, "
            f"category={self.category})>"
        )


class UserIdentity(Base):
    """
    Maps a code-hosting username to a chat member id.

    Rows are maintained outside the relay; the relay only reads them.
    """

    __tablename__ = "user_identities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    github_username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    slack_member_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, comment="Chat handle used for mentions"
    )

    def __repr__(self) -> str:
        return (
            f"<UserIdentity(github={self.github_username}, "
            f"slack={self.slack_member_id})>"
        )
