"""Persistence operations used by the relay pipeline."""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from review_relay.models.events import ReviewRequestEvent
from review_relay.models.records import ProcessedPullRequest, UserIdentity

logger = logging.getLogger(__name__)


class RelayStore:
    """Reads and writes the relay's two tables through one session.

    Errors from SQLAlchemy are propagated untouched; the pipeline decides
    which of them mean "no rows" and which are failures.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_processed(self, repository: str, pr_id: int) -> ProcessedPullRequest:
        """
        Fetch the processed record for a pull request.

        Raises:
            sqlalchemy.exc.NoResultFound: If the pull request was never notified
            sqlalchemy.exc.SQLAlchemyError: On any other query failure
        """
        stmt = select(ProcessedPullRequest).where(
            ProcessedPullRequest.repository == repository,
            ProcessedPullRequest.pr_id == pr_id,
        )
        return self.session.execute(stmt).scalar_one()

    def find_identities(self, usernames: Sequence[str]) -> list[UserIdentity]:
        """Return identity rows for the given usernames in the store's order."""
        stmt = select(UserIdentity).where(
            UserIdentity.github_username.in_(list(usernames))
        )
        return list(self.session.execute(stmt).scalars())

    def record_processed(self, event: ReviewRequestEvent) -> ProcessedPullRequest:
        """Insert and commit the processed record for ``event``."""
        record = ProcessedPullRequest(
            repository=event.repository,
            pr_id=event.pr_id,
            pr_url=event.pr_url,
            pr_title=event.pr_title,
            category=event.category,
        )
        self.session.add(record)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.debug(f"Recorded {record!r}")
        return record
