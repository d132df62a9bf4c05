"""Review request relay pipeline.

Steps run strictly in order, each one gating the next:

    dedup check -> identity resolution -> compose -> dispatch -> record

Authentication and body validation happen in the route before an event
reaches this module. Any step failure raises a ``RelayError`` and ends the
request; nothing here retries.

The dedup check and the final insert are not atomic. Two identical events
arriving together can both pass the check and both be dispatched; the
unique constraint on ``(repository, pr_id)`` then fails the second insert
with a StoreWriteFailure.
"""

import logging

from fastapi import status
from pydantic import BaseModel
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from review_relay.database.store import RelayStore
from review_relay.models.events import ReviewRequestEvent
from review_relay.relay.composer import compose_message
from review_relay.relay.dispatcher import WebhookDispatcher
from review_relay.relay.errors import NoRecipients, StoreReadFailure, StoreWriteFailure
from review_relay.utils.logging import pull_request_context

logger = logging.getLogger(__name__)


class RelayResult(BaseModel):
    """Successful terminal outcome of one request."""

    status_code: int
    message: str


ALREADY_PROCESSED = RelayResult(
    status_code=status.HTTP_200_OK, message="Pull request already processed"
)
NOTIFIED = RelayResult(
    status_code=status.HTTP_201_CREATED, message="Notification sent"
)


def is_already_processed(store: RelayStore, event: ReviewRequestEvent) -> bool:
    """
    Check whether a notification was already sent for this pull request.

    Raises:
        StoreReadFailure: If the lookup fails for any reason other than no rows
    """
    try:
        store.get_processed(event.repository, event.pr_id)
    except NoResultFound:
        return False
    except (SQLAlchemyError, OverflowError) as exc:
        logger.exception(f"Dedup lookup failed for {event.key}")
        raise StoreReadFailure() from exc
    return True


def resolve_chat_handles(store: RelayStore, reviewers: list[str]) -> list[str]:
    """
    Map reviewer usernames to chat member ids.

    Reviewers without a mapped chat id are dropped. The result follows the
    order rows come back from the store, not the order of ``reviewers``.

    Raises:
        StoreReadFailure: If the identity lookup fails
        NoRecipients: If no reviewer has a chat id
    """
    try:
        identities = store.find_identities(reviewers)
    except SQLAlchemyError as exc:
        logger.exception("Identity lookup failed")
        raise StoreReadFailure() from exc

    handles = [i.slack_member_id for i in identities if i.slack_member_id]
    if not handles:
        logger.info(f"None of the reviewers {reviewers} map to a chat user")
        raise NoRecipients()
    return handles


def record_notification(store: RelayStore, event: ReviewRequestEvent) -> None:
    """
    Persist the processed record after a successful dispatch.

    Raises:
        StoreWriteFailure: If the insert fails; the message is already sent
    """
    try:
        store.record_processed(event)
    except (SQLAlchemyError, OverflowError) as exc:
        logger.exception(
            f"Notification for {event.key} was sent but could not be recorded"
        )
        raise StoreWriteFailure() from exc


async def handle_review_request(
    event: ReviewRequestEvent,
    store: RelayStore,
    dispatcher: WebhookDispatcher,
) -> RelayResult:
    """
    Run a validated event through the relay.

    Args:
        event: Validated review request
        store: Persistence for processed records and identities
        dispatcher: Chat webhook client

    Returns:
        ALREADY_PROCESSED when the pull request was notified before,
        NOTIFIED after sending and recording a new notification

    Raises:
        RelayError: Any failing step ends the request with its error
    """
    with pull_request_context(event.key):
        logger.info(f"Received review request for {event.key}")

        if is_already_processed(store, event):
            logger.info(f"Skipping {event.key}: already processed")
            return ALREADY_PROCESSED

        handles = resolve_chat_handles(store, event.reviewers)

        payload = compose_message(
            handles,
            repository=event.repository,
            pr_title=event.pr_title,
            pr_url=event.pr_url,
            category=event.category,
        )

        await dispatcher.send(payload)
        logger.info(f"Notified {len(handles)} reviewer(s) about {event.key}")

        record_notification(store, event)
        return NOTIFIED
