"""Review request relay: validation, lookups, composition and dispatch."""

from .composer import compose_message
from .dispatcher import WebhookDispatcher
from .errors import (
    AuthFailure,
    DispatchFailure,
    InputInvalid,
    NoRecipients,
    RelayError,
    StoreReadFailure,
    StoreWriteFailure,
)
from .pipeline import RelayResult, handle_review_request
from .validation import check_credential, parse_event, validate_event

__all__ = [
    "AuthFailure",
    "DispatchFailure",
    "InputInvalid",
    "NoRecipients",
    "RelayError",
    "RelayResult",
    "StoreReadFailure",
    "StoreWriteFailure",
    "WebhookDispatcher",
    "check_credential",
    "compose_message",
    "handle_review_request",
    "parse_event",
    "validate_event",
]
