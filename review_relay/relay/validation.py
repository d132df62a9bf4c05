"""Credential and request body checks run before any side effect."""

import hmac
import logging
from typing import Any

from pydantic import ValidationError

from review_relay.models.events import ReviewRequestEvent, ValidationResult
from review_relay.relay.errors import AuthFailure, InputInvalid

logger = logging.getLogger(__name__)


def check_credential(provided: str | None, expected: str | None) -> None:
    """
    Compare the header credential with the configured secret.

    Args:
        provided: Value of the credential header, if any
        expected: Configured shared secret

    Raises:
        AuthFailure: If the header is missing, the secret is unset or they differ
    """
    if not expected:
        logger.error("Relay secret not configured, rejecting request")
        raise AuthFailure()
    if provided is None:
        logger.warning("Missing relay credential header")
        raise AuthFailure()
    # HTTP header values arrive decoded as latin-1, so encoding back to
    # latin-1 recovers the bytes on the wire. The secret is sent as UTF-8.
    try:
        received = provided.encode("latin-1")
    except UnicodeEncodeError:
        received = b""
    if not hmac.compare_digest(received, expected.encode("utf-8")):
        logger.warning("Invalid relay credential")
        raise AuthFailure()


def _format_error(error: Any) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "body"
    return f"{location}: {error['msg']}"


def validate_event(body: Any, require_category: bool = False) -> ValidationResult:
    """Check the shape of a parsed JSON body.

    Only types are checked. With ``require_category`` a missing or null
    category is reported as a violation as well.
    """
    try:
        event = ReviewRequestEvent.model_validate(body)
    except ValidationError as exc:
        return ValidationResult(violations=[_format_error(e) for e in exc.errors()])

    if require_category and event.category is None:
        return ValidationResult(violations=["category: Field required"])

    return ValidationResult(event=event)


def parse_event(body: Any, require_category: bool = False) -> ReviewRequestEvent:
    """Validate ``body`` and return the event, raising InputInvalid otherwise."""
    result = validate_event(body, require_category=require_category)
    if result.event is None or result.violations:
        logger.info(f"Rejected review request: {'; '.join(result.violations)}")
        raise InputInvalid(result.violations)
    return result.event
