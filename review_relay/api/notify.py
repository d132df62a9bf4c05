"""Inbound review request endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from review_relay.config.settings import Settings, settings
from review_relay.database.db import get_db
from review_relay.database.store import RelayStore
from review_relay.relay.dispatcher import WebhookDispatcher
from review_relay.relay.errors import InputInvalid, RelayError
from review_relay.relay.pipeline import handle_review_request
from review_relay.relay.validation import check_credential, parse_event

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["relay"])

MAINTENANCE_MESSAGE = "Currently under maintenance"


def get_settings() -> Settings:
    """FastAPI dependency returning the active settings."""
    return settings


def get_store(db: Session = Depends(get_db)) -> RelayStore:
    """FastAPI dependency wrapping the request's session in a RelayStore."""
    return RelayStore(db)


def get_dispatcher(config: Settings = Depends(get_settings)) -> WebhookDispatcher:
    """FastAPI dependency building the chat webhook client."""
    return WebhookDispatcher(
        config.slack_webhook_url, timeout=config.webhook_timeout_seconds
    )


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise InputInvalid(["body: Invalid JSON"]) from exc


@router.post("/slack")
async def relay_review_request(
    request: Request,
    config: Settings = Depends(get_settings),
    store: RelayStore = Depends(get_store),
    dispatcher: WebhookDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """
    Notify the requested reviewers of a pull request in chat.

    Returns:
        201 when a notification was sent and recorded, 200 when the pull
        request was already processed (or the relay is in maintenance)

    Error responses:
        403 bad credential, 400 invalid body or no mapped reviewers,
        500 database or webhook failure
    """
    if config.maintenance_mode:
        logger.info("Maintenance mode enabled, ignoring review request")
        return JSONResponse(
            status_code=status.HTTP_200_OK, content={"message": MAINTENANCE_MESSAGE}
        )

    try:
        check_credential(
            request.headers.get(config.relay_secret_header), config.relay_secret
        )
        body = await _read_json(request)
        event = parse_event(body, require_category=config.require_category)
        result = await handle_review_request(event, store, dispatcher)
    except RelayError as err:
        return JSONResponse(status_code=err.status_code, content=err.to_content())

    return JSONResponse(
        status_code=result.status_code, content={"message": result.message}
    )
