"""Outbound delivery of notifications to the chat webhook."""

import logging
from typing import Any

import httpx

from review_relay.relay.errors import DispatchFailure

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """
    Posts JSON payloads to an incoming chat webhook.

    A single POST is made per notification. There is no retry: a failed
    delivery is reported to the caller and nothing is recorded, so the
    next identical event tries again.
    """

    def __init__(
        self,
        webhook_url: str | None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            webhook_url: Incoming webhook URL
            timeout: Seconds to wait for the webhook; None waits indefinitely
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.webhook_url = webhook_url
        self.timeout = httpx.Timeout(timeout)
        self.transport = transport

    async def send(self, payload: dict[str, Any]) -> None:
        """
        Deliver ``payload``.

        Raises:
            DispatchFailure: If the webhook is unconfigured, unreachable or
                answers with a non-2xx status
        """
        if not self.webhook_url:
            logger.error("Chat webhook URL not configured")
            raise DispatchFailure()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            logger.exception("Chat webhook request failed")
            raise DispatchFailure() from exc

        if not response.is_success:
            logger.error(
                f"Chat webhook rejected notification: {response.status_code} {response.text[:200]}"
            )
            raise DispatchFailure()

        logger.debug(f"Chat webhook accepted notification ({response.status_code})")
