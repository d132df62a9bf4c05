"""Logging and observability setup using Pydantic Logfire."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from review_relay.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(pr_key)s] %(message)s"

# "owner/repo#number" of the review request being relayed, "-" outside one
pr_key_var: ContextVar[str] = ContextVar("pr_key", default="-")


class PullRequestKeyFilter(logging.Filter):
    """Stamp each record with the pull request currently being relayed."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.pr_key = pr_key_var.get()
        return True


@contextmanager
def pull_request_context(pr_key: str) -> Iterator[None]:
    """Tag log records emitted inside the block with ``pr_key``."""
    token = pr_key_var.set(pr_key)
    try:
        yield
    finally:
        pr_key_var.reset(token)


def setup_logging() -> None:
    """Configure application logging.

    Sets up logging with the level from settings and a single stdout handler
    whose lines carry the pull request key of the request being relayed.
    Reduces noise from verbose third-party libraries.
    """
    log_level = getattr(logging, settings.log_level)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,  # Reconfigure if already setup
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(PullRequestKeyFilter())

    # httpx logs every request at INFO, including the webhook URL
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def setup_observability() -> None:
    """Setup logging and, when a token is configured, Logfire tracing.

    FastAPI itself is instrumented in ``review_relay.main`` once the app
    object exists.
    """
    setup_logging()

    logger = logging.getLogger(__name__)

    if settings.logfire_token:
        try:
            import logfire

            logfire.configure(token=settings.logfire_token)

            # Trace the outbound webhook calls
            logfire.instrument_httpx()

            logger.info(
                f"Logfire observability enabled for {settings.environment} environment"
            )

        except ImportError:
            logger.warning(
                "Logfire package not installed. Install with: pip install 'review-relay[logfire]'"
            )
        except Exception as e:
            logger.error(f"Failed to setup Logfire observability: {e}")
    else:
        logger.info("Logfire token not configured, skipping observability setup")
