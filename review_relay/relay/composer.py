"""Chat message composition.

Everything here is pure: the same inputs always produce the same payload.
"""

from collections.abc import Sequence
from typing import Any, NamedTuple

from review_relay.models.events import Category


class Framing(NamedTuple):
    """Tone of a notification for one category."""

    color: str
    intro: str
    body: str
    closing: str
    title_label: str


FRAMINGS: dict[Category, Framing] = {
    "feature": Framing(
        color="#2eb886",
        intro="Hey {mentions}! :wave:",
        body="You've been asked to review a pull request in *{repository}*:",
        closing="Thanks for taking a look!",
        title_label="Feature review",
    ),
    "release": Framing(
        color="#daa038",
        intro="Heads up {mentions}! :warning:",
        body="A release is waiting on your review in *{repository}*:",
        closing="Please double-check everything before it ships.",
        title_label="Release review",
    ),
    "hotfix": Framing(
        color="#a30200",
        intro="Urgent {mentions}! :rotating_light:",
        body="A hotfix needs your review right away in *{repository}*:",
        closing="Please drop what you're doing and take a look.",
        title_label="HOTFIX review",
    ),
}

# Requests without a category get the feature wording as plain text
DEFAULT_CATEGORY: Category = "feature"


def format_mentions(handles: Sequence[str]) -> str:
    return " ".join(f"<@{handle}>" for handle in handles)


def _compose_text(
    framing: Framing, mentions: str, repository: str, pr_title: str, pr_url: str
) -> str:
    return "\n".join(
        [
            f"{framing.intro.format(mentions=mentions)} "
            f"{framing.body.format(repository=repository)}",
            f"<{pr_url}|{pr_title}>",
            framing.closing,
        ]
    )


def compose_message(
    handles: Sequence[str],
    repository: str,
    pr_title: str,
    pr_url: str,
    category: Category | None = None,
) -> dict[str, Any]:
    """
    Build the webhook payload announcing a review request.

    Args:
        handles: Chat member ids to mention, in mention order
        repository: Repository the pull request belongs to
        pr_title: Pull request title
        pr_url: Link to the pull request
        category: Change category; None selects the legacy text message

    Returns:
        ``{"text": ...}`` for legacy requests, otherwise
        ``{"attachments": [{"color", "title", "text"}]}``
    """
    mentions = format_mentions(handles)

    if category is None:
        framing = FRAMINGS[DEFAULT_CATEGORY]
        return {"text": _compose_text(framing, mentions, repository, pr_title, pr_url)}

    framing = FRAMINGS[category]
    return {
        "attachments": [
            {
                "color": framing.color,
                "title": f"{framing.title_label}: {pr_title}",
                "text": _compose_text(
                    framing, mentions, repository, pr_title, pr_url
                ),
            }
        ]
    }
