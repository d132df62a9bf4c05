"""Maintenance helpers for the reviewer identity map.

The relay never writes identities; these helpers back the
``scripts/load_identities.py`` admin tool.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from sqlalchemy import select
from sqlalchemy.orm import Session

from review_relay.models.records import UserIdentity

logger = logging.getLogger(__name__)


def load_identity_map(path: Path) -> dict[str, str | None]:
    """
    Read a YAML mapping of code-hosting usernames to chat member ids.

    Example file:
        octocat: U024BE7LH
        hubot: null   # known user without a chat account

    Raises:
        ValueError: If the file is not a mapping of strings
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of username: member id")

    mapping: dict[str, str | None] = {}
    for username, member_id in data.items():
        if not isinstance(username, str) or not (
            member_id is None or isinstance(member_id, str)
        ):
            raise ValueError(f"Invalid entry in {path}: {username!r}: {member_id!r}")
        mapping[username] = member_id
    return mapping


def sync_identities(
    session: Session, mapping: Mapping[str, str | None]
) -> tuple[int, int]:
    """
    Upsert identity rows so they match ``mapping``.

    Rows for usernames missing from ``mapping`` are left alone.

    Returns:
        (created, updated) counts
    """
    existing = {
        identity.github_username: identity
        for identity in session.execute(
            select(UserIdentity).where(UserIdentity.github_username.in_(list(mapping)))
        ).scalars()
    }

    created = updated = 0
    for username, member_id in mapping.items():
        identity = existing.get(username)
        if identity is None:
            session.add(
                UserIdentity(github_username=username, slack_member_id=member_id)
            )
            created += 1
        elif identity.slack_member_id != member_id:
            identity.slack_member_id = member_id
            updated += 1

    session.commit()
    logger.info(f"Identity map synced: {created} created, {updated} updated")
    return created, updated
