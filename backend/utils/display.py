"""
Display utilities for counterparty names
"""
import logging
from typing import Optional

import models

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"


def get_user_display_name(user: Optional[models.User]) -> str:
    """
    Get the display name for a user.
    Uses name if available, otherwise the email. Users that no longer
    resolve (deleted, stale reference) get a placeholder.
    """
    if not user:
        return UNKNOWN_NAME

    return user.name or user.email or UNKNOWN_NAME


def get_counterparty_profile(user_id: int, users: dict[int, models.User]) -> tuple[str, Optional[str]]:
    """
    Look up (name, image_url) for a counterparty in a batch-fetched user map.

    Args:
        user_id: The counterparty's user ID
        users: Mapping of user ID to User, as returned by LedgerStore.get_users

    Returns:
        Tuple of display name and image URL (None when unknown)
    """
    user = users.get(user_id)
    if user is None:
        logger.debug(f"User {user_id} no longer resolves; using placeholder name")
        return UNKNOWN_NAME, None
    return get_user_display_name(user), user.image_url
