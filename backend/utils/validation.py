"""Validation utilities for group access control."""

import models
from exceptions import AuthorizationError, NotFoundError
from utils.membership import is_member
from utils.store import LedgerStore


def get_group_or_404(store: LedgerStore, group_id: int) -> models.Group:
    """Get a group by ID or raise NotFoundError if it does not exist."""
    group = store.get_group(group_id)
    if not group:
        raise NotFoundError("Group", group_id)
    return group


def verify_group_membership(group: models.Group, user_id: int) -> None:
    """Verify that a user is a registered member of a group, raise AuthorizationError if not."""
    if not is_member(group, user_id):
        raise AuthorizationError()
