"""Group membership entries as registered users or email-only invitees."""

from dataclasses import dataclass
from typing import Optional, Union

import models


@dataclass(frozen=True)
class Registered:
    """A member with an account."""
    user_id: int
    email: str
    role: str

    status = "registered"


@dataclass(frozen=True)
class Invited:
    """A member invited by email who has not signed up yet."""
    email: str
    role: str

    status = "invited"


Member = Union[Registered, Invited]


def resolve_member(member: models.GroupMember) -> Member:
    role = member.role or "member"
    if member.user_id is None:
        return Invited(email=member.email, role=role)
    return Registered(user_id=member.user_id, email=member.email, role=role)


def resolve_members(group: models.Group) -> list[Member]:
    return [resolve_member(m) for m in (group.members or [])]


def registered_user_ids(group: models.Group) -> list[int]:
    return [m.user_id for m in resolve_members(group) if isinstance(m, Registered)]


def is_member(group: Optional[models.Group], user_id: int) -> bool:
    """Only registered members can see a group; invitees match nobody."""
    if group is None:
        return False
    return user_id in registered_user_ids(group)
