"""Contact and group discovery for the current user. No balance math here."""

from typing import Optional

import models
import schemas
from utils.balances import get_personal_expenses
from utils.boundary import read_operation
from utils.store import LedgerStore, GroupFilter


def collect_counterparty_ids(expenses, user_id: int) -> set[int]:
    """Payers and split participants across the expenses, minus the user."""
    ids = set()
    for expense in expenses:
        ids.add(expense.payer_id)
        ids.update(s.user_id for s in (expense.splits or []))
    ids.discard(user_id)
    ids.discard(None)
    return ids


def _no_contacts(*args, **kwargs) -> schemas.Contacts:
    return schemas.Contacts()


@read_operation(default=_no_contacts)
def get_contacts(store: LedgerStore, subject: Optional[models.User]) -> schemas.Contacts:
    """
    People the subject shares 1-to-1 expenses with, plus the subject's groups.

    Users that no longer resolve are left out.
    """
    expenses = get_personal_expenses(store, subject.id)
    users = store.get_users(collect_counterparty_ids(expenses, subject.id))

    contact_users = [
        schemas.ContactUser(
            id=u.id,
            name=u.name,
            email=u.email,
            image_url=u.image_url
        )
        for u in sorted(users.values(), key=lambda u: ((u.name or "").lower(), u.id))
    ]

    contact_groups = [
        schemas.ContactGroup(
            id=g.id,
            name=g.name,
            description=g.description,
            member_count=len(g.members)
        )
        for g in store.list_groups(GroupFilter(member_user_id=subject.id))
    ]

    return schemas.Contacts(users=contact_users, groups=contact_groups)
