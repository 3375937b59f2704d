"""Membership-scoped group reads. Access failures raise instead of returning defaults."""

from typing import Optional

import models
import schemas
from exceptions import UnauthenticatedError
from utils.balances import calculate_member_balances
from utils.boundary import read_operation
from utils.membership import resolve_member
from utils.store import LedgerStore, ExpenseFilter, SettlementFilter
from utils.validation import get_group_or_404, verify_group_membership


def _authorize(store: LedgerStore, subject: Optional[models.User], group_id: int) -> models.Group:
    if subject is None:
        raise UnauthenticatedError()
    group = get_group_or_404(store, group_id)
    verify_group_membership(group, subject.id)
    return group


def serialize_group(group: models.Group) -> schemas.Group:
    members = []
    for row in group.members:
        member = resolve_member(row)
        members.append(schemas.GroupMember(
            user_id=getattr(member, "user_id", None),
            email=member.email,
            role=member.role,
            joined_at=row.joined_at,
            status=member.status
        ))

    return schemas.Group(
        id=group.id,
        name=group.name,
        description=group.description,
        created_by_id=group.created_by_id,
        created_at=group.created_at,
        members=members
    )


def get_group_ledger(
    store: LedgerStore,
    subject: Optional[models.User],
    group_id: int
) -> schemas.GroupLedger:
    """
    The group with all of its expenses and settlements.

    Store faults propagate: an empty ledger would read as "nothing owed".

    Raises:
        UnauthenticatedError: No current user
        NotFoundError: The group does not exist
        AuthorizationError: The current user is not a member of the group
    """
    group = _authorize(store, subject, group_id)

    expenses = store.list_expenses(ExpenseFilter(group_id=group.id))
    settlements = store.list_settlements(SettlementFilter(group_id=group.id))

    return schemas.GroupLedger(
        group=serialize_group(group),
        expenses=[schemas.Expense.model_validate(e) for e in expenses],
        settlements=[schemas.Settlement.model_validate(s) for s in settlements]
    )


def _no_balances(*args, **kwargs) -> list:
    return []


@read_operation(default=_no_balances)
def _member_balances(store: LedgerStore, subject: models.User, group: models.Group) -> list[schemas.CounterpartyBalance]:
    return calculate_member_balances(store, group, subject.id)


def get_group_member_balances(
    store: LedgerStore,
    subject: Optional[models.User],
    group_id: int
) -> list[schemas.CounterpartyBalance]:
    """
    The current user's signed balance with each counterparty in the group.

    Authorization failures raise; anything that goes wrong while computing
    the balances yields an empty list.
    """
    group = _authorize(store, subject, group_id)
    return _member_balances(store, subject, group)
