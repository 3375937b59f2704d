"""Balance aggregation for personal (1-to-1) and group scopes."""

import logging
from typing import Optional

import models
import schemas
from utils.boundary import read_operation
from utils.display import get_counterparty_profile
from utils.netting import net, net_total
from utils.store import LedgerStore, ExpenseFilter, SettlementFilter, GroupFilter, PERSONAL

logger = logging.getLogger(__name__)


def check_split_integrity(expenses) -> None:
    """Log expenses whose splits do not add up to the expense amount. Splits are used as recorded."""
    for expense in expenses:
        split_total = sum(s.amount for s in (expense.splits or []))
        if expense.splits and split_total != expense.amount:
            logger.warning(
                f"Expense {expense.id} splits total {split_total} but amount is {expense.amount}"
            )


def _dedupe(expenses) -> list:
    seen = set()
    result = []
    for expense in expenses:
        if expense.id in seen:
            continue
        seen.add(expense.id)
        result.append(expense)
    return result


def get_personal_expenses(store: LedgerStore, user_id: int) -> list[models.Expense]:
    """Ungrouped expenses the user paid for or has a split in."""
    paid_by_me = store.list_expenses(ExpenseFilter(payer_id=user_id, group_id=PERSONAL))
    paid_by_others = store.list_expenses(
        ExpenseFilter(exclude_payer_id=user_id, split_user_id=user_id, group_id=PERSONAL)
    )
    return _dedupe(paid_by_me + paid_by_others)


def _empty_summary(*args, **kwargs) -> schemas.BalanceSummary:
    return schemas.BalanceSummary()


@read_operation(default=_empty_summary)
def get_balances(store: LedgerStore, subject: Optional[models.User]) -> schemas.BalanceSummary:
    """
    Personal balances for the subject: totals plus who owes whom, largest first.

    Only records without a group are considered; group balances are reported
    per group by get_group_balances.
    """
    expenses = get_personal_expenses(store, subject.id)
    settlements = store.list_settlements(
        SettlementFilter(involving_user_id=subject.id, group_id=PERSONAL)
    )
    check_split_integrity(expenses)

    nets = net(subject.id, expenses, settlements)
    users = store.get_users(nets.keys())

    you_owe_list = []
    you_are_owed_by_list = []
    for uid, entry in nets.items():
        name, image_url = get_counterparty_profile(uid, users)
        item = schemas.CounterpartyBalance(
            counterparty_id=uid,
            name=name,
            image_url=image_url,
            amount=abs(entry.net)
        )
        if entry.net > 0:
            you_are_owed_by_list.append(item)
        else:
            you_owe_list.append(item)

    you_owe_list.sort(key=lambda b: (-b.amount, b.counterparty_id))
    you_are_owed_by_list.sort(key=lambda b: (-b.amount, b.counterparty_id))

    you_owe = sum(b.amount for b in you_owe_list)
    you_are_owed = sum(b.amount for b in you_are_owed_by_list)

    return schemas.BalanceSummary(
        you_owe=you_owe,
        you_are_owed=you_are_owed,
        total_balance=you_are_owed - you_owe,
        owe_details=schemas.OweDetails(
            you_owe=you_owe_list,
            you_are_owed_by=you_are_owed_by_list
        )
    )


def calculate_group_balance(store: LedgerStore, group_id: int, user_id: int) -> int:
    """The user's overall balance within one group (positive means they are owed)."""
    expenses = store.list_expenses(ExpenseFilter(group_id=group_id))
    settlements = store.list_settlements(SettlementFilter(group_id=group_id, involving_user_id=user_id))
    check_split_integrity(expenses)
    return net_total(user_id, expenses, settlements)


def _no_groups(*args, **kwargs) -> list:
    return []


@read_operation(default=_no_groups)
def get_group_balances(store: LedgerStore, subject: Optional[models.User]) -> list[schemas.GroupBalance]:
    """Every group the subject belongs to, with the subject's balance in it."""
    result = []
    for group in store.list_groups(GroupFilter(member_user_id=subject.id)):
        result.append(schemas.GroupBalance(
            id=group.id,
            name=group.name,
            description=group.description,
            member_count=len(group.members),
            balance=calculate_group_balance(store, group.id, subject.id)
        ))
    return result


def calculate_member_balances(
    store: LedgerStore,
    group: models.Group,
    user_id: int
) -> list[schemas.CounterpartyBalance]:
    """
    Per-counterparty balances for the user inside one group.

    Amounts are signed: positive means the counterparty owes the user.
    Sorted by absolute amount, largest first.
    """
    expenses = store.list_expenses(ExpenseFilter(group_id=group.id))
    settlements = store.list_settlements(SettlementFilter(group_id=group.id, involving_user_id=user_id))
    nets = net(user_id, expenses, settlements)

    users = store.get_users(nets.keys())
    result = []
    for uid, entry in nets.items():
        name, image_url = get_counterparty_profile(uid, users)
        result.append(schemas.CounterpartyBalance(
            counterparty_id=uid,
            name=name,
            image_url=image_url,
            amount=entry.net
        ))
    result.sort(key=lambda b: (-abs(b.amount), b.counterparty_id))
    return result
