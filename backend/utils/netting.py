"""Counterparty netting: who owes the subject, and whom the subject owes."""

from dataclasses import dataclass
from typing import Dict, Iterable


@dataclass
class NetEntry:
    """Running totals between the subject and one counterparty."""
    owed_to_subject: int = 0
    owed_by_subject: int = 0

    @property
    def net(self) -> int:
        """Positive: counterparty owes the subject. Negative: subject owes the counterparty."""
        return self.owed_to_subject - self.owed_by_subject


def net(subject_id: int, expenses: Iterable, settlements: Iterable = ()) -> Dict[int, NetEntry]:
    """
    Net the subject's obligations against every counterparty.

    Args:
        subject_id: The user whose point of view the balances are computed from
        expenses: Expenses with ``payer_id`` and ``splits`` (``user_id``, ``amount``, ``paid``)
        settlements: Settlements with ``payer_id``, ``receiver_id`` and ``amount``

    Returns:
        Dictionary mapping counterparty id to its NetEntry. Counterparties whose
        net comes out to zero are dropped. No ordering is implied.
    """
    balances: Dict[int, NetEntry] = {}

    for expense in expenses:
        splits = expense.splits or []
        if expense.payer_id == subject_id:
            # I paid - everyone else's unpaid split is owed to me
            for split in splits:
                if split.user_id == subject_id or split.paid:
                    continue
                balances.setdefault(split.user_id, NetEntry()).owed_to_subject += split.amount
        else:
            my_split = next((s for s in splits if s.user_id == subject_id), None)
            if my_split is not None and not my_split.paid:
                balances.setdefault(expense.payer_id, NetEntry()).owed_by_subject += my_split.amount

    # Buckets may go negative on over-payment; that is kept, not clamped
    for settlement in settlements:
        if settlement.payer_id == subject_id:
            balances.setdefault(settlement.receiver_id, NetEntry()).owed_by_subject -= settlement.amount
        elif settlement.receiver_id == subject_id:
            balances.setdefault(settlement.payer_id, NetEntry()).owed_to_subject -= settlement.amount

    return {uid: entry for uid, entry in balances.items() if entry.net != 0}


def net_total(subject_id: int, expenses: Iterable, settlements: Iterable = ()) -> int:
    """Collapse the per-counterparty nets into one signed balance for the subject."""
    return sum(entry.net for entry in net(subject_id, expenses, settlements).values())
