"""
Read surface over the ledger tables.

Every list operation first tries an indexed SQL query. If that query cannot
run (index or column missing, table misconfigured, or indexed queries turned
off in config) the store falls back to reading the whole table and applying
the same filter in memory. Callers get identical rows either way.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import config
import models
from utils.membership import is_member

logger = logging.getLogger(__name__)


class _PersonalScope:
    def __repr__(self):
        return "PERSONAL"


# Filter value meaning "no group" (1-to-1 records)
PERSONAL = _PersonalScope()

GroupScope = Union[int, _PersonalScope, None]


class Unsupported(NamedTuple):
    """Returned by try_indexed_query when the indexed path is unavailable."""
    reason: str


def _group_clause(column, group_id: GroupScope):
    if group_id is PERSONAL:
        return column.is_(None)
    return column == group_id


def _group_matches(value: Optional[int], group_id: GroupScope) -> bool:
    if group_id is None:
        return True
    if group_id is PERSONAL:
        return value is None
    return value == group_id


@dataclass(frozen=True)
class ExpenseFilter:
    payer_id: Optional[int] = None
    exclude_payer_id: Optional[int] = None
    split_user_id: Optional[int] = None
    involving_user_id: Optional[int] = None  # payer or split participant
    group_id: GroupScope = None
    date_from: Optional[int] = None  # inclusive, epoch ms
    date_to: Optional[int] = None  # exclusive, epoch ms

    model = models.Expense

    def clauses(self) -> list:
        Expense, ExpenseSplit = models.Expense, models.ExpenseSplit
        clauses = []
        if self.payer_id is not None:
            clauses.append(Expense.payer_id == self.payer_id)
        if self.exclude_payer_id is not None:
            clauses.append(Expense.payer_id != self.exclude_payer_id)
        if self.split_user_id is not None:
            clauses.append(Expense.splits.any(ExpenseSplit.user_id == self.split_user_id))
        if self.involving_user_id is not None:
            clauses.append(or_(
                Expense.payer_id == self.involving_user_id,
                Expense.splits.any(ExpenseSplit.user_id == self.involving_user_id)
            ))
        if self.group_id is not None:
            clauses.append(_group_clause(Expense.group_id, self.group_id))
        if self.date_from is not None:
            clauses.append(Expense.date >= self.date_from)
        if self.date_to is not None:
            clauses.append(Expense.date < self.date_to)
        return clauses

    def matches(self, expense: models.Expense) -> bool:
        split_users = {s.user_id for s in (expense.splits or [])}
        if self.payer_id is not None and expense.payer_id != self.payer_id:
            return False
        if self.exclude_payer_id is not None and expense.payer_id == self.exclude_payer_id:
            return False
        if self.split_user_id is not None and self.split_user_id not in split_users:
            return False
        if self.involving_user_id is not None:
            if expense.payer_id != self.involving_user_id and self.involving_user_id not in split_users:
                return False
        if not _group_matches(expense.group_id, self.group_id):
            return False
        if self.date_from is not None and (expense.date is None or expense.date < self.date_from):
            return False
        if self.date_to is not None and (expense.date is None or expense.date >= self.date_to):
            return False
        return True


@dataclass(frozen=True)
class SettlementFilter:
    involving_user_id: Optional[int] = None  # payer or receiver
    group_id: GroupScope = None

    model = models.Settlement

    def clauses(self) -> list:
        Settlement = models.Settlement
        clauses = []
        if self.involving_user_id is not None:
            clauses.append(or_(
                Settlement.payer_id == self.involving_user_id,
                Settlement.receiver_id == self.involving_user_id
            ))
        if self.group_id is not None:
            clauses.append(_group_clause(Settlement.group_id, self.group_id))
        return clauses

    def matches(self, settlement: models.Settlement) -> bool:
        if self.involving_user_id is not None and self.involving_user_id not in (
            settlement.payer_id, settlement.receiver_id
        ):
            return False
        return _group_matches(settlement.group_id, self.group_id)


@dataclass(frozen=True)
class GroupFilter:
    member_user_id: Optional[int] = None

    model = models.Group

    def clauses(self) -> list:
        if self.member_user_id is None:
            return []
        return [models.Group.members.any(models.GroupMember.user_id == self.member_user_id)]

    def matches(self, group: models.Group) -> bool:
        if self.member_user_id is None:
            return True
        return is_member(group, self.member_user_id)


class LedgerStore:
    """Read-only access to users, groups, expenses and settlements."""

    def __init__(self, db: Session, use_indexes: Optional[bool] = None):
        self.db = db
        self.use_indexes = config.LEDGER_USE_INDEXES if use_indexes is None else use_indexes

    def try_indexed_query(self, query_filter) -> Union[list, Unsupported]:
        if not self.use_indexes:
            return Unsupported("indexed queries disabled")
        model = query_filter.model
        try:
            return self.db.query(model).filter(*query_filter.clauses()).order_by(model.id).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            return Unsupported(str(e))

    def scan(self, query_filter) -> list:
        model = query_filter.model
        rows = self.db.query(model).order_by(model.id).all()
        return [row for row in rows if query_filter.matches(row)]

    def _select(self, query_filter) -> list:
        rows = self.try_indexed_query(query_filter)
        if isinstance(rows, Unsupported):
            if self.use_indexes:
                logger.warning(
                    f"Indexed {query_filter.model.__tablename__} query failed ({rows.reason}); "
                    f"falling back to full scan"
                )
            return self.scan(query_filter)
        return rows

    def list_expenses(self, query_filter: ExpenseFilter) -> list[models.Expense]:
        return self._select(query_filter)

    def list_settlements(self, query_filter: SettlementFilter) -> list[models.Settlement]:
        return self._select(query_filter)

    def list_groups(self, query_filter: Optional[GroupFilter] = None) -> list[models.Group]:
        groups = self._select(query_filter or GroupFilter())
        return sorted(groups, key=lambda g: (g.created_at or 0, g.id))

    def get_group(self, group_id: int) -> Optional[models.Group]:
        return self.db.query(models.Group).filter(models.Group.id == group_id).first()

    def get_user(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def get_users(self, user_ids) -> dict[int, models.User]:
        """Batch fetch users by id; ids that no longer resolve are absent from the result."""
        ids = {uid for uid in user_ids if uid is not None}
        if not ids:
            return {}
        users = self.db.query(models.User).filter(models.User.id.in_(ids)).all()
        return {u.id: u for u in users}
