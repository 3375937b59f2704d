from sqlalchemy import Column, Integer, BigInteger, String, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    email = Column(String, unique=True, index=True)
    image_url = Column(String, nullable=True)

class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String)
    description = Column(String, default="")
    created_by_id = Column(Integer)
    created_at = Column(BigInteger)  # Epoch milliseconds

    members = relationship(
        "GroupMember",
        order_by="GroupMember.position",
        lazy="selectin",
        cascade="all, delete-orphan"
    )

class GroupMember(Base):
    __tablename__ = "group_members"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), index=True)
    user_id = Column(Integer, nullable=True, index=True)  # NULL until the invitee signs up
    email = Column(String)
    role = Column(String, default="member")  # admin, member
    joined_at = Column(BigInteger)
    position = Column(Integer, default=0)  # Order within the group's member list

class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        Index("ix_expenses_payer_group", "payer_id", "group_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String)
    amount = Column(Integer)  # Stored in cents/smallest unit
    category = Column(String, nullable=True)
    date = Column(BigInteger, index=True)  # Epoch milliseconds
    payer_id = Column(Integer)
    split_type = Column(String, default="equal")  # equal, exact, percentage
    group_id = Column(Integer, nullable=True, index=True)
    created_by_id = Column(Integer)

    splits = relationship(
        "ExpenseSplit",
        order_by="ExpenseSplit.id",
        lazy="selectin",
        cascade="all, delete-orphan"
    )

class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id"), index=True)
    user_id = Column(Integer, index=True)
    amount = Column(Integer)  # The amount this user owes
    paid = Column(Boolean, default=False)

class Settlement(Base):
    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Integer)
    note = Column(String, nullable=True)
    date = Column(BigInteger)
    payer_id = Column(Integer, index=True)
    receiver_id = Column(Integer, index=True)
    group_id = Column(Integer, nullable=True, index=True)
    created_by_id = Column(Integer)

    related_expenses = relationship(
        "SettlementExpense",
        lazy="selectin",
        cascade="all, delete-orphan"
    )

    @property
    def related_expense_ids(self) -> list[int]:
        return [link.expense_id for link in self.related_expenses]

class SettlementExpense(Base):
    __tablename__ = "settlement_expenses"

    id = Column(Integer, primary_key=True, index=True)
    settlement_id = Column(Integer, ForeignKey("settlements.id"), index=True)
    expense_id = Column(Integer)
