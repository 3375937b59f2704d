from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Literal, Optional

class CamelModel(BaseModel):
    """Responses are serialized with camelCase keys for the web client."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class CounterpartyBalance(CamelModel):
    """What one counterparty owes the current user, or is owed by them."""
    counterparty_id: int
    name: str
    image_url: Optional[str] = None
    amount: int  # Always positive in balance summaries; signed in group member balances

class OweDetails(CamelModel):
    you_owe: list[CounterpartyBalance] = []
    you_are_owed_by: list[CounterpartyBalance] = []

class BalanceSummary(CamelModel):
    you_owe: int = 0
    you_are_owed: int = 0
    total_balance: int = 0
    owe_details: OweDetails = Field(default_factory=OweDetails)

class GroupBalance(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    member_count: int
    balance: int  # Positive means you are owed overall, negative means you owe

class MonthlySpending(CamelModel):
    month: int  # Epoch milliseconds of the first instant of the month
    total: int

class ContactUser(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    image_url: Optional[str] = None
    type: Literal["user"] = "user"

class ContactGroup(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    member_count: int
    type: Literal["group"] = "group"

class Contacts(CamelModel):
    users: list[ContactUser] = []
    groups: list[ContactGroup] = []

class GroupMember(CamelModel):
    user_id: Optional[int] = None
    email: str
    role: str
    joined_at: Optional[int] = None
    status: Literal["registered", "invited"]

class Group(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    created_by_id: Optional[int] = None
    created_at: Optional[int] = None
    members: list[GroupMember] = []

class ExpenseSplit(CamelModel):
    user_id: int
    amount: int
    paid: bool = False

class Expense(CamelModel):
    id: int
    description: Optional[str] = None
    amount: int
    category: Optional[str] = None
    date: Optional[int] = None
    payer_id: int
    split_type: Optional[str] = None
    group_id: Optional[int] = None
    created_by_id: Optional[int] = None
    splits: list[ExpenseSplit] = []

class Settlement(CamelModel):
    id: int
    amount: int
    note: Optional[str] = None
    date: Optional[int] = None
    payer_id: int
    receiver_id: int
    group_id: Optional[int] = None
    related_expense_ids: list[int] = []
    created_by_id: Optional[int] = None

class GroupLedger(CamelModel):
    group: Group
    expenses: list[Expense]
    settlements: list[Settlement]
