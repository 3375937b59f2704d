import os

# Keep the app's own engine off disk; tests use their own engine below
os.environ.setdefault("DATABASE_PATH", ":memory:")

import pytest
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from main import app
from database import Base, get_db
from models import User, Group, GroupMember, Expense, ExpenseSplit, Settlement, SettlementExpense
from auth import create_access_token
from utils.store import LedgerStore

# Setup in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def ms(year, month=1, day=1):
    """Epoch milliseconds for midnight UTC on the given date."""
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp()) * 1000


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def client(db_session):
    """Create a FastAPI TestClient with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_db, None)

@pytest.fixture
def store(db_session):
    return LedgerStore(db_session, use_indexes=True)

@pytest.fixture
def make_user(db_session):
    def _make_user(name, email=None, image_url=None):
        user = User(
            name=name,
            email=email or f"{name.lower()}@example.com",
            image_url=image_url
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user

@pytest.fixture
def make_group(db_session):
    def _make_group(name, creator, members=(), invited=(), description=""):
        group = Group(
            name=name,
            description=description,
            created_by_id=creator.id,
            created_at=ms(2024)
        )
        entries = [(creator.id, creator.email, "admin")]
        entries += [(m.id, m.email, "member") for m in members]
        entries += [(None, email, "member") for email in invited]
        for position, (user_id, email, role) in enumerate(entries):
            group.members.append(GroupMember(
                user_id=user_id,
                email=email,
                role=role,
                joined_at=ms(2024),
                position=position
            ))
        db_session.add(group)
        db_session.commit()
        db_session.refresh(group)
        return group
    return _make_group

@pytest.fixture
def make_expense(db_session):
    def _make_expense(payer, amount, splits, group=None, date=None, description="Expense", category=None):
        """``splits`` is a list of (user, amount) or (user, amount, paid) tuples."""
        expense = Expense(
            description=description,
            amount=amount,
            category=category,
            date=date if date is not None else ms(2024, 6, 15),
            payer_id=payer.id,
            split_type="exact",
            group_id=group.id if group else None,
            created_by_id=payer.id
        )
        for split in splits:
            user, split_amount = split[0], split[1]
            paid = split[2] if len(split) > 2 else False
            expense.splits.append(ExpenseSplit(user_id=user.id, amount=split_amount, paid=paid))
        db_session.add(expense)
        db_session.commit()
        db_session.refresh(expense)
        return expense
    return _make_expense

@pytest.fixture
def make_settlement(db_session):
    def _make_settlement(payer, receiver, amount, group=None, related=(), note=None):
        settlement = Settlement(
            amount=amount,
            note=note,
            date=ms(2024, 7, 1),
            payer_id=payer.id,
            receiver_id=receiver.id,
            group_id=group.id if group else None,
            created_by_id=payer.id
        )
        for expense in related:
            settlement.related_expenses.append(SettlementExpense(expense_id=expense.id))
        db_session.add(settlement)
        db_session.commit()
        db_session.refresh(settlement)
        return settlement
    return _make_settlement

@pytest.fixture
def test_user(make_user):
    """Create a test user and return the user object."""
    return make_user("Test User", email="test@example.com")

@pytest.fixture
def auth_headers(test_user):
    """Return authorization headers for the test user."""
    access_token = create_access_token(data={"sub": test_user.email})
    return {"Authorization": f"Bearer {access_token}"}
