#!/usr/bin/env python3
"""
Print the balance report for one user straight from the database
"""
import argparse

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import models
from utils.balances import get_balances, get_group_balances
from utils.statistics import get_total_spent, get_monthly_spending, current_year, MIN_YEAR, MAX_YEAR
from utils.store import LedgerStore


def format_amount(amount: int) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{abs(amount) / 100:.2f}"


def print_report(store: LedgerStore, user: models.User, year: int) -> None:
    summary = get_balances(store, user)
    print(f"Balances for {user.name or user.email} (User {user.id})")
    print(f"  You owe:      {format_amount(summary.you_owe)}")
    print(f"  You are owed: {format_amount(summary.you_are_owed)}")
    print(f"  Total:        {format_amount(summary.total_balance)}")

    for entry in summary.owe_details.you_owe:
        print(f"    you owe {entry.name} (User {entry.counterparty_id}): {format_amount(entry.amount)}")
    for entry in summary.owe_details.you_are_owed_by:
        print(f"    {entry.name} (User {entry.counterparty_id}) owes you: {format_amount(entry.amount)}")

    print("\nGroups:")
    for group in get_group_balances(store, user):
        print(f"  {group.name} ({group.member_count} members): {format_amount(group.balance)}")

    print(f"\nSpent in {year}: {format_amount(get_total_spent(store, user, year))}")
    for bucket in get_monthly_spending(store, user, year):
        if bucket.total:
            print(f"  month starting {bucket.month}: {format_amount(bucket.total)}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Show balances and spending for a user")
    parser.add_argument("email", help="Email of the user to report on")
    parser.add_argument("--db-path", default="db.sqlite3", help="Path to SQLite database file")
    parser.add_argument("--year", type=int, default=None, help="Year for spending totals (default: current)")
    parser.add_argument("--no-indexes", action="store_true", help="Read with full table scans")
    args = parser.parse_args(argv)
    if args.year is not None and not MIN_YEAR <= args.year <= MAX_YEAR:
        parser.error(f"--year must be between {MIN_YEAR} and {MAX_YEAR}")

    engine = create_engine(f"sqlite:///{args.db_path}")
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()
    try:
        user = db.query(models.User).filter(models.User.email == args.email).first()
        if not user:
            print(f"No user with email {args.email}")
            return 1
        store = LedgerStore(db, use_indexes=not args.no_indexes)
        print_report(store, user, args.year or current_year())
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
