import pytest
from unittest.mock import patch

from conftest import ms
from utils.statistics import (
    get_total_spent,
    get_monthly_spending,
    month_start_of,
    month_starts,
    normalize_year,
    year_bounds,
)
from check_balances import main as check_balances_main
from utils.store import LedgerStore


def test_year_bounds_are_half_open():
    start, end = year_bounds(2024)
    assert start == ms(2024)
    assert end == ms(2025)


def test_month_start_of():
    assert month_start_of(ms(2024, 3, 17) + 5000) == ms(2024, 3, 1)
    assert month_start_of(ms(2024, 12, 31)) == ms(2024, 12, 1)


def test_total_spent_counts_only_own_share(client, auth_headers, test_user, make_user, make_group, make_expense):
    bob = make_user("Bob")
    group = make_group("Trip", bob, members=[test_user])
    make_expense(test_user, 9000, [(test_user, 3000, True), (bob, 6000)], date=ms(2024, 2, 10))
    make_expense(bob, 1000, [(bob, 400), (test_user, 600)], group=group, date=ms(2024, 11, 3))
    # Paid for someone else entirely: not my spending
    make_expense(test_user, 500, [(bob, 500)], date=ms(2024, 5, 5))
    # Outside the year on both sides
    make_expense(test_user, 800, [(test_user, 800)], date=ms(2023, 12, 31))
    make_expense(test_user, 800, [(test_user, 800)], date=ms(2025, 1, 1))
    # Not involving me
    make_expense(bob, 700, [(bob, 700)], date=ms(2024, 4, 4))

    response = client.get("/spending/total", params={"year": 2024}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == 3600


def test_monthly_spending_has_twelve_sorted_buckets(store, test_user, make_user, make_expense):
    bob = make_user("Bob")
    make_expense(test_user, 200, [(test_user, 100), (bob, 100)], date=ms(2024, 1, 31))
    make_expense(bob, 300, [(test_user, 150), (bob, 150)], date=ms(2024, 1, 2))
    make_expense(bob, 900, [(test_user, 450), (bob, 450)], date=ms(2024, 8, 20))
    make_expense(test_user, 5000, [(test_user, 5000)], date=ms(2025, 8, 20))

    months = get_monthly_spending(store, test_user, 2024)

    assert len(months) == 12
    assert [m.month for m in months] == month_starts(2024)
    assert [m.month for m in months] == sorted(m.month for m in months)
    totals = {m.month: m.total for m in months}
    assert totals[ms(2024, 1)] == 250
    assert totals[ms(2024, 8)] == 450
    assert sum(totals.values()) == 700


def test_monthly_spending_endpoint(client, auth_headers, test_user, make_expense):
    make_expense(test_user, 1200, [(test_user, 1200)], date=ms(2024, 6, 1))

    response = client.get("/spending/monthly", params={"year": 2024}, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 12
    assert data[5] == {"month": ms(2024, 6), "total": 1200}
    assert all(entry["total"] == 0 for i, entry in enumerate(data) if i != 5)


def test_anonymous_statistics_defaults(client):
    assert client.get("/spending/total", params={"year": 2024}).json() == 0

    months = client.get("/spending/monthly", params={"year": 2024}).json()
    assert [m["month"] for m in months] == month_starts(2024)
    assert all(m["total"] == 0 for m in months)


def test_statistics_survive_store_failure(db_session, test_user):
    store = LedgerStore(db_session)
    with patch.object(LedgerStore, "list_expenses", side_effect=RuntimeError("boom")):
        assert get_total_spent(store, test_user, 2024) == 0
        months = get_monthly_spending(store, test_user, 2024)

    assert len(months) == 12
    assert all(m.total == 0 for m in months)


def test_statistics_match_without_indexes(db_session, test_user, make_user, make_expense):
    bob = make_user("Bob")
    make_expense(bob, 300, [(test_user, 150), (bob, 150)], date=ms(2024, 3, 3))
    make_expense(test_user, 400, [(test_user, 200), (bob, 200)], date=ms(2024, 9, 9))

    indexed = LedgerStore(db_session, use_indexes=True)
    scanned = LedgerStore(db_session, use_indexes=False)

    assert get_total_spent(indexed, test_user, 2024) == get_total_spent(scanned, test_user, 2024) == 350
    assert get_monthly_spending(indexed, test_user, 2024) == get_monthly_spending(scanned, test_user, 2024)


def test_out_of_range_years_are_clamped(store, test_user, make_expense):
    assert normalize_year(0) == 1970
    assert normalize_year(10000) == 9998
    assert normalize_year(2024) == 2024

    make_expense(test_user, 700, [(test_user, 700)], date=ms(1970, 3, 2))

    assert get_total_spent(store, test_user, 0) == 700
    monthly = get_monthly_spending(store, test_user, 0)
    assert len(monthly) == 12
    assert monthly[0].month == ms(1970)
    assert monthly[2].total == 700


def test_anonymous_monthly_with_out_of_range_year(store):
    monthly = get_monthly_spending(store, None, 0)
    assert [bucket.month for bucket in monthly] == month_starts(1970)
    assert all(bucket.total == 0 for bucket in monthly)


def test_check_balances_rejects_out_of_range_year(capsys):
    with pytest.raises(SystemExit) as exc_info:
        check_balances_main(["test@example.com", "--year", "0"])
    assert exc_info.value.code == 2
    assert "--year must be between 1970 and 9998" in capsys.readouterr().err
