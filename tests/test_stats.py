"""Tests for the summary, category breakdown and monthly series."""

import calendar
import random
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from app.models.transaction import TransactionCategory, TransactionType
from app.utils.stats import category_breakdown, month_label, monthly_series, summarize


def _tx(kind: str, amount: str, category: str = "Other", when: datetime = datetime(2024, 10, 1)):
    return SimpleNamespace(
        type=TransactionType(kind),
        amount=Decimal(amount),
        category=TransactionCategory(category),
        date=when,
    )


SAMPLE = [
    _tx("income", "5000", "Salary"),
    _tx("expense", "150", "Food", datetime(2024, 10, 5)),
    _tx("expense", "50", "Entertainment", datetime(2024, 10, 10)),
    _tx("expense", "1200", "Bills"),
    _tx("income", "500", "Freelance", datetime(2024, 10, 15)),
    _tx("expense", "80", "Travel", datetime(2024, 10, 12)),
    _tx("expense", "200", "Shopping", datetime(2024, 10, 20)),
    _tx("expense", "100", "Healthcare", datetime(2024, 10, 18)),
]


def test_summary_of_sample_data() -> None:
    summary = summarize(SAMPLE)

    assert summary.total_income == Decimal("5500")
    assert summary.total_expense == Decimal("1780")
    assert summary.balance == Decimal("3720")


def test_summary_of_nothing_is_zero() -> None:
    summary = summarize([])

    assert summary.total_income == summary.total_expense == summary.balance == 0


def test_summary_has_no_float_drift() -> None:
    transactions = [_tx("expense", "0.10") for _ in range(1000)]
    transactions.append(SimpleNamespace(
        type="income", amount=0.1, category="Other", date=datetime(2024, 1, 1),
    ))

    summary = summarize(transactions)

    assert summary.total_expense == Decimal("100.00")
    assert summary.total_income == Decimal("0.10")
    assert summary.balance == Decimal("-99.90")


def test_breakdown_keeps_income_and_expense_apart() -> None:
    breakdown = category_breakdown([
        _tx("expense", "10", "Other"),
        _tx("income", "25", "Other"),
        _tx("expense", "5.5", "Other"),
        _tx("expense", "3", "Food"),
    ])

    assert [(b.category.value, b.type.value, b.amount) for b in breakdown] == [
        ("Food", "expense", Decimal("3.00")),
        ("Other", "income", Decimal("25.00")),
        ("Other", "expense", Decimal("15.50")),
    ]


def test_breakdown_totals_match_summary() -> None:
    summary = summarize(SAMPLE)
    breakdown = category_breakdown(SAMPLE)

    assert sum(b.amount for b in breakdown) == summary.total_income + summary.total_expense


def test_results_do_not_depend_on_input_order() -> None:
    shuffled = list(SAMPLE)
    random.Random(7).shuffle(shuffled)

    assert summarize(shuffled) == summarize(SAMPLE)
    assert category_breakdown(shuffled) == category_breakdown(SAMPLE)
    assert monthly_series(shuffled) == monthly_series(SAMPLE)


def test_monthly_series_groups_and_labels() -> None:
    series = monthly_series(SAMPLE + [
        _tx("expense", "40", "Food", datetime(2024, 11, 2)),
        _tx("income", "100", "Investment", datetime(2023, 12, 31, 23, 59)),
    ])

    assert [(m.key, m.month) for m in series] == [
        ("2023-12", "Dec 2023"),
        ("2024-10", "Oct 2024"),
        ("2024-11", "Nov 2024"),
    ]
    october = series[1]
    assert (october.income, october.expense, october.balance) == (
        Decimal("5500.00"), Decimal("1780.00"), Decimal("3720.00"),
    )
    assert series[2].balance == Decimal("-40.00")


def test_monthly_series_keeps_last_six_months_with_data() -> None:
    # eight months with a gap in the middle; gaps are not zero-filled
    months = [(2023, 11), (2023, 12), (2024, 1), (2024, 2), (2024, 5), (2024, 6), (2024, 7), (2024, 8)]
    transactions = [_tx("income", "1", when=datetime(y, m, 15)) for y, m in months]

    series = monthly_series(transactions)

    assert len(series) == 6
    assert [m.key for m in series] == ["2024-01", "2024-02", "2024-05", "2024-06", "2024-07", "2024-08"]
    assert [m.key for m in series] == sorted(m.key for m in series)


def test_month_labels_ignore_the_process_locale(monkeypatch) -> None:
    german = ["", "Jan", "Feb", "Mär", "Apr", "Mai", "Jun", "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"]
    monkeypatch.setattr(calendar, "month_abbr", german)

    labels = [month_label(2024, month) for month in range(1, 13)]

    assert labels == [
        "Jan 2024", "Feb 2024", "Mar 2024", "Apr 2024", "May 2024", "Jun 2024",
        "Jul 2024", "Aug 2024", "Sep 2024", "Oct 2024", "Nov 2024", "Dec 2024",
    ]
