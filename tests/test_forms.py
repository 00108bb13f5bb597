from datetime import datetime
from decimal import Decimal

import pytest

from finance_tracker.forms import CategoryForm, TransactionForm, parse_amount
from finance_tracker.models import Category, TransactionType

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12.5", Decimal("12.50")),
        ("100", Decimal("100.00")),
        (" 7 ", Decimal("7.00")),
        ("-3", Decimal("3.00")),
        ("12.345", Decimal("12.35")),
        ("1e100", 0),
        ("abc", 0.0),
        ("", 0.0),
        ("1,5", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
    ],
)
def test_parse_amount(text, expected):
    amount = parse_amount(text)

    assert isinstance(amount, Decimal)
    assert amount == expected


def test_submit_needs_amount_and_category():
    form = TransactionForm()
    assert not form.can_submit

    form.amount_text = "10"
    assert not form.can_submit

    form.set_categories([Category(name="Default", type=EXPENSE)])
    assert form.can_submit

    form.amount_text = ""
    assert not form.can_submit


def test_defaults_to_expense_today():
    form = TransactionForm()

    assert form.type == EXPENSE
    assert form.date.date() == datetime.now().date()


def test_select_type_preselects_first_category():
    form = TransactionForm()
    form.set_categories([Category(name="Default", type=EXPENSE)])

    form.select_type(INCOME, [Category(name="Bonus", type=INCOME), Category(name="Salary", type=INCOME)])

    assert form.type == INCOME
    assert form.categories == ["Bonus", "Salary"]
    assert form.category == "Bonus"


def test_select_type_without_categories_blocks_submit():
    form = TransactionForm(amount_text="5")
    form.set_categories([Category(name="Default", type=EXPENSE)])

    form.select_type(INCOME, [])

    assert form.category == ""
    assert not form.can_submit


def test_set_date():
    form = TransactionForm()

    assert form.set_date("2025-02-14")
    assert form.date == datetime(2025, 2, 14)
    assert form.date_text == "2025-02-14"


def test_set_date_invalid_keeps_previous():
    form = TransactionForm(date=datetime(2025, 1, 1))

    assert not form.set_date("not a date")
    assert form.date == datetime(2025, 1, 1)


def test_to_transaction():
    form = TransactionForm(
        amount_text="42.5",
        description="groceries",
        type=EXPENSE,
        date=datetime(2025, 3, 1),
        category="Food",
    )

    txn = form.to_transaction()

    assert txn.id is None
    assert txn.amount == Decimal("42.50")
    assert txn.category == "Food"
    assert txn.description == "groceries"
    assert txn.type == EXPENSE
    assert txn.date == datetime(2025, 3, 1)


def test_unparseable_amount_is_stored_as_zero(state):
    state.activate()
    form = TransactionForm(amount_text="abc")
    form.set_categories(state.expense_categories.value)

    assert form.can_submit
    state.insert_transaction(form.to_transaction())

    [stored] = state.transactions.value
    assert stored.amount == Decimal("0.00")
    assert stored.category == "Default"


def test_category_form():
    form = CategoryForm()
    assert not form.can_submit

    form.name = "   "
    assert not form.can_submit

    form.name = "  Travel "
    form.type = INCOME
    category = form.to_category()

    assert form.can_submit
    assert category.name == "Travel"
    assert category.type == INCOME
