import math

import pytest

from huntsplit.domain.balance import MAX_AMOUNT, allocate_balances, normalize_expense, to_amount
from huntsplit.domain.entities import Expense, ExpenseReport
from huntsplit.domain.errors import EmptyExpenseSet, InvalidAmount


def balances(result):
    return {e.reporter: e.balance for e in result}


def test_normalize_expense_coerces_amount_and_zeroes_balance():
    expense = normalize_expense(ExpenseReport(code="_x", reporter="Knight", amount="1,250"))
    assert expense == Expense(reporter="Knight", amount=1250, balance=0)


@pytest.mark.parametrize("raw, expected", [(300, 300), (" 42 ", 42), ("12.5", 12.5), (7.0, 7), ("0", 0)])
def test_to_amount_accepts_numbers_and_numeric_strings(raw, expected):
    assert to_amount(raw) == expected


def test_to_amount_keeps_integral_values_as_int():
    assert isinstance(to_amount("300"), int)
    assert isinstance(to_amount(300.0), int)


@pytest.mark.parametrize("raw", ["abc", "", None, "nan", "inf", float("inf"), -5, "-1", True, [1]])
def test_to_amount_rejects_non_finite_or_negative(raw):
    with pytest.raises(InvalidAmount):
        to_amount(raw)


@pytest.mark.parametrize("raw", ["1e19", 10**19, "9,223,372,036,854,775,808"])
def test_to_amount_rejects_values_too_large_to_store(raw):
    with pytest.raises(InvalidAmount):
        to_amount(raw)


def test_to_amount_accepts_the_largest_storable_integer():
    assert to_amount(MAX_AMOUNT) == MAX_AMOUNT


def test_invalid_amount_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_expense(ExpenseReport(code="_x", reporter="Knight", amount="lots"))


def test_profit_case_reimburses_and_splits_surplus_evenly():
    result = allocate_balances(1000, [Expense("A", 100), Expense("B", 200)])
    assert balances(result) == {"A": 450, "B": 550}


def test_shortfall_case_splits_by_truncated_percentage():
    # total == loot is not a profit
    result = allocate_balances(900, [Expense("A", 300), Expense("B", 300), Expense("C", 300)])
    assert balances(result) == {"A": 297, "B": 297, "C": 297}


def test_shortfall_truncation_follows_float_arithmetic():
    # 29 / 100 * 100 is 28.999999999999996 as a double, so A only gets 28%
    result = allocate_balances(100, [Expense("A", 29), Expense("B", 71)])
    assert balances(result) == {"A": 28, "B": 71}
    assert sum(balances(result).values()) == 99


def test_zero_expenses_with_loot_is_an_even_split():
    result = allocate_balances(900, [Expense("A", 0), Expense("B", 0), Expense("C", 0)])
    assert balances(result) == {"A": 300, "B": 300, "C": 300}


def test_zero_loot_and_zero_expenses_gives_zero_balances():
    result = allocate_balances(0, [Expense("A", 0), Expense("B", 0)])
    assert balances(result) == {"A": 0, "B": 0}


def test_profit_floors_remainder():
    result = allocate_balances(1000, [Expense("A", 100), Expense("B", 200), Expense("C", 50)])
    assert balances(result) == {"A": 316, "B": 416, "C": 266}
    assert sum(e.balance for e in result) == 998


@pytest.mark.parametrize(
    "loot, amounts",
    [(10_000, [0, 1, 2, 3]), (777, [100, 5, 31]), (1, [0]), (5_000_000, [123_456, 654_321])],
)
def test_profit_property(loot, amounts):
    expenses = [Expense(f"R{i}", a) for i, a in enumerate(amounts)]
    total = sum(amounts)
    profit = math.floor((loot - total) / len(amounts))
    result = allocate_balances(loot, expenses)
    assert sum(e.balance - e.amount for e in result) == profit * len(amounts)
    for expense in result:
        assert expense.balance == expense.amount + profit


@pytest.mark.parametrize(
    "loot, amounts",
    [(100, [50, 50, 1]), (0, [10, 20]), (12_345, [10_000, 3_000, 345]), (500, [1000, 1, 7])],
)
def test_shortfall_property(loot, amounts):
    expenses = [Expense(f"R{i}", a) for i, a in enumerate(amounts)]
    total = sum(amounts)
    result = allocate_balances(loot, expenses)
    for expense in result:
        assert expense.balance == math.floor(loot * (math.floor(expense.amount / total * 100) / 100))
        assert expense.balance <= loot


def test_allocation_does_not_touch_input():
    expenses = [Expense("A", 100, 999), Expense("B", 200, 999)]
    result = allocate_balances(1000, expenses)
    assert [e.balance for e in expenses] == [999, 999]
    assert [e.reporter for e in result] == ["A", "B"]
    assert result[0] is not expenses[0]


def test_empty_expense_set_is_rejected():
    with pytest.raises(EmptyExpenseSet):
        allocate_balances(1000, [])
