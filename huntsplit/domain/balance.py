import logging
import math
from dataclasses import replace
from typing import List, Sequence

from huntsplit.domain.entities import Expense, ExpenseReport, Number
from huntsplit.domain.errors import EmptyExpenseSet, InvalidAmount

logger = logging.getLogger(__name__)

# largest value an INTEGER column holds
MAX_AMOUNT = 2**63 - 1


def to_amount(value: object) -> Number:
    """Coerce a reported amount into a finite, non-negative number.

    Strings may use ',' as thousands separator, like the in-game analyser
    prints them. Integral values come back as int. Anything above
    MAX_AMOUNT is refused since storage could not hold it.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("−", "-")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidAmount(value) from exc

    if not math.isfinite(number) or number < 0:
        raise InvalidAmount(value)
    if isinstance(value, int):
        if value > MAX_AMOUNT:
            raise InvalidAmount(value)
        return value
    if number > MAX_AMOUNT:
        raise InvalidAmount(value)
    return int(number) if number.is_integer() else number


def normalize_expense(report: ExpenseReport) -> Expense:
    return Expense(reporter=report.reporter, amount=to_amount(report.amount), balance=0)


def allocate_balances(loot: Number, expenses: Sequence[Expense]) -> List[Expense]:
    """Split the hunt loot between reporters.

    When the loot covers every expense, each reporter gets their supplies back
    plus an even share of the profit. Otherwise the loot is split
    proportionally to what each one spent, with the share truncated to whole
    percentage points. Both branches floor, so the balances may add up to a
    little less than the loot.
    """
    if not expenses:
        raise EmptyExpenseSet()

    total_expenses = sum(e.amount for e in expenses)
    logger.debug("Looted %s and spent %s", loot, total_expenses)

    if total_expenses < loot:
        profit = math.floor((loot - total_expenses) / len(expenses))
        result = []
        for expense in expenses:
            balance = expense.amount + profit
            logger.debug(
                "Reporter %s was assigned their expense of %s and a profit of %s (%s)",
                expense.reporter, expense.amount, profit, balance,
            )
            result.append(replace(expense, balance=balance))
        return result

    if total_expenses == 0:
        # nothing looted, nothing spent
        return [replace(e, balance=0) for e in expenses]

    result = []
    for expense in expenses:
        percentage = math.floor(expense.amount / total_expenses * 100) / 100
        balance = math.floor(loot * percentage)
        logger.debug(
            "Reporter %s was assigned %s%% of the loot (%s)",
            expense.reporter, round(percentage * 100), balance,
        )
        result.append(replace(expense, balance=balance))
    return result
