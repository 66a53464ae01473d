import logging

from huntsplit.application.interfaces.repository import HuntRepository
from huntsplit.domain.balance import allocate_balances, normalize_expense
from huntsplit.domain.entities import Expense, ExpenseReport, Hunt
from huntsplit.domain.errors import ReporterMismatch, StaleHuntError

logger = logging.getLogger(__name__)


class ExpenseReconciler:
    """Merges one expense report into a hunt and recomputes every balance.

    Balances are only rebuilt here, on write. Reads never recalculate.
    """

    def __init__(self, repository: HuntRepository):
        self.repo = repository

    def reconcile(self, hunt: Hunt, report: ExpenseReport) -> Hunt:
        parsed = normalize_expense(report)

        current = [
            Expense(reporter=e.reporter, amount=e.amount, balance=e.balance)
            for e in hunt.expenses
        ]
        logger.debug("Current data for hunt %s: %s", hunt.code, current)

        existing = next((e for e in current if e.reporter == parsed.reporter), None)
        if existing is not None:
            logger.debug("Expense already exists for hunt %s and reporter %s", hunt.code, parsed.reporter)
            existing.amount = parsed.amount
            existing.balance = 0
        else:
            logger.debug("New expense for hunt %s and reporter %s", hunt.code, parsed.reporter)
            current.append(Expense(reporter=parsed.reporter, amount=parsed.amount, balance=0))
            hunt.expenses.append(parsed)

        calculated = {e.reporter: e for e in allocate_balances(hunt.loot, current)}
        logger.debug("Calculated balance: %s", list(calculated.values()))

        for expense in hunt.expenses:
            data = calculated.get(expense.reporter)
            if data is None:
                raise ReporterMismatch(expense.reporter)
            expense.amount = data.amount
            expense.balance = data.balance

        try:
            self.repo.save(hunt)
        except StaleHuntError:
            logger.debug("Hunt %s changed since it was read", hunt.code)
            raise
        except Exception as e:
            logger.error("Unable to persist expense: %s", e)
            raise
        return hunt
