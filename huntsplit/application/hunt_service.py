import logging
from datetime import date, datetime
from typing import List, Optional

from huntsplit.application.interfaces.repository import HuntRepository
from huntsplit.application.reconciler import ExpenseReconciler
from huntsplit.application.session_builder import HuntSessionBuilder
from huntsplit.domain.entities import (
    BalanceSummary,
    ExpenseReport,
    Hunt,
    ReporterBalance,
    SessionReport,
)
from huntsplit.domain.errors import (
    CodeGenerationError,
    HuntCodeConflict,
    HuntNotFoundError,
    StaleHuntError,
)

logger = logging.getLogger(__name__)


class HuntService:
    """Entry point used by the UI: creates hunts, records expenses and
    answers balance queries. Holds no hunt state between calls."""

    def __init__(
        self,
        repository: HuntRepository,
        builder: Optional[HuntSessionBuilder] = None,
        code_attempts: int = 5,
        reconcile_attempts: int = 3,
    ):
        self.repo = repository
        self.builder = builder or HuntSessionBuilder()
        self.reconciler = ExpenseReconciler(repository)
        self.code_attempts = max(1, code_attempts)
        self.reconcile_attempts = max(1, reconcile_attempts)

    def get_balance_data(self, code: str) -> BalanceSummary:
        logger.debug("Generating balance for hunt %s", code)
        hunt = self.repo.find_by_code(code)
        if hunt is None:
            raise HuntNotFoundError(code)
        return BalanceSummary(
            code=hunt.code,
            loot=hunt.loot,
            total_expenses=hunt.total_expenses,
            balances=[ReporterBalance(reporter=e.reporter, balance=e.balance) for e in hunt.expenses],
        )

    def get_hunt_by_code(self, reporter: str, code: str) -> Hunt:
        logger.debug("Retrieving hunt %s for user %s", code, reporter)
        hunt = self.repo.find_by_code_and_reporter(code, reporter)
        if hunt is None:
            raise HuntNotFoundError(code, reporter)
        return hunt

    def get_hunts_by_reporter(
        self,
        reporter: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Hunt]:
        logger.debug("Retrieving hunts for user %s (%s -> %s)", reporter, start, end)
        return self.repo.find_by_reporter(reporter, start, end)

    def get_month_hunts(self, today: Optional[date] = None) -> List[Hunt]:
        logger.debug("Generating this month's hunts report")
        return self.repo.find_in_current_month(today)

    def persist_expense(self, report: ExpenseReport) -> bool:
        logger.debug("Registering expense %s", report)
        attempt = 0
        while True:
            attempt += 1
            hunt = self.repo.find_by_code(report.code)
            if hunt is None:
                raise HuntNotFoundError(report.code)
            try:
                self.reconciler.reconcile(hunt, report)
                return True
            except StaleHuntError:
                if attempt >= self.reconcile_attempts:
                    raise
                logger.warning("Hunt %s changed while reconciling, retrying (%s)", report.code, attempt)

    def persist_loot(self, report: SessionReport) -> str:
        logger.debug("Storing loot information")
        for _ in range(self.code_attempts):
            hunt = self.builder.build(report)
            if self.repo.find_by_code(hunt.code) is not None:
                logger.debug("Code %s already taken", hunt.code)
                continue
            try:
                self.repo.save(hunt)
            except HuntCodeConflict:
                logger.debug("Code %s taken while saving", hunt.code)
                continue
            except Exception as e:
                logger.error("Unable to persist hunt: %s", e)
                raise
            logger.debug("Hunt data stored with code %s", hunt.code)
            return hunt.code
        raise CodeGenerationError(f"No free hunt code after {self.code_attempts} attempts")
