import logging
import re
import secrets
import string
from datetime import datetime
from typing import Callable

from huntsplit.domain.balance import normalize_expense
from huntsplit.domain.entities import ExpenseReport, Hunt, Item, Monster, SessionReport
from huntsplit.domain.errors import InvalidSessionReport

logger = logging.getLogger(__name__)

CODE_MARKER = "_"
CODE_LENGTH = 9
BASE36 = string.digits + string.ascii_lowercase

START_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def generate_code(length: int = CODE_LENGTH) -> str:
    return CODE_MARKER + "".join(secrets.choice(BASE36) for _ in range(length))


def parse_session_time(text: str) -> int:
    """'HH:MM' (an optional trailing 'h' is accepted) -> minutes."""
    m = re.fullmatch(r"\s*(\d{1,3}):(\d{2})h?\s*", text or "")
    if not m:
        raise InvalidSessionReport(f"Invalid session time: {text!r}")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if minutes >= 60:
        raise InvalidSessionReport(f"Invalid session time: {text!r}")
    return hours * 60 + minutes


def parse_start_time(text: str) -> datetime:
    try:
        return datetime.strptime((text or "").strip(), START_TIME_FORMAT)
    except ValueError as exc:
        raise InvalidSessionReport(f"Invalid session start time: {text!r}") from exc


class HuntSessionBuilder:
    def __init__(self, code_generator: Callable[[], str] = generate_code):
        self.code_generator = code_generator

    def build(self, report: SessionReport) -> Hunt:
        code = self.code_generator()
        start_time = parse_start_time(report.session_start_time)
        duration = parse_session_time(report.session_time)

        # With a single reporter there is nothing to split: they get the loot.
        seed = normalize_expense(ExpenseReport(code=code, reporter=report.reporter, amount=report.supplies))
        seed.balance = report.loot

        logger.debug("Start session time %s", report.session_start_time)
        logger.debug("Session duration %s (%s min)", report.session_time, duration)

        return Hunt(
            code=code,
            loot=report.loot,
            date=start_time,
            duration_min=duration,
            damage=report.damage,
            healing=report.healing,
            experience=report.xp,
            items=[Item(name=i.name, amount=i.amount) for i in report.loot_items],
            monsters=[Monster(name=m.name, amount=m.amount) for m in report.monsters],
            expenses=[seed],
        )
