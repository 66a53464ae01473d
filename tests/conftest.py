from copy import deepcopy
from datetime import datetime

import pytest

from huntsplit.application.interfaces.repository import HuntRepository
from huntsplit.domain.entities import Expense, Hunt
from huntsplit.domain.errors import HuntCodeConflict, StaleHuntError
from huntsplit.infrastructure.database.sqlite_repository import SQLiteHuntRepository

SESSION_LOG = """Session data: From 2024-05-03, 14:05:12 to 2024-05-03, 15:35:40
Session: 01:30h
Raw XP Gain: 1,234,567
XP Gain: 1,851,850
Raw XP/h: 822,000
XP/h: 1,234,000
Loot: 2,345,678
Supplies: 456,789
Balance: 1,888,889
Damage: 3,456,789
Damage/h: 2,300,000
Healing: 987,654
Healing/h: 650,000
Killed Monsters:
  120x dragon
  35x dragon lord
Looted Items:
  3x a dragon ham
  1x a royal helmet
"""


class FakeRepository(HuntRepository):
    """Keeps deep copies, like a real store would."""

    def __init__(self):
        self.hunts = {}
        self.saves = 0
        self.settings = {}

    def save(self, hunt):
        stored = self.hunts.get(hunt.code)
        if hunt.revision == 0 and stored is not None:
            raise HuntCodeConflict(hunt.code)
        if hunt.revision and (stored is None or stored.revision != hunt.revision):
            raise StaleHuntError(hunt.code, hunt.revision)
        hunt.revision += 1
        self.hunts[hunt.code] = deepcopy(hunt)
        self.saves += 1

    def find_by_code(self, code):
        hunt = self.hunts.get(code)
        return deepcopy(hunt) if hunt else None

    def find_by_code_and_reporter(self, code, reporter):
        hunt = self.find_by_code(code)
        if hunt and any(e.reporter == reporter for e in hunt.expenses):
            return hunt
        return None

    def find_by_reporter(self, reporter, start=None, end=None):
        return sorted(
            (deepcopy(h) for h in self.hunts.values()
             if any(e.reporter == reporter for e in h.expenses)
             and (start is None or h.date >= start)
             and (end is None or h.date < end)),
            key=lambda h: h.date,
        )

    def find_in_current_month(self, today=None):
        return []

    def get_setting(self, key):
        return self.settings.get(key)

    def set_setting(self, key, value):
        self.settings[key] = value


def make_hunt(code="_abc123xyz", loot=1000, expenses=None, date=None):
    return Hunt(
        code=code,
        loot=loot,
        date=date or datetime(2024, 5, 3, 14, 5, 12),
        duration_min=90,
        damage=0,
        healing=0,
        experience=0,
        expenses=[Expense(*e) for e in (expenses or [])],
    )


@pytest.fixture
def fake_repo():
    return FakeRepository()


@pytest.fixture
def sqlite_repo(tmp_path):
    return SQLiteHuntRepository(str(tmp_path / "hunts.db"))
