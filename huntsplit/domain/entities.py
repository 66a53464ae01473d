from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Union

Number = Union[int, float]


@dataclass
class Item:
    name: str
    amount: int


@dataclass
class Monster:
    name: str
    amount: int


@dataclass
class Expense:
    reporter: str
    amount: Number
    balance: Number = 0


@dataclass
class Hunt:
    code: str
    loot: Number
    date: datetime
    duration_min: int
    damage: int
    healing: int
    experience: int
    items: List[Item] = field(default_factory=list)
    monsters: List[Monster] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    # 0 means the hunt was never persisted
    revision: int = 0

    @property
    def total_expenses(self) -> Number:
        return sum(e.amount for e in self.expenses)


@dataclass
class ReporterBalance:
    reporter: str
    balance: Number


@dataclass
class BalanceSummary:
    code: str
    loot: Number
    total_expenses: Number
    balances: List[ReporterBalance]


@dataclass
class ExpenseReport:
    code: str
    reporter: str
    amount: object


@dataclass
class SessionReport:
    reporter: str
    session_start_time: str  # YYYY-MM-DD HH:MM:SS
    session_time: str  # HH:MM
    loot: int
    supplies: int
    damage: int = 0
    healing: int = 0
    xp: int = 0
    loot_items: List[Item] = field(default_factory=list)
    monsters: List[Monster] = field(default_factory=list)
