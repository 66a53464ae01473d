import re
from datetime import datetime

import pytest

from huntsplit.application.session_builder import (
    HuntSessionBuilder,
    generate_code,
    parse_session_time,
)
from huntsplit.domain.entities import Expense, Item, Monster, SessionReport
from huntsplit.domain.errors import InvalidSessionReport


def session_report(**overrides):
    data = dict(
        reporter="Knight",
        session_start_time="2024-05-03 14:05:12",
        session_time="01:30",
        loot=500,
        supplies=50,
        damage=1000,
        healing=400,
        xp=12345,
        loot_items=[Item("a dragon ham", 3)],
        monsters=[Monster("dragon", 12)],
    )
    data.update(overrides)
    return SessionReport(**data)


def test_build_seeds_single_expense_with_full_loot():
    hunt = HuntSessionBuilder(lambda: "_fixedcode").build(session_report())

    assert hunt.code == "_fixedcode"
    assert hunt.expenses == [Expense(reporter="Knight", amount=50, balance=500)]
    assert hunt.loot == 500
    assert hunt.revision == 0


def test_build_parses_times_and_copies_metadata():
    report = session_report()
    hunt = HuntSessionBuilder().build(report)

    assert hunt.date == datetime(2024, 5, 3, 14, 5, 12)
    assert hunt.duration_min == 90
    assert (hunt.damage, hunt.healing, hunt.experience) == (1000, 400, 12345)
    assert hunt.items == [Item("a dragon ham", 3)]
    assert hunt.monsters == [Monster("dragon", 12)]
    assert hunt.items[0] is not report.loot_items[0]


def test_build_rejects_bad_start_time():
    with pytest.raises(InvalidSessionReport):
        HuntSessionBuilder().build(session_report(session_start_time="03/05/2024 14:05"))


@pytest.mark.parametrize("text, minutes", [("01:30", 90), ("00:05", 5), ("12:00h", 720), ("100:01", 6001)])
def test_parse_session_time(text, minutes):
    assert parse_session_time(text) == minutes


@pytest.mark.parametrize("text", ["", "1h30", "01:75", None])
def test_parse_session_time_rejects_garbage(text):
    with pytest.raises(InvalidSessionReport):
        parse_session_time(text)


def test_generated_codes_use_marker_and_base36():
    codes = {generate_code() for _ in range(200)}
    assert len(codes) == 200
    for code in codes:
        assert re.fullmatch(r"_[0-9a-z]{9}", code)
