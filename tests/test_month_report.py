from datetime import datetime

from conftest import make_hunt
from huntsplit.application.month_report import SUMMARY_COLUMNS, hunts_frame, reporter_summary


def sample_hunts():
    return [
        make_hunt(code="_one", loot=1000, date=datetime(2024, 5, 1),
                  expenses=[("Knight", 100, 450), ("Druid", 200, 550)]),
        make_hunt(code="_two", loot=900, date=datetime(2024, 5, 2),
                  expenses=[("Knight", 600, 540), ("Paladin", 400, 360)]),
    ]


def test_hunts_frame_has_one_row_per_expense():
    df = hunts_frame(sample_hunts())
    assert len(df) == 4
    assert list(df["reporter"]) == ["Knight", "Druid", "Knight", "Paladin"]
    assert df["loot"].tolist() == [1000, 1000, 900, 900]


def test_reporter_summary_totals_and_order():
    summary = reporter_summary(sample_hunts())

    assert list(summary.columns) == SUMMARY_COLUMNS
    assert list(summary.index) == ["Druid", "Knight", "Paladin"]
    knight = summary.loc["Knight"]
    assert knight["hunts"] == 2
    assert knight["supplies"] == 700
    assert knight["balance"] == 990
    assert knight["profit"] == 290
    assert summary.loc["Paladin", "profit"] == -40


def test_empty_month():
    summary = reporter_summary([])
    assert summary.empty
    assert list(summary.columns) == SUMMARY_COLUMNS
