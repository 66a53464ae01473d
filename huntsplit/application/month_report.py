from typing import List

import pandas as pd

from huntsplit.domain.entities import Hunt

FRAME_COLUMNS = ["code", "date", "loot", "reporter", "supplies", "balance"]
SUMMARY_COLUMNS = ["hunts", "supplies", "balance", "profit"]


def hunts_frame(hunts: List[Hunt]) -> pd.DataFrame:
    """One row per (hunt, reporter)."""
    rows = [
        {
            "code": h.code,
            "date": h.date,
            "loot": h.loot,
            "reporter": e.reporter,
            "supplies": e.amount,
            "balance": e.balance,
        }
        for h in hunts
        for e in h.expenses
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    for col in ["loot", "supplies", "balance"]:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
    return df


def reporter_summary(hunts: List[Hunt]) -> pd.DataFrame:
    df = hunts_frame(hunts)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS, index=pd.Index([], name="reporter"))

    summary = df.groupby("reporter").agg(
        hunts=("code", "nunique"),
        supplies=("supplies", "sum"),
        balance=("balance", "sum"),
    )
    summary["profit"] = summary["balance"] - summary["supplies"]
    return summary.sort_values("profit", ascending=False)[SUMMARY_COLUMNS]
