from __future__ import annotations

import dataclasses
from typing import Any, Optional, Sequence

import pandas as pd


def records_frame(
    records: Sequence[Any], record_type: Optional[type] = None
) -> pd.DataFrame:
    """Return parsed records as a ``pandas.DataFrame``, one row per record.

    Parameters
    ----------
    records:
        ``FlightOffer``, ``RankingItem`` or ``ChartPoint`` instances.
    record_type:
        Dataclass used for the column names when *records* is empty.
    """
    if not records:
        columns = (
            [f.name for f in dataclasses.fields(record_type)]
            if record_type
            else []
        )
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([dataclasses.asdict(rec) for rec in records])
    if "kind" in df.columns:
        df["kind"] = df["kind"].map(lambda k: getattr(k, "value", k))
    return df


def write_csv(
    records: Sequence[Any], path: str, record_type: Optional[type] = None
) -> str:
    """Write *records* to *path* as CSV and return the path."""
    records_frame(records, record_type).to_csv(path, index=False)
    return path


__all__ = ["records_frame", "write_csv"]
