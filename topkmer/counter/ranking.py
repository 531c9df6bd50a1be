from __future__ import annotations

from typing import Iterable, List, Tuple

import pandas as pd

from .table import FrequencyTable


RANK_COLUMNS = ["kmer", "count"]


def rank_entries(entries: Iterable[Tuple[str, int]]) -> pd.DataFrame:
    """
    Rank (kmer, count) pairs by count descending. Equal counts are ordered by
    k-mer text ascending so the ranking is reproducible.
    Returns DataFrame [kmer, count] with a fresh RangeIndex.
    """
    df = pd.DataFrame.from_records(list(entries), columns=RANK_COLUMNS)
    if df.empty:
        return df.astype({"kmer": object, "count": "int64"})
    df["count"] = df["count"].astype("int64")
    df = df.sort_values(["count", "kmer"], ascending=[False, True])
    return df.reset_index(drop=True)


def rank(table: FrequencyTable) -> pd.DataFrame:
    return rank_entries(table.entries())


def top(ranked: pd.DataFrame, n: int) -> pd.DataFrame:
    if n < 0:
        raise ValueError("n must be >= 0")
    return ranked.head(n).reset_index(drop=True)


def as_records(df: pd.DataFrame) -> List[Tuple[str, int]]:
    return [(str(k), int(c)) for k, c in zip(df["kmer"], df["count"])]
