from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from ..counter.ranking import as_records


def format_record(kmer: str, count: int, separator: str = " | ") -> str:
    return f"{kmer}{separator}{count}"


def write_ranking(ranked: pd.DataFrame, path: str, separator: str = " | ") -> int:
    """Write one `kmer | count` line per ranked row. Returns rows written."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w") as fout:
        for kmer, count in as_records(ranked):
            print(format_record(kmer, count, separator), file=fout)
    return len(ranked)


def format_top(top_df: pd.DataFrame, k: int, separator: str = " | ") -> List[str]:
    lines = [f"{len(top_df)} most frequent {k}-mers are:"]
    lines.extend(format_record(kmer, count, separator) for kmer, count in as_records(top_df))
    return lines
