from __future__ import annotations

import os
from typing import Optional

import pandas as pd


class TelemetryLogger:
    """
    Appends per-run tables to CSV files under base_dir:
      evictions.csv  one row per eviction pass
      runs.csv       one summary row per run
    The header is only written when a file is created.
    """

    def __init__(self, base_dir: str = "telemetry"):
        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)

    def _append(self, name: str, df: pd.DataFrame):
        path = os.path.join(self.base_dir, f"{name}.csv")
        df.to_csv(path, mode="a", header=not os.path.exists(path), index=False)

    def log_run(self, evictions_df: pd.DataFrame, summary_df: Optional[pd.DataFrame] = None, run_id: Optional[str] = None):
        if run_id is not None:
            evictions_df = evictions_df.assign(run_id=run_id)
            if summary_df is not None:
                summary_df = summary_df.assign(run_id=run_id)
        self._append("evictions", evictions_df)
        if summary_df is not None:
            self._append("runs", summary_df)
