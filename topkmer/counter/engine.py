from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Optional

import pandas as pd

from ..config import EngineConfig
from .eviction import EvictionController
from .models import EngineState, EvictionReport, IngestSummary, SequenceTooShort
from .ranking import rank, top
from .rolling_hash import RollingHash
from .table import FrequencyTable


class KmerCounter:
    """
    Streaming k-mer counter with a bounded table.

    Every window of every sequence is hashed and counted; whenever the table
    reaches the capacity limit an eviction pass runs. `finish()` runs the
    last pass before the ranking is read.
    """

    def __init__(self, config: Optional[EngineConfig] = None, report_limit: Optional[int] = None):
        self.config = config or EngineConfig()
        self.config.validate()
        self.hasher = RollingHash(self.config.k_mer_size)
        self.table = FrequencyTable()
        self.state = EngineState(
            capacity_limit=self.config.initial_capacity_limit,
            fairness_const=self.config.fairness_const,
            harsh_mode_capacity=self.config.harsh_mode_threshold_capacity,
            capacity_increment=self.config.capacity_increment,
        )
        self.controller = EvictionController(self.state)
        # only the newest `report_limit` passes are kept; None keeps all of them
        self.reports: Deque[EvictionReport] = deque(maxlen=report_limit)
        self.sequences_offered = 0
        self.finished = False

    @property
    def k(self) -> int:
        return self.config.k_mer_size

    def process_sequence(self, seq: str) -> int:
        """Count all windows of `seq`; returns the number of windows counted.

        Empty sequences are ignored. Raises SequenceTooShort when `seq` is
        non-empty but shorter than k; nothing is counted in that case.
        """
        if self.finished:
            raise RuntimeError("counter already finished")
        self.sequences_offered += 1
        if not seq:
            return 0
        if len(seq) < self.k:
            raise SequenceTooShort(len(seq), self.k, self.sequences_offered)

        self.state.lines_seen += 1
        n = 0
        for window, sig in self.hasher.windows(seq):
            self.state.observe(self.table.increment(window, sig))
            n += 1
            if self.controller.should_run(self.table):
                self.reports.append(self.controller.run(self.table))
        return n

    def ingest(self, sequences: Iterable[str], on_short: Optional[str] = None) -> IngestSummary:
        policy = on_short or self.config.short_sequence_policy
        if policy not in ("abort", "skip"):
            raise ValueError(f"unknown short sequence policy: {policy}")
        summary = IngestSummary()
        passes_before = self.controller.passes
        for seq in sequences:
            if not seq:
                self.sequences_offered += 1
                summary.skipped_empty += 1
                continue
            try:
                summary.windows += self.process_sequence(seq)
            except SequenceTooShort as exc:
                if policy == "skip":
                    summary.skipped_short += 1
                    continue
                summary.aborted = exc
                break
            summary.sequences += 1
        summary.evictions = self.controller.passes - passes_before
        return summary

    def finish(self) -> EvictionReport:
        """Run the unconditional end-of-stream eviction pass."""
        if self.finished:
            raise RuntimeError("counter already finished")
        report = self.controller.run(self.table, trigger="final")
        self.reports.append(report)
        self.finished = True
        return report

    def ranking(self) -> pd.DataFrame:
        return rank(self.table)

    def top(self, n: Optional[int] = None) -> pd.DataFrame:
        return top(self.ranking(), self.config.top_n if n is None else n)

    def reports_frame(self) -> pd.DataFrame:
        return pd.DataFrame([r.as_row() for r in self.reports], columns=REPORT_COLUMNS)


REPORT_COLUMNS = [
    "pass_no",
    "trigger",
    "mode",
    "size_before",
    "size_after",
    "removed",
    "capacity_before",
    "capacity_after",
    "lines_seen",
    "running_max_count",
]


@dataclass
class CountResult:
    ranked: pd.DataFrame
    top: pd.DataFrame
    summary: IngestSummary
    state: EngineState
    reports: pd.DataFrame


def count_kmers(
    sequences: Iterable[str],
    config: Optional[EngineConfig] = None,
    on_short: Optional[str] = None,
) -> CountResult:
    """Ingest `sequences`, run the final eviction pass and rank what survived."""
    counter = KmerCounter(config)
    summary = counter.ingest(sequences, on_short=on_short)
    counter.finish()
    ranked = counter.ranking()
    return CountResult(
        ranked=ranked,
        top=top(ranked, counter.config.top_n),
        summary=summary,
        state=counter.state,
        reports=counter.reports_frame(),
    )
