from __future__ import annotations

from typing import List

import numpy as np

from .models import EngineState, EvictionReport, KmerKey, Mode
from .table import FrequencyTable


def fair_eviction_mask(
    counts: np.ndarray,
    capacity_limit: int,
    lines_seen: int,
    running_max_count: int,
    fairness_const: float,
) -> np.ndarray:
    """
    Fair thresholding. Compares a volume baseline against each entry's share:

      fairness_factor = floor(lines_seen / running_max_count) * fairness_const
      x_factor        = floor(capacity_limit / count)

    x_factor is large for rare entries, so an entry is evicted when
    fairness_factor < x_factor. Raising fairness_const keeps more entries.
    """
    fairness_factor = (lines_seen // running_max_count) * fairness_const
    x_factor = capacity_limit // counts
    return fairness_factor < x_factor


def harsh_eviction_mask(counts: np.ndarray, running_max_count: int) -> np.ndarray:
    """Drop everything at or below 1/20th of the best count seen (plus one).

    Much coarser than fair thresholding and may drop entries that would have
    ranked; it is used once the table is already large.
    """
    threshold = (running_max_count // 20) + 1
    return counts <= threshold


class EvictionController:
    """
    Keeps a FrequencyTable bounded by EngineState.capacity_limit.

    A pass selects victims first and deletes them afterwards. When a pass
    removes no more than 10% of the table, the capacity limit is raised by
    the configured increment; reaching the harsh-mode capacity switches the
    heuristic from FAIR to HARSH for the rest of the run.
    """

    def __init__(self, state: EngineState):
        self.state = state
        self.passes = 0

    def should_run(self, table: FrequencyTable) -> bool:
        return table.size() >= self.state.capacity_limit

    def select(self, table: FrequencyTable) -> List[KmerKey]:
        keys = list(table.keys())
        if not keys:
            return []
        counts = np.fromiter(table.counts(), dtype=np.int64, count=len(keys))
        st = self.state
        if st.mode is Mode.FAIR:
            mask = fair_eviction_mask(
                counts, st.capacity_limit, st.lines_seen, st.running_max_count, st.fairness_const
            )
        else:
            mask = harsh_eviction_mask(counts, st.running_max_count)
        return [k for k, drop in zip(keys, mask) if drop]

    def run(self, table: FrequencyTable, trigger: str = "capacity") -> EvictionReport:
        st = self.state
        self.passes += 1
        size_before = table.size()
        capacity_before = st.capacity_limit
        mode = st.mode

        if size_before > 0:
            table.remove(self.select(table))
            removed = size_before - table.size()
            if not removed > size_before // 10:
                self._raise_capacity()

        return EvictionReport(
            pass_no=self.passes,
            trigger=trigger,
            mode=mode,
            size_before=size_before,
            size_after=table.size(),
            capacity_before=capacity_before,
            capacity_after=st.capacity_limit,
            lines_seen=st.lines_seen,
            running_max_count=st.running_max_count,
        )

    def _raise_capacity(self):
        st = self.state
        st.capacity_limit += st.capacity_increment
        if st.mode is Mode.FAIR and st.capacity_limit >= st.harsh_mode_capacity:
            st.mode = Mode.HARSH
