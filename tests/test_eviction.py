from __future__ import annotations

import numpy as np
import pytest

from topkmer.counter.eviction import EvictionController, fair_eviction_mask, harsh_eviction_mask
from topkmer.counter.models import EngineState, Mode
from topkmer.counter.table import FrequencyTable


def _table(counts):
    t = FrequencyTable()
    for i, c in enumerate(counts):
        text = f"{i:06d}"
        for _ in range(c):
            t.increment(text, i)
    return t


def test_fair_mask_compares_baseline_to_x_factor():
    counts = np.array([1, 5, 50], dtype=np.int64)
    # fairness = (10000 // 50) * 1.25 = 250; x = [1000, 200, 20]
    mask = fair_eviction_mask(counts, 1000, 10000, 50, 1.25)
    assert mask.tolist() == [True, False, False]


def test_harsh_mask_threshold():
    counts = np.array([1, 6, 7, 100], dtype=np.int64)
    # threshold = 100 // 20 + 1 = 6
    assert harsh_eviction_mask(counts, 100).tolist() == [True, True, False, False]


def test_ineffective_pass_raises_capacity():
    state = EngineState(capacity_limit=10, lines_seen=1000, running_max_count=5)
    table = _table([5] * 10)
    ctl = EvictionController(state)
    assert ctl.should_run(table)

    report = ctl.run(table)
    assert report.removed == 0
    assert report.raised_capacity
    assert state.capacity_limit == 1010
    assert table.size() == 10
    assert state.mode is Mode.FAIR


def test_effective_pass_keeps_capacity():
    state = EngineState(capacity_limit=10, lines_seen=10, running_max_count=10)
    table = _table([10] + [1] * 9)
    report = EvictionController(state).run(table)
    assert report.removed == 9
    assert not report.raised_capacity
    assert state.capacity_limit == 10
    assert dict(table.entries()) == {"000000": 10}


def test_removing_exactly_ten_percent_is_ineffective():
    # 1 of 10 removed: 1 > 10 // 10 is false
    state = EngineState(capacity_limit=10, lines_seen=10, running_max_count=10)
    table = _table([10] * 9 + [1])
    report = EvictionController(state).run(table)
    assert report.removed == 1
    assert state.capacity_limit == 1010


def test_switches_to_harsh_at_threshold_capacity():
    state = EngineState(capacity_limit=14000, lines_seen=10**6, running_max_count=3)
    table = _table([3, 3, 3])
    ctl = EvictionController(state)

    ctl.run(table)
    assert state.capacity_limit == 15000
    assert state.mode is Mode.HARSH

    ctl.run(table)
    assert state.capacity_limit == 16000
    assert state.mode is Mode.HARSH


def test_harsh_pass_drops_low_counts():
    state = EngineState(capacity_limit=20000, mode=Mode.HARSH, running_max_count=40)
    table = _table([1, 2, 3, 4, 40])
    report = EvictionController(state).run(table)
    assert report.mode is Mode.HARSH
    assert sorted(c for _, c in table.entries()) == [4, 40]
    assert state.capacity_limit == 20000


def test_empty_table_is_noop():
    state = EngineState(capacity_limit=1000)
    report = EvictionController(state).run(FrequencyTable(), trigger="final")
    assert report.size_before == report.size_after == 0
    assert state.capacity_limit == 1000
    assert report.trigger == "final"


def test_running_max_survives_eviction_of_its_entry():
    state = EngineState(capacity_limit=3, lines_seen=1, running_max_count=1)
    table = _table([1, 1, 1])
    EvictionController(state).run(table)
    assert table.size() == 0
    assert state.running_max_count == 1


@pytest.mark.parametrize(
    "capacity,lines,top_count,fairness_const",
    [(1000, 1000, 1, 1.0), (1000, 5000, 37, 1.25), (4000, 4000, 900, 2.0), (12000, 90000, 3, 1.5)],
)
def test_fair_pass_keeps_running_max_entry(capacity, lines, top_count, fairness_const):
    state = EngineState(
        capacity_limit=capacity, fairness_const=fairness_const, lines_seen=lines, running_max_count=top_count
    )
    table = _table([top_count] + [1] * 20)
    EvictionController(state).run(table)
    assert ("000000", top_count) in list(table.entries())
