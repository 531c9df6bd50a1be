from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import CAPACITY_INCREMENT, HARSH_MODE_CAPACITY


class Mode(Enum):
    FAIR = "fair"
    HARSH = "harsh"


@dataclass(frozen=True, eq=False)
class KmerKey:
    """Composite table key: the signature hash pre-filters, the text decides.

    Two keys with the same signature hash but different text stay distinct,
    so colliding k-mers are never merged.
    """

    signature_hash: int
    text: str

    def __hash__(self) -> int:
        return hash(self.signature_hash)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KmerKey):
            return NotImplemented
        if other.signature_hash != self.signature_hash:
            return False
        return other.text == self.text


@dataclass
class EngineState:
    capacity_limit: int = 1000
    fairness_const: float = 1.25
    mode: Mode = Mode.FAIR
    lines_seen: int = 0
    running_max_count: int = 0
    harsh_mode_capacity: int = HARSH_MODE_CAPACITY
    capacity_increment: int = CAPACITY_INCREMENT

    def observe(self, count: int):
        # ratchet: eviction never lowers it
        if count > self.running_max_count:
            self.running_max_count = count


@dataclass
class EvictionReport:
    pass_no: int
    trigger: str  # "capacity" or "final"
    mode: Mode
    size_before: int
    size_after: int
    capacity_before: int
    capacity_after: int
    lines_seen: int
    running_max_count: int

    @property
    def removed(self) -> int:
        return self.size_before - self.size_after

    @property
    def raised_capacity(self) -> bool:
        return self.capacity_after > self.capacity_before

    def as_row(self) -> dict:
        return {
            "pass_no": self.pass_no,
            "trigger": self.trigger,
            "mode": self.mode.value,
            "size_before": self.size_before,
            "size_after": self.size_after,
            "removed": self.removed,
            "capacity_before": self.capacity_before,
            "capacity_after": self.capacity_after,
            "lines_seen": self.lines_seen,
            "running_max_count": self.running_max_count,
        }


class SequenceTooShort(ValueError):
    """A sequence shorter than the k-mer size was handed to the engine."""

    def __init__(self, length: int, k: int, line_no: Optional[int] = None):
        self.length = length
        self.k = k
        self.line_no = line_no
        where = f" (sequence {line_no})" if line_no is not None else ""
        super().__init__(f"sequence of length {length} is shorter than k={k}{where}")


@dataclass
class IngestSummary:
    """Outcome of feeding a source through the engine."""

    sequences: int = 0
    windows: int = 0
    skipped_empty: int = 0
    skipped_short: int = 0
    aborted: Optional[SequenceTooShort] = None
    evictions: int = 0

    @property
    def completed(self) -> bool:
        return self.aborted is None
