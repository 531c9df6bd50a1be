from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple

from .models import KmerKey


class FrequencyTable:
    """
    In-memory k-mer -> count table keyed by KmerKey(signature_hash, text).
    The bound is enforced by the eviction controller, not here.
    """

    def __init__(self):
        self._counts: Dict[KmerKey, int] = {}

    def increment(self, text: str, signature_hash: int) -> int:
        key = KmerKey(signature_hash, text)
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count

    def size(self) -> int:
        return len(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def entries(self) -> Iterator[Tuple[str, int]]:
        for key, count in self._counts.items():
            yield (key.text, count)

    def keys(self) -> Iterable[KmerKey]:
        return self._counts.keys()

    def counts(self) -> Iterable[int]:
        return self._counts.values()

    def remove(self, keys: Iterable[KmerKey]) -> int:
        removed = 0
        for key in keys:
            if self._counts.pop(key, None) is not None:
                removed += 1
        return removed
