from __future__ import annotations

from typing import Iterator, Optional, Tuple


class RollingHash:
    """
    Additive rolling hash over fixed-length windows.

    raw hash is the sum of character codes, updated in O(1) when the window
    slides by one position. The signature hash adds the first, last and middle
    characters on top of it; it is a cheap disambiguator and collisions are
    expected (the table compares text on a hash match).
    """

    def __init__(self, k: int):
        if k < 1:
            raise ValueError("k must be >= 1")
        self.k = k
        self._mid = k // 2

    def raw(self, window: str) -> int:
        return sum(ord(c) for c in window)

    def signature(self, window: str, raw_hash: int) -> int:
        return raw_hash + ord(window[0]) + ord(window[-1]) + ord(window[self._mid])

    def next(
        self,
        window: str,
        prev_raw_hash: Optional[int] = None,
        prev_first_char: Optional[str] = None,
    ) -> Tuple[int, int]:
        """Return (raw_hash, signature_hash) for `window`.

        When `prev_raw_hash` is given, `window` must be the previous window
        shifted right by exactly one character and `prev_first_char` the
        character that left it.
        """
        if prev_raw_hash is None:
            raw_hash = self.raw(window)
        else:
            raw_hash = prev_raw_hash + ord(window[-1]) - ord(prev_first_char)
        return raw_hash, self.signature(window, raw_hash)

    def from_scratch(self, window: str) -> Tuple[int, int]:
        return self.next(window)

    def windows(self, seq: str) -> Iterator[Tuple[str, int]]:
        """Yield (window, signature_hash) for every length-k window of `seq`."""
        k = self.k
        prev_raw: Optional[int] = None
        prev_first: Optional[str] = None
        for i in range(len(seq) - k + 1):
            window = seq[i:i + k]
            raw_hash, sig = self.next(window, prev_raw, prev_first)
            yield window, sig
            prev_raw = raw_hash
            prev_first = window[0]
