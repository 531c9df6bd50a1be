from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord


ALPHABET = np.array(list("ATCG"))


def synthetic_reads(
    n_reads: int = 100,
    min_len: int = 500,
    max_len: int = 1000,
    polya_min: int = 100,
    polya_max: int = 300,
    seed: Optional[int] = None,
) -> List[str]:
    """Random ATCG reads, each followed by a poly-A tail.

    The shared tail makes runs of A the dominant k-mers, which gives the
    counter a known answer to recover.
    """
    rng = np.random.default_rng(seed)
    reads: List[str] = []
    for _ in range(n_reads):
        body_len = int(rng.integers(min_len, max_len + 1))
        tail_len = int(rng.integers(polya_min, polya_max + 1))
        body = "".join(rng.choice(ALPHABET, size=body_len))
        reads.append(body + "A" * tail_len)
    return reads


def distinct_kmers(n: int, k: int = 30, seed: Optional[int] = None) -> List[str]:
    """`n` pairwise-distinct random sequences of length k."""
    rng = np.random.default_rng(seed)
    out: List[str] = []
    seen = set()
    while len(out) < n:
        s = "".join(rng.choice(ALPHABET, size=k))
        if s in seen:
            continue
        seen.add(s)
        out.append(s)
    return out


def write_fastq(reads: Iterable[str], path: str, quality: int = 5) -> int:
    records = (
        SeqRecord(Seq(seq), id=f"seq{i}", description="", letter_annotations={"phred_quality": [quality] * len(seq)})
        for i, seq in enumerate(reads)
    )
    with open(path, "w") as fout:
        return SeqIO.write(records, fout, "fastq")
