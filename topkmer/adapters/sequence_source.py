from __future__ import annotations

from typing import Iterator

from Bio import SeqIO


def iter_records(path: str, fmt: str = "fastq") -> Iterator[str]:
    """Yield each record's sequence from a FASTQ/FASTA file via Biopython."""
    with open(path, "r") as fin:
        for record in SeqIO.parse(fin, fmt):
            yield str(record.seq)


def iter_lines(path: str) -> Iterator[str]:
    """
    One sequence per line. Only the first whitespace-separated token counts;
    blank lines come through as "" so the counter can skip them.
    """
    with open(path, "r") as fin:
        for line in fin:
            parts = line.split()
            yield parts[0] if parts else ""


def read_sequences(path: str, fmt: str = "fastq") -> Iterator[str]:
    if fmt in ("fastq", "fasta"):
        return iter_records(path, fmt)
    if fmt == "lines":
        return iter_lines(path)
    raise ValueError(f"unsupported input format: {fmt}")
