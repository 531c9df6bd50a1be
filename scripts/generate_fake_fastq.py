from __future__ import annotations

import argparse

from topkmer.sim.utils import synthetic_reads, write_fastq


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('output', help='FASTQ file to write')
    ap.add_argument('reads', type=int, help='Number of reads')
    ap.add_argument('--min-len', type=int, default=500)
    ap.add_argument('--max-len', type=int, default=1000)
    ap.add_argument('--polya-min', type=int, default=100)
    ap.add_argument('--polya-max', type=int, default=300)
    ap.add_argument('--seed', type=int, default=None)
    args = ap.parse_args()
    reads = synthetic_reads(args.reads, args.min_len, args.max_len, args.polya_min, args.polya_max, seed=args.seed)
    n = write_fastq(reads, args.output)
    print('Wrote', n, 'reads to', args.output)


if __name__ == '__main__':
    main()
