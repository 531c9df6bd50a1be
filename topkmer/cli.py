from __future__ import annotations

import argparse
import os
import sys
import time
from typing import Iterable, Iterator, List, Optional

import pandas as pd

from topkmer.adapters.report_sink import format_top, write_ranking
from topkmer.adapters.sequence_source import read_sequences
from topkmer.config import INPUT_FORMATS, load_config_typed
from topkmer.counter.engine import KmerCounter
from topkmer.telemetry.logger import TelemetryLogger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description='Report the most frequent k-mers of a sequence file.')
    ap.add_argument('input', help='Input sequence file')
    ap.add_argument('--config', default='configs/topkmer.yaml', help='YAML config file')
    ap.add_argument('-k', '--k', dest='k', type=int, help='k-mer size')
    ap.add_argument('-n', '--top', type=int, help='How many k-mers to print')
    ap.add_argument('-f', '--fairness', type=float, help='Fairness constant (1.0 - 2.0)')
    ap.add_argument('-o', '--output', help='File receiving the full ranking')
    ap.add_argument('--format', choices=INPUT_FORMATS, help='Input format')
    ap.add_argument('--capacity', type=int, help='Initial table capacity limit')
    ap.add_argument('--skip-short', dest='skip_short', action='store_true',
                    help='Skip sequences shorter than k instead of aborting')
    ap.add_argument('--abort-short', dest='skip_short', action='store_false')
    ap.add_argument('--telemetry-dir', help='Append eviction telemetry CSVs here')
    ap.add_argument('--progress-every', type=int, help='Print progress every N sequences (0 disables)')
    ap.set_defaults(skip_short=None)
    return ap.parse_args(argv)


def with_progress(sequences: Iterable[str], every: int) -> Iterator[str]:
    for i, seq in enumerate(sequences, start=1):
        if every > 0 and i % every == 0:
            print(f"Processing.. at sequence {i}")
        yield seq


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config_typed(config_path=args.config)
    # Apply CLI overrides
    if args.k is not None:
        cfg.engine.k_mer_size = int(args.k)
    if args.top is not None:
        cfg.engine.top_n = int(args.top)
    if args.fairness is not None:
        cfg.engine.fairness_const = float(args.fairness)
    if args.capacity is not None:
        cfg.engine.initial_capacity_limit = int(args.capacity)
    if args.skip_short is not None:
        cfg.engine.short_sequence_policy = 'skip' if args.skip_short else 'abort'
    if args.output is not None:
        cfg.output.path = args.output
    if args.format is not None:
        cfg.input_format = args.format
    if args.progress_every is not None:
        cfg.progress_every = int(args.progress_every)
    if args.telemetry_dir is not None:
        cfg.telemetry.enabled = True
        cfg.telemetry.base_dir = args.telemetry_dir

    try:
        cfg.validate()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    if not os.path.isfile(args.input):
        print(f"There is a problem with the file, please check it: {args.input}", file=sys.stderr)
        return 2

    k = cfg.engine.k_mer_size
    counter = KmerCounter(cfg.engine, report_limit=None if cfg.telemetry.enabled else 0)
    t0 = time.perf_counter()
    summary = counter.ingest(with_progress(read_sequences(args.input, cfg.input_format), cfg.progress_every))
    if summary.aborted is not None:
        print(f"Given DNA sequence is shorter than {k} chars. Aborting..")
    elif summary.skipped_short:
        print(f"Skipped {summary.skipped_short} sequences shorter than {k} chars.")
    counter.finish()
    elapsed = time.perf_counter() - t0

    print()
    print(f"Substring search took: {elapsed:.3f} sec")
    ranked = counter.ranking()
    write_ranking(ranked, cfg.output.path, cfg.output.separator)
    print(f"The results are written to file: {cfg.output.path}")

    print()
    for line in format_top(counter.top(), k, cfg.output.separator):
        print(line)

    if cfg.telemetry.enabled:
        st = counter.state
        run_df = pd.DataFrame([{
            'input': args.input,
            'k_mer_size': k,
            'sequences': summary.sequences,
            'windows': summary.windows,
            'skipped_empty': summary.skipped_empty,
            'skipped_short': summary.skipped_short,
            'aborted': not summary.completed,
            'evictions': counter.controller.passes,
            'final_capacity_limit': st.capacity_limit,
            'final_mode': st.mode.value,
            'running_max_count': st.running_max_count,
            'surviving_kmers': len(ranked),
            'elapsed_s': elapsed,
        }])
        TelemetryLogger(cfg.telemetry.base_dir).log_run(
            counter.reports_frame(), run_df, run_id=time.strftime('%Y%m%d-%H%M%S'))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
