"""
Weak-heap Command-Line Interface (CLI)

Small front-end over the weak heap:
- sort lines of text with weak-heapsort
- print the k largest lines
- run the comparison-count benchmark against a binary heap

Usage examples:
    python -m weakheap.cli sort --path words.txt
    cat words.txt | python -m weakheap.cli top -k 10
    python -m weakheap.cli bench --output weak_heap_performance.csv --rounds 6
"""

import argparse
import logging
import sys

from . import bench
from .datastructures import WeakHeap

logger = logging.getLogger(__name__)


def read_lines(path):
    """Return the lines of `path` (or stdin when no path is given) without newlines."""
    if path is None:
        return [line.rstrip("\n") for line in sys.stdin]
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\n") for line in f]


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------
def cmd_sort(args):
    """Sort input lines with weak-heapsort."""
    lines = read_lines(args.path)
    result = WeakHeap(lines).into_sorted_list()
    if args.reverse:
        result.reverse()
    for line in result:
        print(line)


def cmd_top(args):
    """Print the k largest input lines, largest first."""
    if args.k < 0:
        raise SystemExit("-k must be >= 0")
    heap = WeakHeap(read_lines(args.path))
    logger.debug("selecting top %d of %d lines", args.k, len(heap))
    for _ in range(args.k):
        line = heap.pop()
        if line is None:
            break
        print(line)


def cmd_bench(args):
    """Run the benchmark and summarise each row."""
    rows = bench.run_benchmarks(
        args.output,
        base_input=args.base_input,
        rounds=args.rounds,
        iterations=args.iterations,
        seed=args.seed,
    )
    for size, op_name, heap_name, avg_time, std_time, avg_cmp in rows:
        print(f"{op_name:<10} | {heap_name:<6} | Size: {size:<8} | Avg Time: {avg_time} ms | "
              f"Std: {std_time} ms | Comparisons: {avg_cmp}")
    print(f"\nBenchmark completed. Results saved to {args.output}")


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="python -m weakheap.cli", description="Weak heap CLI")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("sort", help="Sort lines with weak-heapsort")
    s.add_argument("--path", default=None, help="Input file (default: stdin)")
    s.add_argument("--reverse", action="store_true")
    s.set_defaults(func=cmd_sort)

    s = sub.add_parser("top", help="Print the k largest lines")
    s.add_argument("-k", type=int, default=10)
    s.add_argument("--path", default=None, help="Input file (default: stdin)")
    s.set_defaults(func=cmd_top)

    s = sub.add_parser("bench", help="Compare weak and binary heaps")
    s.add_argument("--output", default=bench.DEFAULT_OUTPUT_CSV)
    s.add_argument("--base-input", type=int, default=bench.DEFAULT_BASE_INPUT)
    s.add_argument("--rounds", type=int, default=bench.DEFAULT_ROUNDS)
    s.add_argument("--iterations", type=int, default=bench.DEFAULT_ITERATIONS)
    s.add_argument("--seed", type=int, default=None)
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m weakheap.cli`."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
