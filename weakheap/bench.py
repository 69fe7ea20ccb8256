"""
Comparison-count benchmark: WeakHeap against a classical BinaryHeap.

The weak heap trades extra index arithmetic for fewer element comparisons, so
wall-clock time alone says little about plain integers. Elements here are
random strings behind a shared prefix (every comparison has to walk past it)
and every ``<`` is counted.

Usage:
    python -m weakheap.cli bench --output weak_heap_performance.csv
"""

import csv
import logging
import random
import statistics
import string
import time
from typing import Callable, Dict, List, Optional

from .datastructures import BinaryHeap, WeakHeap

logger = logging.getLogger(__name__)

# Defaults shared with the CLI
DEFAULT_BASE_INPUT = 100
DEFAULT_ROUNDS = 8
DEFAULT_ITERATIONS = 3
DEFAULT_OUTPUT_CSV = "weak_heap_performance.csv"
STRING_PREFIX = "collation-key/" * 4
STRING_LENGTH = 12

HEAPS = {
    "weak": WeakHeap,
    "binary": BinaryHeap,
}

# ----------------------------
# Comparison counting
# ----------------------------

class ComparisonCounter:
    """Shared tally of ``<`` calls."""

    __slots__ = ("count",)

    def __init__(self) -> None:
        self.count = 0


class CountingKey:
    """Wraps a value and records every ``<`` on a `ComparisonCounter`."""

    __slots__ = ("value", "counter")

    def __init__(self, value, counter: ComparisonCounter) -> None:
        self.value = value
        self.counter = counter

    def __lt__(self, other: "CountingKey") -> bool:
        self.counter.count += 1
        return self.value < other.value

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"CountingKey({self.value!r})"

# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_strings(size: int, length: int = STRING_LENGTH, seed: Optional[int] = None) -> List[str]:
    """Generate `size` random strings sharing a long common prefix."""
    rng = random.Random(seed)
    alphabet = string.ascii_lowercase
    return [STRING_PREFIX + "".join(rng.choice(alphabet) for _ in range(length)) for _ in range(size)]

# ----------------------------
# Operations to Benchmark
# ----------------------------

def run_push_pop(heap_cls, data):
    heap = heap_cls()
    for item in data:
        heap.push(item)
    while len(heap) > 0:
        heap.pop()
    return heap


def run_heapsort(heap_cls, data):
    return heap_cls(data).into_sorted_list()


def run_pushpop(heap_cls, data):
    heap = heap_cls(data)
    for item in data:
        heap.pushpop(item)
    return heap


OPERATIONS: Dict[str, Callable] = {
    "push_pop": run_push_pop,
    "heapsort": run_heapsort,
    "pushpop": run_pushpop,
}

# ----------------------------
# Benchmark Runner
# ----------------------------

def measure(operation: Callable, heap_cls, input_size: int, iterations: int = DEFAULT_ITERATIONS,
            seed: Optional[int] = None) -> Dict[str, float]:
    """Run `operation` on fresh data `iterations` times.

    Returns average + std deviation (ms) and the average comparison count.
    """
    times = []
    comparisons = []
    for i in range(iterations):
        counter = ComparisonCounter()
        round_seed = None if seed is None else seed + i
        data = [CountingKey(s, counter) for s in generate_random_strings(input_size, seed=round_seed)]
        start = time.perf_counter()
        operation(heap_cls, data)
        end = time.perf_counter()
        times.append((end - start) * 1000)  # convert to milliseconds
        comparisons.append(counter.count)

    return {
        "avg_time": statistics.mean(times),
        "std_time": statistics.stdev(times) if len(times) > 1 else 0.0,
        "avg_comparisons": statistics.mean(comparisons),
    }


def run_benchmarks(output_file: str, base_input: int = DEFAULT_BASE_INPUT, rounds: int = DEFAULT_ROUNDS,
                   iterations: int = DEFAULT_ITERATIONS, seed: Optional[int] = None) -> List[list]:
    """Run exponential input sizes for every operation and heap; write a CSV report."""
    if base_input <= 0 or rounds <= 0 or iterations <= 0:
        raise ValueError("base_input, rounds and iterations must be positive")

    input_sizes = [base_input * (2 ** i) for i in range(rounds)]
    rows = []

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow([
            "Input Size",
            "Operation",
            "Heap",
            "Average Time (ms)",
            "Standard Deviation (ms)",
            "Average Comparisons",
        ])

        for op_name, op_func in OPERATIONS.items():
            for size in input_sizes:
                for heap_name, heap_cls in HEAPS.items():
                    m = measure(op_func, heap_cls, size, iterations, seed)
                    row = [size, op_name, heap_name, f"{m['avg_time']:.3f}", f"{m['std_time']:.3f}",
                           f"{m['avg_comparisons']:.0f}"]
                    writer.writerow(row)
                    rows.append(row)
                    logger.debug("%s/%s size=%d: %.3f ms, %.0f comparisons",
                                 op_name, heap_name, size, m["avg_time"], m["avg_comparisons"])

    logger.info("benchmark results saved to %s", output_file)
    return rows
