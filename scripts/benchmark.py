#!/usr/bin/env python3
"""
Batched Dispatch Benchmarks

Compares listener notifications and wall time for N actions delivered
three ways: one dispatch per action, a single batched dispatch, and a channel
whose limiter flushes every CHUNK_SIZE actions.

Usage:
    python scripts/benchmark.py               # Run with the default sizes
    python scripts/benchmark.py --sizes 10 1000
    python scripts/benchmark.py --config      # Show current configuration
"""

import argparse
import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, List

# Add the project root to the Python path
sys.path.insert(0, ".")

from rich.console import Console
from rich.panel import Panel
from rich.table import Table, box

from batched_dispatch import BatchedStore

# Configuration
DEFAULT_SIZES = [10, 100, 1_000, 10_000]
CHUNK_SIZE = 50
LISTENER_COUNT = 5


class CounterContainer:
    """Smallest container that satisfies the Container protocol."""

    def __init__(self):
        self._state = 0

    def dispatch(self, action):
        self._state += action["amount"]
        return action

    def subscribe(self, listener):
        return lambda: None

    def get_state(self):
        return self._state

    def replace_reducer(self, reducer):
        pass


def every(count: int):
    """Limiter factory flushing once per ``count`` queued actions."""

    def factory(flush):
        seen = [0]

        def gated(action):
            seen[0] += 1
            if seen[0] % count == 0:
                flush()

        return gated

    return factory


@dataclass
class BenchmarkResult:
    strategy: str
    n: int
    notifications: int
    elapsed_ms: float


def _make_store(notifications: List[int]) -> BatchedStore:
    store = BatchedStore(CounterContainer(), channels={"chunked": every(CHUNK_SIZE)})
    for _ in range(LISTENER_COUNT):
        store.subscribe(lambda: notifications.__setitem__(0, notifications[0] + 1))
    return store


def run_individual(store: BatchedStore, n: int) -> None:
    for _ in range(n):
        store.dispatch({"type": "add", "amount": 1})


def run_batched(store: BatchedStore, n: int) -> None:
    store.dispatch([{"type": "add", "amount": 1} for _ in range(n)])


def run_chunked(store: BatchedStore, n: int) -> None:
    for _ in range(n):
        store.dispatch({"type": "add", "amount": 1}, "chunked")
    store.clear_action_queue("chunked")


STRATEGIES: Dict[str, Callable[[BatchedStore, int], None]] = {
    "individual": run_individual,
    "batched": run_batched,
    f"channel (every {CHUNK_SIZE})": run_chunked,
}


def measure(strategy: str, n: int) -> BenchmarkResult:
    notifications = [0]
    store = _make_store(notifications)
    start = time.perf_counter()
    STRATEGIES[strategy](store, n)
    elapsed = time.perf_counter() - start
    return BenchmarkResult(strategy, n, notifications[0], elapsed * 1000)


def render(results: List[BenchmarkResult], console: Console) -> None:
    table = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold cyan")
    table.add_column("Strategy")
    table.add_column("N", justify="right")
    table.add_column("Listener calls", justify="right")
    table.add_column("Time (ms)", justify="right")
    table.add_column("µs / action", justify="right")

    for result in results:
        table.add_row(
            result.strategy,
            f"{result.n:,}",
            f"{result.notifications:,}",
            f"{result.elapsed_ms:.2f}",
            f"{result.elapsed_ms * 1000 / result.n:.2f}",
        )

    console.print(table)


def print_config():
    """Print the current benchmark configuration."""
    print("Batched Dispatch Benchmark Configuration:")
    print(f"  DEFAULT_SIZES: {DEFAULT_SIZES}")
    print(f"  CHUNK_SIZE: {CHUNK_SIZE}")
    print(f"  LISTENER_COUNT: {LISTENER_COUNT}")


def main():
    """Main entry point for the benchmark script."""
    parser = argparse.ArgumentParser(description="Batched Dispatch Benchmarks")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=DEFAULT_SIZES, help="Action counts"
    )
    parser.add_argument(
        "--config", action="store_true", help="Show current benchmark configuration"
    )
    args = parser.parse_args()

    if args.config:
        print_config()
        return

    console = Console()
    console.print(
        Panel.fit(
            f"{LISTENER_COUNT} listeners, channel flushes every {CHUNK_SIZE} actions",
            title="Batched Dispatch Benchmarks",
        )
    )

    results = [measure(strategy, n) for n in args.sizes for strategy in STRATEGIES]
    render(results, console)


if __name__ == "__main__":
    main()
