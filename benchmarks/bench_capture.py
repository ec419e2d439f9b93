#!/usr/bin/env python3
"""
Error construction and rendering benchmarks.

Measures how construction cost grows with call-stack depth, since every
node captures its backtrace inline.
"""

import time
from typing import Any

from witcher import Error, RenderOptions


def at_depth(depth: int, fn: Any) -> Any:
    """Call fn with depth extra frames on the stack."""
    if depth <= 0:
        return fn()
    return at_depth(depth - 1, fn)


def benchmark_construct(depth: int, iterations: int = 2000) -> dict[str, Any]:
    """Benchmark origin construction at a given stack depth."""
    start = time.perf_counter()
    for _ in range(iterations):
        at_depth(depth, lambda: Error("oh no!"))
    elapsed = time.perf_counter() - start

    return {
        "name": f"Error() at depth {depth}",
        "iterations": iterations,
        "elapsed_seconds": elapsed,
        "throughput_ops": iterations / elapsed,
        "latency_us": (elapsed / iterations) * 1_000_000,
    }


def benchmark_render(links: int, iterations: int = 2000) -> dict[str, Any]:
    """Benchmark full rendering of a chain with the given number of links."""
    err = Error("root")
    for i in range(links - 1):
        err = Error.wrap(err, f"ctx{i}")
    options = RenderOptions.plain()

    start = time.perf_counter()
    for _ in range(iterations):
        err.full(options)
    elapsed = time.perf_counter() - start

    return {
        "name": f"full() with {links} links",
        "iterations": iterations,
        "elapsed_seconds": elapsed,
        "throughput_ops": iterations / elapsed,
        "latency_us": (elapsed / iterations) * 1_000_000,
    }


def print_result(result: dict[str, Any]) -> None:
    """Print benchmark result."""
    print(f"\n{result['name']}")
    print("-" * 50)
    print(f"  Iterations:  {result['iterations']:,}")
    print(f"  Elapsed:     {result['elapsed_seconds']:.4f}s")
    print(f"  Throughput:  {result['throughput_ops']:,.0f} ops/s")
    print(f"  Latency:     {result['latency_us']:.2f} µs")


def main() -> None:
    """Run all benchmarks."""
    print("=" * 60)
    print("witcher construction and rendering benchmarks")
    print("=" * 60)

    for depth in (0, 10, 50, 100):
        print_result(benchmark_construct(depth))

    for links in (1, 5, 20):
        print_result(benchmark_render(links))


if __name__ == "__main__":
    main()
