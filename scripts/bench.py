#!/usr/bin/env python3
"""Benchmark system generation throughput."""

from __future__ import annotations

import argparse
import random
import time

from iitsim.core.config import GridConfig
from iitsim.topology import Architecture, TopologyGenerator


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark system generation.")
    parser.add_argument("--elements", type=int, default=16)
    parser.add_argument("--columns", type=int, default=4)
    parser.add_argument("--iterations", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    generator = TopologyGenerator(
        grid=GridConfig(element_count=args.elements, columns=args.columns),
        rng=random.Random(args.seed),
    )

    print(f"Elements: {args.elements} ({args.columns} columns)")
    print(f"Iterations: {args.iterations}")

    for arch in Architecture:
        start = time.perf_counter()
        for _ in range(args.iterations):
            system = generator.generate(arch)
        duration = time.perf_counter() - start
        rate = args.iterations / duration if duration > 0 else 0

        print(
            f"{arch.value:<11} {duration:.3f}s  {rate:,.0f} systems/sec  "
            f"({len(system.edges())} edges)"
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
