#!/usr/bin/env python3
"""Generate sample JSON exports of every architecture for demos/tests."""

from __future__ import annotations

import argparse
from pathlib import Path

from iitsim.core.config import get_config
from iitsim.core.utils import ensure_results_dir
from iitsim.output import export_json
from iitsim.topology import Architecture, TopologyGenerator, calculate_metrics


def _sample_system(generator: TopologyGenerator, architecture: Architecture) -> dict:
    system = generator.generate(architecture)
    data = system.to_dict()
    data["metrics"] = calculate_metrics(system).to_dict()
    return data


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate sample JSON outputs.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output-dir", default=None)
    args = parser.parse_args()

    generator = TopologyGenerator.from_config(get_config(), seed=args.seed)

    results_dir = Path(args.output_dir) if args.output_dir else ensure_results_dir()
    for arch in Architecture:
        export_json(_sample_system(generator, arch), str(results_dir / f"sample_{arch.value}.json"))

    print(f"Sample data written to {results_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
