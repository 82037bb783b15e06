"""
Benchmark script for the outline pipeline.
Measures how outline time scales with the number of headings.
"""

import logging
import statistics
import sys
import time
from pathlib import Path
from typing import Dict, List

# Add src to path so we can import freeout
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from freeout.engine import OutlineConfig, OutlineEngine  # noqa: E402

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger("benchmark")

DEFAULT_SIZES = [100, 200, 400, 800, 1600]


def build_document(groups: int, levels: int = 5) -> str:
    """Markdown with ``groups`` repeats of headings at levels 1..levels."""
    lines = []
    for i in range(groups):
        for level in range(1, levels + 1):
            lines.append(f"{'#' * level} Title {i}")
            lines.append(f"Body text for section {i} at level {level}.")
    return "\n".join(lines) + "\n"


def benchmark_outline(groups: int, iterations: int = 5) -> Dict[str, float]:
    """Benchmark outlining one document size."""
    source = build_document(groups)
    config = OutlineConfig(record_timings=True)
    times: List[float] = []

    for _ in range(iterations):
        engine = OutlineEngine(source, config)
        start = time.perf_counter()
        outline = engine.outline("markdown")
        times.append(time.perf_counter() - start)

    avg_time = statistics.mean(times)
    logger.info(
        f"N={groups:5d}: {len(engine.blocks):6d} blocks, {len(outline.items)} roots, "
        f"avg {avg_time * 1000:.2f}ms (min {min(times) * 1000:.2f}ms, "
        f"max {max(times) * 1000:.2f}ms)"
    )
    if engine.timings is not None:
        logger.debug(engine.timings.summary())
    return {"groups": groups, "average": avg_time, "per_block": avg_time / len(engine.blocks)}


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Benchmark outline depth scaling")
    parser.add_argument("--sizes", type=int, nargs="+", default=DEFAULT_SIZES,
                        help="Number of 5-level heading groups per document")
    parser.add_argument("--iterations", type=int, default=5, help="Runs per size")
    parser.add_argument("--verbose", action="store_true", help="Show per-stage timings")

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    print("\n--- Benchmarking Outline (depth scaling) ---")
    results = [benchmark_outline(n, args.iterations) for n in args.sizes]

    # Roughly constant per-block time means linear scaling
    print("\nPer-block time:")
    for result in results:
        print(f"  N={result['groups']:5d}: {result['per_block'] * 1e6:.2f}us")
