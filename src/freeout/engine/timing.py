"""
Module: engine.timing

Purpose:
    Timing instrumentation for the outline pipeline, to spot which stage
    dominates on large or deeply nested documents.

Key Classes:
    - StageTimings: Collects per-stage durations for one engine

Key Functions:
    - timed_stage: Context manager for timing a stage

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - engine.pipeline: Records stage timings when enabled
    - scripts/benchmark_outline.py: Reports per-stage averages
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class StageTimings:
    """
    Durations of pipeline stages, in seconds.

    A stage timed more than once (e.g. an engine that outlines twice)
    accumulates every run so averages can be reported.

    Attributes:
        runs: Dict of stage_name -> list of durations

    Example:
        >>> timings = StageTimings()
        >>> timings.log("range_resolution", 0.012)
        >>> timings.total("range_resolution")
        0.012
    """
    runs: Dict[str, List[float]] = field(default_factory=dict)

    def log(self, stage: str, duration: float) -> None:
        """Record one run of a stage."""
        self.runs.setdefault(stage, []).append(duration)

    def total(self, stage: Optional[str] = None) -> float:
        """Total time of one stage, or of all stages when stage is None."""
        if stage is not None:
            return sum(self.runs.get(stage, []))
        return sum(sum(durations) for durations in self.runs.values())

    def averages(self) -> Dict[str, float]:
        """Average duration per stage."""
        return {
            stage: sum(durations) / len(durations)
            for stage, durations in self.runs.items()
            if durations
        }

    def slowest_stage(self) -> Optional[str]:
        averages = self.averages()
        if not averages:
            return None
        return max(averages.items(), key=lambda x: x[1])[0]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Outline Timing Summary ==="]
        for stage, avg in sorted(self.averages().items(), key=lambda x: -x[1]):
            runs = len(self.runs[stage])
            lines.append(f"  {stage:25s} {avg * 1000:.3f}ms (x{runs})")
        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "runs": {stage: list(durations) for stage, durations in self.runs.items()},
            "averages": self.averages(),
            "slowest_stage": self.slowest_stage(),
        }


@contextmanager
def timed_stage(
    timings: Optional[StageTimings],
    stage: str,
) -> Generator[None, None, None]:
    """
    Context manager for timing a pipeline stage.

    Args:
        timings: StageTimings to record into; None disables recording
        stage: Name of the stage being timed

    Example:
        >>> timings = StageTimings()
        >>> with timed_stage(timings, "validation"):
        ...     validate_blocks(blocks)
    """
    if timings is None:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        timings.log(stage, elapsed)
        logger.debug(f"Stage {stage} took {elapsed * 1000:.3f}ms")
