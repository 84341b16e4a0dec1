"""
Module: timing

Purpose:
    Timing instrumentation for the stitch/slice pipeline to spot slow
    stages (decoding, resampling, encoding) on large inputs.

Key Classes:
    - TimingLog: Collects per-stage and per-image durations

Key Functions:
    - timed_stage: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - stitching.compositor: Per-image crop/resample timings
    - slicing.controller: Encode timings
    - pipeline: Whole-run summary
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Timing metrics for one pipeline run.

    Stage timings accumulate, so timing the same stage twice adds the
    durations. Safe to use from worker threads.

    Attributes:
        stage_timings: Dict of stage_name -> duration_seconds
        image_timings: Dict of image_id -> {stage_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> with timed_stage(log, "stitch"):
        ...     composite = stitch_images(images)
        >>> print(log.summary())
    """
    stage_timings: Dict[str, float] = field(default_factory=dict)
    image_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def log_stage(self, stage: str, duration: float) -> None:
        """Log a pipeline-level timing metric."""
        with self._lock:
            self.stage_timings[stage] = self.stage_timings.get(stage, 0.0) + duration

    def log_image(self, image_id: str, stage: str, duration: float) -> None:
        """Log an image-level timing metric."""
        with self._lock:
            phases = self.image_timings.setdefault(image_id, {})
            phases[stage] = phases.get(stage, 0.0) + duration

    @property
    def total(self) -> float:
        return sum(self.stage_timings.values())

    def get_slowest_images(self, n: int = 3) -> List[Tuple[str, float]]:
        """Get the N slowest images with their total time."""
        totals = [(image_id, sum(phases.values())) for image_id, phases in self.image_timings.items()]
        totals.sort(key=lambda x: x[1], reverse=True)
        return totals[:n]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Pipeline Timing Summary ==="]
        for stage, duration in self.stage_timings.items():
            lines.append(f"  {stage:25s} {duration:.3f}s")

        slowest = self.get_slowest_images(3)
        if slowest:
            lines.append("")
            lines.append("Slowest images:")
            for image_id, total in slowest:
                lines.append(f"  {image_id}: {total:.3f}s")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "stage_timings": dict(self.stage_timings),
            "image_timings": {k: dict(v) for k, v in self.image_timings.items()},
            "total": self.total,
        }


@contextmanager
def timed_stage(
    log: Optional[TimingLog],
    stage: str,
    image_id: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Time a block and record it on `log`.

    With log=None the block runs untimed, so callers can pass an
    optional log straight through.
    """
    if log is None:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        if image_id is None:
            log.log_stage(stage, duration)
        else:
            log.log_image(image_id, stage, duration)
