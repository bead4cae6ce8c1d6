"""
Module: ingest.timing

Purpose:
    Timing instrumentation for the ingestion pipeline to see which stage
    dominates on large folders.

Key Classes:
    - TimingLog: Collects per-phase durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)

Used By:
    - ingest.pipeline: Times each stage
    - cli: Prints the summary with --timing
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Durations of pipeline phases in seconds.

    Example:
        >>> log = TimingLog()
        >>> log.log_phase("traversal", 0.012)
        >>> log.total
        0.012
    """
    phase_timings: Dict[str, float] = field(default_factory=dict)

    def log_phase(self, phase: str, duration: float) -> None:
        """Log a phase; repeated phases accumulate."""
        self.phase_timings[phase] = self.phase_timings.get(phase, 0.0) + duration

    @property
    def total(self) -> float:
        return sum(self.phase_timings.values())

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Ingestion Timing Summary ==="]
        for phase, duration in self.phase_timings.items():
            lines.append(f"  {phase:20s} {duration:.3f}s")
        lines.append(f"  {'total':20s} {self.total:.3f}s")
        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"phase_timings": dict(self.phase_timings), "total": self.total}


@contextmanager
def timed_phase(timing_log: Optional[TimingLog], phase: str) -> Generator[None, None, None]:
    """
    Time the enclosed block and record it under phase.

    A None log makes this a no-op so callers need not branch.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        if timing_log is not None:
            timing_log.log_phase(phase, duration)
            logger.debug(f"{phase} took {duration:.3f}s")
