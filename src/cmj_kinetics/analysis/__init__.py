"""Pure analysis logic: jump kinetics, frame-input resolution, and batches.

This module contains NO I/O operations.
All functions operate on typed dataclasses and return results.
"""

from cmj_kinetics.analysis.batch import compute_batch, summarize
from cmj_kinetics.analysis.kinetics import (
    JumpKineticsCalculator,
    compute_kinetics,
    resolve_frame_count,
)

__all__ = [
    "JumpKineticsCalculator",
    "compute_kinetics",
    "resolve_frame_count",
    "compute_batch",
    "summarize",
]
