"""CMJ Kinetics: countermovement-jump kinetics from video frame counts."""

from cmj_kinetics.analysis.kinetics import compute_kinetics, resolve_frame_count
from cmj_kinetics.core.types import DirectFrames, FrameRange, KineticsResult

__version__ = "0.1.0"

__all__ = [
    "compute_kinetics",
    "resolve_frame_count",
    "DirectFrames",
    "FrameRange",
    "KineticsResult",
]
