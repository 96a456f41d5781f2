"""Core infrastructure: config, types, exceptions, and logging."""

from cmj_kinetics.core.config import Settings, get_settings
from cmj_kinetics.core.exceptions import (
    CmjKineticsError,
    RecordNotFoundError,
    RecordValidationError,
    UnauthorizedError,
)
from cmj_kinetics.core.logging import get_logger, setup_logging
from cmj_kinetics.core.types import (
    DirectFrames,
    FrameInput,
    FrameInputError,
    FrameRange,
    FrameResolution,
    KineticsResult,
    MeasurementProfile,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "DirectFrames",
    "FrameRange",
    "FrameInput",
    "FrameInputError",
    "FrameResolution",
    "KineticsResult",
    "MeasurementProfile",
    # Exceptions
    "CmjKineticsError",
    "UnauthorizedError",
    "RecordValidationError",
    "RecordNotFoundError",
    # Logging
    "setup_logging",
    "get_logger",
]
