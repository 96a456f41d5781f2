"""Core data types and structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Union

# Raw form input: free text from an entry field, or an already-typed number.
RawValue = Union[str, int, float, None]


@dataclass(frozen=True, slots=True)
class DirectFrames:
    """Frame input given as a single airborne frame count."""

    frame_count: RawValue


@dataclass(frozen=True, slots=True)
class FrameRange:
    """Frame input given as takeoff and landing frame numbers.

    The airborne frame count is ``end_frame - start_frame``.
    """

    start_frame: RawValue
    end_frame: RawValue


FrameInput = Union[DirectFrames, FrameRange]


class FrameInputError(Enum):
    """Reasons a frame input cannot be resolved to a frame count."""

    MISSING = auto()
    END_BEFORE_START = auto()

    @property
    def message(self) -> str:
        """Human-readable description for display next to the input."""
        if self is FrameInputError.END_BEFORE_START:
            return "End frame must be greater than or equal to start frame"
        return "Enter a frame count or a start and end frame"


@dataclass(frozen=True, slots=True)
class FrameResolution:
    """Outcome of resolving a frame input.

    Exactly one of ``frame_count`` and ``error`` is set.
    """

    frame_count: float | None = None
    error: FrameInputError | None = None

    @property
    def ok(self) -> bool:
        """Whether a frame count was resolved."""
        return self.error is None


@dataclass(frozen=True, slots=True)
class KineticsResult:
    """Kinetics derived from one countermovement jump.

    Attributes:
        time_in_flight_s: Airborne time in seconds
        time_in_flight_ms: Airborne time in milliseconds
        jump_height_cm: Jump height estimated from flight time
        takeoff_velocity_ms: Vertical takeoff velocity in m/s
        average_force_n: Mean propulsive force in newtons, if body inputs were valid
        relative_force: Average force as a multiple of body weight
    """

    time_in_flight_s: float
    time_in_flight_ms: float
    jump_height_cm: float
    takeoff_velocity_ms: float
    average_force_n: float | None = None
    relative_force: float | None = None

    @property
    def has_force(self) -> bool:
        """Whether the force tier was computed."""
        return self.average_force_n is not None

    def to_dict(self) -> dict[str, float | None]:
        """Plain dictionary of all result fields."""
        return asdict(self)


@dataclass(slots=True)
class MeasurementProfile:
    """Persisted anthropometric measurements for one athlete.

    Attributes:
        id: Record id assigned by the store
        name: Display name of the profile
        leg_length_cm: Standing leg length
        height_90_degree_cm: Hip height with the knee flexed to 90 degrees
        weight_kg: Body weight, optional
        created_at: When the record was created
    """

    id: int
    name: str
    leg_length_cm: float
    height_90_degree_cm: float
    weight_kg: float | None = None
    created_at: datetime | None = None

    @property
    def countermovement_depth_cm(self) -> float:
        """Hip drop from standing to 90 degrees of knee flexion."""
        return self.leg_length_cm - self.height_90_degree_cm
