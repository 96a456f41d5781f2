"""Jump kinetics from flight time.

This module is pure logic with NO I/O and NO logging. Every input, however
malformed, maps to ``None`` or a numeric result; nothing here raises.
"""

from __future__ import annotations

import math
import numbers
import re

from cmj_kinetics.core.config import KineticsSettings
from cmj_kinetics.core.types import (
    DirectFrames,
    FrameInput,
    FrameInputError,
    FrameRange,
    FrameResolution,
    KineticsResult,
    MeasurementProfile,
    RawValue,
)

GRAVITY = 9.81  # m/s^2

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: RawValue) -> float | None:
    """Parse a form value into a finite float.

    Accepts real numbers and numeric text. Text may use a single decimal
    comma instead of a point. Empty text, booleans, ``nan`` and infinities
    do not parse.

    Args:
        value: Raw value from an input field

    Returns:
        Parsed float, or None if the value is not a finite number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")

    if not _NUMBER_RE.fullmatch(text):
        return None

    number = float(text)
    return number if math.isfinite(number) else None


def parse_positive(value: RawValue) -> float | None:
    """Parse a form value that must be strictly positive."""
    number = parse_number(value)
    if number is None or number <= 0:
        return None
    return number


def resolve_frame_count(frame_input: FrameInput) -> FrameResolution:
    """Resolve either frame input mode to a single frame count.

    Direct counts are passed through once they parse; positivity is checked
    by the flight-time gate. Ranges need both ends and ``end >= start``.

    Args:
        frame_input: Direct count or start/end frame pair

    Returns:
        FrameResolution holding the count or the input error
    """
    if isinstance(frame_input, DirectFrames):
        count = parse_number(frame_input.frame_count)
        if count is None:
            return FrameResolution(error=FrameInputError.MISSING)
        return FrameResolution(frame_count=count)

    if isinstance(frame_input, FrameRange):
        start = parse_number(frame_input.start_frame)
        end = parse_number(frame_input.end_frame)
        if start is None or end is None:
            return FrameResolution(error=FrameInputError.MISSING)
        if end < start:
            return FrameResolution(error=FrameInputError.END_BEFORE_START)
        return FrameResolution(frame_count=end - start)

    return FrameResolution(error=FrameInputError.MISSING)


class JumpKineticsCalculator:
    """Derives CMJ kinetics from a frame interval and frame rate.

    Two tiers, each gated on its own inputs:
    - Flight kinematics: flight time, jump height and takeoff velocity,
      needing a positive frame rate and frame count
    - Force: average and relative force via the work-energy theorem over
      the countermovement depth, additionally needing positive body weight,
      leg length and hip height at 90 degrees

    The force tier is withheld (fields set to None) when the countermovement
    depth is not strictly positive. A tier whose values overflow to infinity
    counts as failed.
    """

    def __init__(self, settings: KineticsSettings | None = None) -> None:
        """Initialize calculator with settings.

        Args:
            settings: Calculation constants (uses defaults if None)
        """
        self.settings = settings or KineticsSettings()

    @property
    def gravity(self) -> float:
        """Gravitational acceleration in m/s^2."""
        return self.settings.gravity

    def compute(
        self,
        fps: RawValue,
        frame_count: RawValue,
        body_weight_kg: RawValue = None,
        leg_length_cm: RawValue = None,
        height_90_degree_cm: RawValue = None,
    ) -> KineticsResult | None:
        """Compute jump kinetics.

        Args:
            fps: Video frame rate
            frame_count: Airborne frames between takeoff and landing
            body_weight_kg: Body weight, optional
            leg_length_cm: Standing leg length, optional
            height_90_degree_cm: Hip height at 90 degree knee flexion, optional

        Returns:
            KineticsResult, or None if fps or frame count is not valid
        """
        fps_value = parse_positive(fps)
        frames = parse_positive(frame_count)
        if fps_value is None or frames is None:
            return None

        g = self.gravity

        time_in_flight = frames / fps_value
        # Symmetric flight: the peak is reached at half the flight time
        jump_height_m = (1 / 8) * g * time_in_flight * time_in_flight
        takeoff_velocity = g * (time_in_flight / 2)
        if not math.isfinite(jump_height_m * 100) or not math.isfinite(time_in_flight * 1000):
            return None

        average_force, relative_force = self._compute_force(
            takeoff_velocity,
            parse_positive(body_weight_kg),
            parse_positive(leg_length_cm),
            parse_positive(height_90_degree_cm),
        )

        return KineticsResult(
            time_in_flight_s=time_in_flight,
            time_in_flight_ms=time_in_flight * 1000,
            jump_height_cm=jump_height_m * 100,
            takeoff_velocity_ms=takeoff_velocity,
            average_force_n=average_force,
            relative_force=relative_force,
        )

    def compute_from_input(
        self,
        fps: RawValue,
        frame_input: FrameInput,
        profile: MeasurementProfile | None = None,
        body_weight_kg: RawValue = None,
        leg_length_cm: RawValue = None,
        height_90_degree_cm: RawValue = None,
    ) -> KineticsResult | None:
        """Resolve a frame input and compute kinetics.

        Explicit body inputs take precedence over the profile's values.

        Args:
            fps: Video frame rate
            frame_input: Direct frame count or start/end frame pair
            profile: Stored measurements to fall back on
            body_weight_kg: Body weight override
            leg_length_cm: Leg length override
            height_90_degree_cm: Hip height override

        Returns:
            KineticsResult, or None if the frame input or fps is not valid
        """
        resolution = resolve_frame_count(frame_input)
        if not resolution.ok:
            return None

        if profile is not None:
            if _is_blank(body_weight_kg):
                body_weight_kg = profile.weight_kg
            if _is_blank(leg_length_cm):
                leg_length_cm = profile.leg_length_cm
            if _is_blank(height_90_degree_cm):
                height_90_degree_cm = profile.height_90_degree_cm

        return self.compute(
            fps,
            resolution.frame_count,
            body_weight_kg,
            leg_length_cm,
            height_90_degree_cm,
        )

    def _compute_force(
        self,
        takeoff_velocity: float,
        weight: float | None,
        leg_length: float | None,
        height_90: float | None,
    ) -> tuple[float | None, float | None]:
        """Average and relative force, or (None, None) when not computable."""
        if weight is None or leg_length is None or height_90 is None:
            return None, None

        depth_cm = leg_length - height_90
        if depth_cm <= 0:
            return None, None

        g = self.gravity
        depth_m = depth_cm / 100
        average_force = weight * g + (weight * takeoff_velocity * takeoff_velocity) / (
            2 * depth_m
        )
        relative_force = average_force / (g * weight)
        if not (math.isfinite(average_force) and math.isfinite(relative_force)):
            return None, None
        return average_force, relative_force


def _is_blank(value: RawValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def compute_kinetics(
    fps: RawValue,
    frame_count: RawValue,
    body_weight_kg: RawValue = None,
    leg_length_cm: RawValue = None,
    height_90_degree_cm: RawValue = None,
) -> KineticsResult | None:
    """Pure function to compute jump kinetics with standard gravity.

    Args:
        fps: Video frame rate
        frame_count: Airborne frames
        body_weight_kg: Body weight, optional
        leg_length_cm: Standing leg length, optional
        height_90_degree_cm: Hip height at 90 degrees, optional

    Returns:
        KineticsResult or None
    """
    calculator = JumpKineticsCalculator(KineticsSettings(gravity=GRAVITY))
    return calculator.compute(
        fps, frame_count, body_weight_kg, leg_length_cm, height_90_degree_cm
    )
