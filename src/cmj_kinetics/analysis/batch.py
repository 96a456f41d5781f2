"""Vectorised kinetics for many trials at once.

Element-wise semantics match ``JumpKineticsCalculator.compute``; invalid
entries become NaN instead of None. This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from cmj_kinetics.analysis.kinetics import GRAVITY, parse_positive
from cmj_kinetics.core.types import KineticsResult, RawValue

FloatArray = NDArray[np.float64]


@dataclass(frozen=True)
class BatchKinetics:
    """Kinetics for a batch of trials, one array entry per trial.

    Rows whose flight gate failed are NaN in every field; rows whose force
    gate failed are NaN in the force fields only.
    """

    time_in_flight_s: FloatArray
    jump_height_cm: FloatArray
    takeoff_velocity_ms: FloatArray
    average_force_n: FloatArray
    relative_force: FloatArray

    def __len__(self) -> int:
        return int(self.time_in_flight_s.shape[0])

    @property
    def valid(self) -> NDArray[np.bool_]:
        """Mask of trials with a flight-kinematics result."""
        return ~np.isnan(self.time_in_flight_s)

    def rows(self) -> Iterator[KineticsResult | None]:
        """Yield per-trial results in the scalar API's shape."""
        for i in range(len(self)):
            t = self.time_in_flight_s[i]
            if np.isnan(t):
                yield None
                continue
            yield KineticsResult(
                time_in_flight_s=float(t),
                time_in_flight_ms=float(t) * 1000,
                jump_height_cm=float(self.jump_height_cm[i]),
                takeoff_velocity_ms=float(self.takeoff_velocity_ms[i]),
                average_force_n=_none_if_nan(self.average_force_n[i]),
                relative_force=_none_if_nan(self.relative_force[i]),
            )


@dataclass(frozen=True)
class BatchSummary:
    """Summary of a batch of trials."""

    total_trials: int
    valid_trials: int
    best_height_cm: float | None
    mean_height_cm: float | None
    best_relative_force: float | None


def _none_if_nan(value: float) -> float | None:
    return None if np.isnan(value) else float(value)


def _to_array(values: Sequence[RawValue] | RawValue, size: int) -> FloatArray:
    """Parse raw values into a float array of strictly positive numbers or NaN.

    A scalar is broadcast to ``size`` entries.
    """
    if values is None or isinstance(values, (str, int, float)):
        values = [values] * size

    if len(values) != size:
        raise ValueError(f"Expected {size} values, got {len(values)}")

    parsed = [parse_positive(v) for v in values]
    return np.array([np.nan if p is None else p for p in parsed], dtype=np.float64)


def compute_batch(
    fps: Sequence[RawValue] | RawValue,
    frame_counts: Sequence[RawValue],
    body_weight_kg: Sequence[RawValue] | RawValue = None,
    leg_length_cm: Sequence[RawValue] | RawValue = None,
    height_90_degree_cm: Sequence[RawValue] | RawValue = None,
    gravity: float = GRAVITY,
) -> BatchKinetics:
    """Compute kinetics for a batch of trials.

    Scalar arguments apply to every trial (e.g. one frame rate for a whole
    session, one athlete's measurements).

    Args:
        fps: Frame rate per trial, or one for all
        frame_counts: Airborne frames per trial
        body_weight_kg: Body weight per trial, or one for all
        leg_length_cm: Leg length per trial, or one for all
        height_90_degree_cm: Hip height at 90 degrees per trial, or one for all
        gravity: Gravitational acceleration in m/s^2

    Returns:
        BatchKinetics with one entry per trial

    Raises:
        ValueError: If a per-trial sequence has the wrong length
    """
    size = len(frame_counts)
    fps_arr = _to_array(fps, size)
    frames = _to_array(frame_counts, size)
    weight = _to_array(body_weight_kg, size)
    leg = _to_array(leg_length_cm, size)
    hip = _to_array(height_90_degree_cm, size)

    # NaN propagates through every invalid row
    with np.errstate(over="ignore"):
        time_in_flight = frames / fps_arr
        jump_height_cm = (1 / 8) * gravity * time_in_flight**2 * 100
        takeoff_velocity = gravity * (time_in_flight / 2)
        overflowed = ~np.isfinite(jump_height_cm) | ~np.isfinite(time_in_flight * 1000)

    # Rows that overflowed fail the flight gate, as in the scalar path
    time_in_flight[overflowed] = np.nan
    jump_height_cm[overflowed] = np.nan
    takeoff_velocity[overflowed] = np.nan

    depth_m = (leg - hip) / 100
    force_ok = ~np.isnan(takeoff_velocity) & ~np.isnan(weight) & (depth_m > 0)

    average_force = np.full(size, np.nan)
    relative_force = np.full(size, np.nan)
    w = weight[force_ok]
    v = takeoff_velocity[force_ok]
    with np.errstate(over="ignore", invalid="ignore"):
        average_force[force_ok] = w * gravity + (w * v * v) / (2 * depth_m[force_ok])
        relative_force[force_ok] = average_force[force_ok] / (gravity * w)

    force_overflowed = ~np.isfinite(average_force) | ~np.isfinite(relative_force)
    average_force[force_overflowed] = np.nan
    relative_force[force_overflowed] = np.nan

    return BatchKinetics(
        time_in_flight_s=time_in_flight,
        jump_height_cm=jump_height_cm,
        takeoff_velocity_ms=takeoff_velocity,
        average_force_n=average_force,
        relative_force=relative_force,
    )


def summarize(batch: BatchKinetics) -> BatchSummary:
    """Summarize a batch of trials.

    Args:
        batch: Computed batch kinetics

    Returns:
        BatchSummary; statistics are None when no trial was valid
    """
    heights = batch.jump_height_cm[batch.valid]
    forces = batch.relative_force[~np.isnan(batch.relative_force)]

    return BatchSummary(
        total_trials=len(batch),
        valid_trials=int(heights.size),
        best_height_cm=float(heights.max()) if heights.size else None,
        mean_height_cm=float(heights.mean()) if heights.size else None,
        best_relative_force=float(forces.max()) if forces.size else None,
    )
