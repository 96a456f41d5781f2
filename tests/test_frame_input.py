"""Tests for frame input resolution."""

from __future__ import annotations

from cmj_kinetics.analysis.kinetics import resolve_frame_count
from cmj_kinetics.core.types import DirectFrames, FrameInputError, FrameRange


class TestDirectFrames:
    """Direct frame count mode."""

    def test_passes_count_through(self) -> None:
        """A numeric count resolves to itself."""
        resolution = resolve_frame_count(DirectFrames("30"))

        assert resolution.ok
        assert resolution.frame_count == 30.0
        assert resolution.error is None

    def test_non_positive_count_left_to_compute(self) -> None:
        """Positivity is checked by the calculation, not the resolver."""
        resolution = resolve_frame_count(DirectFrames(-5))

        assert resolution.ok
        assert resolution.frame_count == -5.0

    def test_blank_count_is_missing(self) -> None:
        """Empty input cannot be resolved."""
        resolution = resolve_frame_count(DirectFrames(""))

        assert not resolution.ok
        assert resolution.error is FrameInputError.MISSING
        assert resolution.frame_count is None


class TestFrameRange:
    """Start/end frame mode."""

    def test_derives_count(self) -> None:
        """Count is end minus start."""
        resolution = resolve_frame_count(FrameRange(start_frame="10", end_frame="40"))

        assert resolution.ok
        assert resolution.frame_count == 30.0

    def test_equal_ends_give_zero(self) -> None:
        """End equal to start is allowed and yields zero frames."""
        resolution = resolve_frame_count(FrameRange(12, 12))

        assert resolution.ok
        assert resolution.frame_count == 0.0

    def test_end_before_start(self) -> None:
        """A reversed range reports its own error."""
        resolution = resolve_frame_count(FrameRange(40, 10))

        assert not resolution.ok
        assert resolution.error is FrameInputError.END_BEFORE_START
        assert "greater than or equal to start" in resolution.error.message

    def test_missing_end(self) -> None:
        """Both ends are required."""
        resolution = resolve_frame_count(FrameRange("10", ""))

        assert resolution.error is FrameInputError.MISSING
