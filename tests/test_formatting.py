"""Tests for result formatting."""

from __future__ import annotations

import pytest

from cmj_kinetics.analysis.kinetics import compute_kinetics
from cmj_kinetics.core.config import DisplaySettings
from cmj_kinetics.core.types import FrameInputError, MeasurementProfile
from cmj_kinetics.ui.formatting import (
    FLIGHT_PLACEHOLDER,
    FORCE_PLACEHOLDER,
    ResultFormatter,
    format_number,
    render_profiles,
)


class TestFormatNumber:
    """Tests for number formatting."""

    @pytest.mark.parametrize(
        "value, decimals, expected",
        [
            (12.5, 2, "12.5"),
            (12.0, 2, "12"),
            (100, 2, "100"),
            (1586.7675, 2, "1586.77"),
            (2.021875, 3, "2.022"),
            (0.0, 2, "0"),
            ("12,50", 2, "12.5"),
            ("98.456", 1, "98.5"),
            (100, 0, "100"),
            (-0.001, 2, "0"),
        ],
    )
    def test_formats(self, value, decimals, expected) -> None:
        """Rounds then strips trailing zeros."""
        assert format_number(value, decimals) == expected

    @pytest.mark.parametrize(
        "value, decimals, expected",
        [
            (0.125, 2, "0.13"),
            (2.5, 0, "3"),
            (0.0625, 3, "0.063"),
            (-2.5, 0, "-3"),
            # 1.005 is stored as 1.00499999...
            (1.005, 2, "1"),
        ],
    )
    def test_ties_round_half_up(self, value, decimals, expected) -> None:
        """Exact halves round away from zero, like toFixed."""
        assert format_number(value, decimals) == expected

    def test_huge_value(self) -> None:
        """Large finite numbers format without scientific notation."""
        assert format_number(2.0**100, 2) == "1267650600228229401496703205376"
        assert format_number(1e300, 0).startswith("1000000000")

    def test_non_numeric_text_unchanged(self) -> None:
        """Text that is not a number is returned as is."""
        assert format_number("n/a") == "n/a"


class TestResultFormatter:
    """Tests for the results panel."""

    def test_full_result(self, display_settings: DisplaySettings) -> None:
        """Every field is formatted with its unit."""
        result = compute_kinetics(60, 30, 80, 100, 70)
        lines = ResultFormatter(display_settings).format_result(result)
        values = {line.label: line.value for line in lines}

        assert values["Time in Flight"] == "500 ms"
        assert values["Jump Height"] == "30.66 cm"
        assert values["Takeoff Velocity"] == "2.45 m/s"
        assert values["Average Force (Fm)"] == "1586.77 N"
        assert values["Relative Force (Frel)"] == "2.022"

    def test_no_result_shows_placeholders(self, display_settings: DisplaySettings) -> None:
        """Insufficient input prompts for the missing values."""
        lines = ResultFormatter(display_settings).format_result(None)

        assert [line.value for line in lines[:3]] == [FLIGHT_PLACEHOLDER] * 3
        assert lines[3].value == FORCE_PLACEHOLDER
        assert lines[4].value == FORCE_PLACEHOLDER

    def test_flight_only(self, display_settings: DisplaySettings) -> None:
        """Force lines prompt for body inputs when only flight is known."""
        lines = ResultFormatter(display_settings).format_result(compute_kinetics(30, 15))

        assert lines[0].value == "500 ms"
        assert lines[3].value == FORCE_PLACEHOLDER

    def test_report_shows_frame_error(self, display_settings: DisplaySettings) -> None:
        """Frame input errors are printed above the results."""
        report = ResultFormatter(display_settings).render_report(
            None, FrameInputError.END_BEFORE_START
        )

        assert report.splitlines()[0].startswith("!")
        assert "End frame must be greater than or equal to start frame" in report

    def test_report_contains_values(self, display_settings: DisplaySettings) -> None:
        """The report lists each labelled value."""
        report = ResultFormatter(display_settings).render_report(compute_kinetics(30, 15))

        assert "Jump Height" in report
        assert "30.66 cm" in report
        assert len(report.splitlines()) == 5


class TestRenderProfiles:
    """Tests for the profile table."""

    def test_empty(self) -> None:
        """An empty list renders a hint."""
        assert render_profiles([]) == "No measurements saved yet."

    def test_missing_weight_shown_as_dash(self) -> None:
        """Profiles without weight show a dash."""
        table = render_profiles(
            [
                MeasurementProfile(1, "Alex", 100.0, 70.5, 80.0),
                MeasurementProfile(2, "Sam", 95.25, 68.0),
            ]
        )
        lines = table.splitlines()

        assert len(lines) == 3
        assert "70.5" in lines[1] and "80" in lines[1]
        assert "95.25" in lines[2]
        assert lines[2].endswith("-")

    def test_zero_weight_is_shown(self) -> None:
        """A stored weight of zero is a value, not a missing weight."""
        table = render_profiles([MeasurementProfile(1, "Alex", 100.0, 70.0, 0.0)])
        row = table.splitlines()[1]

        assert row.endswith("0")
        assert not row.endswith("-")
