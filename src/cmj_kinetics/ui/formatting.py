"""Text formatting for kinetics results and measurement profiles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from cmj_kinetics.analysis.kinetics import parse_number
from cmj_kinetics.core.config import DisplaySettings
from cmj_kinetics.core.types import FrameInputError, KineticsResult, MeasurementProfile

FLIGHT_PLACEHOLDER = "Enter Frames per Second and Amount of Frames"
FORCE_PLACEHOLDER = "Enter Body Weight, Leg Length, and Height with 90 Degree to calculate"

_TRAILING_ZEROS_RE = re.compile(r"\.?0+$")


def format_number(value: float | str, decimals: int = 2) -> str:
    """Format a number to at most ``decimals`` places without trailing zeros.

    Text input may use a decimal comma. Text that is not a number is
    returned unchanged.

    Args:
        value: Number or numeric text
        decimals: Maximum number of decimal places

    Returns:
        Formatted string, e.g. ``format_number(12.50) == "12.5"``
    """
    number = parse_number(value)
    if number is None:
        return str(value)

    # Exact binary value, ties rounded away from zero (JavaScript toFixed)
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(number).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    text = f"{rounded:f}"
    if "." in text:
        text = _TRAILING_ZEROS_RE.sub("", text)
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class ResultLine:
    """One labelled line of the results panel."""

    label: str
    value: str
    note: str = ""


class ResultFormatter:
    """Formats kinetics results for display.

    Quantities use ``settings.decimals`` places, relative force uses
    ``settings.relative_force_decimals``. Missing tiers are shown as
    prompts for the inputs they need.
    """

    def __init__(self, settings: DisplaySettings | None = None) -> None:
        self.settings = settings or DisplaySettings()

    def format_result(self, result: KineticsResult | None) -> list[ResultLine]:
        """Build the labelled lines for a result.

        Args:
            result: Computed kinetics, or None when inputs were insufficient

        Returns:
            One line per result field, in display order
        """
        d = self.settings.decimals

        if result is None:
            flight = [FLIGHT_PLACEHOLDER] * 3
        else:
            flight = [
                f"{format_number(result.time_in_flight_ms, d)} ms",
                f"{format_number(result.jump_height_cm, d)} cm",
                f"{format_number(result.takeoff_velocity_ms, d)} m/s",
            ]

        if result is None or result.average_force_n is None:
            force = FORCE_PLACEHOLDER
        else:
            force = f"{format_number(result.average_force_n, d)} N"

        if result is None or result.relative_force is None:
            relative = FORCE_PLACEHOLDER
        else:
            relative = format_number(
                result.relative_force, self.settings.relative_force_decimals
            )

        return [
            ResultLine("Time in Flight", flight[0], "frames / fps"),
            ResultLine("Jump Height", flight[1], "from time in flight"),
            ResultLine("Takeoff Velocity", flight[2], "from time in flight"),
            ResultLine("Average Force (Fm)", force, "work-energy over countermovement depth"),
            ResultLine("Relative Force (Frel)", relative, "multiple of body weight"),
        ]

    def render_report(
        self,
        result: KineticsResult | None,
        frame_error: FrameInputError | None = None,
    ) -> str:
        """Render the results panel as printable text.

        Args:
            result: Computed kinetics or None
            frame_error: Frame input error to show above the results

        Returns:
            Multi-line report
        """
        lines = []
        if frame_error is not None:
            lines.append(f"! {frame_error.message}")

        rows = self.format_result(result)
        width = max(len(r.label) for r in rows)
        for row in rows:
            line = f"{row.label:<{width}}  {row.value}"
            if row.note and not row.value.startswith("Enter"):
                line += f"  ({row.note})"
            lines.append(line)

        return "\n".join(lines)


def render_profiles(profiles: list[MeasurementProfile], decimals: int = 2) -> str:
    """Render measurement profiles as a text table."""
    if not profiles:
        return "No measurements saved yet."

    header = ("ID", "Name", "Leg length (cm)", "Height 90° (cm)", "Weight (kg)")
    rows = [
        (
            str(p.id),
            p.name,
            format_number(p.leg_length_cm, decimals),
            format_number(p.height_90_degree_cm, decimals),
            format_number(p.weight_kg, decimals) if p.weight_kg is not None else "-",
        )
        for p in profiles
    ]

    widths = [max(len(r[i]) for r in [header, *rows]) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip()
        for row in [header, *rows]
    )
