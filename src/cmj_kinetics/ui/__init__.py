"""Text presentation of kinetics results and stored profiles."""

from cmj_kinetics.ui.formatting import ResultFormatter, format_number, render_profiles

__all__ = ["ResultFormatter", "format_number", "render_profiles"]
