"""
Scenario grids over strike, volatility, spot and expiry.
"""

from bs_pricer.analysis.grid import (
    GREEK_NAMES,
    ScenarioGrid,
    axis_points,
    breakevens,
    strike_volatility_grid,
    greek_vs_strike,
    price_surface,
)

__all__ = [
    "GREEK_NAMES",
    "ScenarioGrid",
    "axis_points",
    "breakevens",
    "strike_volatility_grid",
    "greek_vs_strike",
    "price_surface",
]
