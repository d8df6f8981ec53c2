"""
Price and Greek grids for heat maps, sweeps and surfaces.

Every point is evaluated with PricingModel, so a grid cell is identical to
the corresponding single call.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union
import math

import numpy as np

from bs_pricer.config import GridConfig
from bs_pricer.logger import get_logger
from bs_pricer.pricing.black_scholes import OptionType, PricingModel

logger = get_logger(__name__)

GREEK_NAMES = ('delta', 'gamma', 'theta', 'vega', 'rho')

# Strike sweep used by the Greek-vs-strike charts: 50, 52, ..., 148
DEFAULT_SWEEP_STRIKES = 50.0 + 2.0 * np.arange(50)


@dataclass
class ScenarioGrid:
    """
    Prices and Greeks over a strike x volatility grid.

    Value arrays have shape (len(volatilities), len(strikes)): one row per
    volatility, one column per strike.
    """

    option_type: OptionType
    strikes: np.ndarray
    volatilities: np.ndarray
    prices: np.ndarray
    delta: np.ndarray
    gamma: np.ndarray
    theta: np.ndarray
    vega: np.ndarray
    rho: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return self.prices.shape

    def greek(self, name: str) -> np.ndarray:
        """Return the array for one Greek by name."""
        if name not in GREEK_NAMES:
            raise ValueError(f"Unknown greek {name!r}, expected one of {GREEK_NAMES}")
        return getattr(self, name)


def axis_points(start: float, stop: float, step: float) -> np.ndarray:
    """
    Evenly stepped axis from start to stop inclusive.

    Uses floor((stop - start) / step) + 1 points; a 1e-9 slack keeps
    ranges like 0.1..0.3 by 0.1 from losing their last point to rounding.
    """
    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    return start + step * np.arange(count)


def strike_volatility_grid(
    spot_price: float,
    time_to_expiry: float,
    risk_free_rate: float,
    option_type: Union[OptionType, str] = OptionType.CALL,
    grid: Optional[GridConfig] = None,
) -> ScenarioGrid:
    """
    Evaluate price and Greeks on a strike x volatility grid.

    Args:
        spot_price: Current price of the underlying
        time_to_expiry: Time to expiry in years
        risk_free_rate: Risk-free rate
        option_type: OptionType.CALL / OptionType.PUT (or 'call' / 'put')
        grid: Axis ranges (defaults to GridConfig())

    Returns:
        ScenarioGrid
    """
    option_type = OptionType.coerce(option_type)
    grid = grid or GridConfig()

    strikes = axis_points(grid.min_strike, grid.max_strike, grid.strike_step)
    volatilities = axis_points(grid.min_volatility, grid.max_volatility, grid.volatility_step)
    shape = (len(volatilities), len(strikes))

    prices = np.empty(shape)
    values = {name: np.empty(shape) for name in GREEK_NAMES}

    for i, vol in enumerate(volatilities):
        for j, strike in enumerate(strikes):
            model = PricingModel(spot_price, float(strike), time_to_expiry, risk_free_rate,
                                 float(vol))
            prices[i, j] = model.price(option_type)
            greeks = model.greeks(option_type)
            for name in GREEK_NAMES:
                values[name][i, j] = getattr(greeks, name)

    logger.info(
        f"Computed {option_type.value} grid: {len(volatilities)} volatilities x "
        f"{len(strikes)} strikes (S={spot_price}, T={time_to_expiry}, r={risk_free_rate})"
    )

    return ScenarioGrid(
        option_type=option_type,
        strikes=strikes,
        volatilities=volatilities,
        prices=prices,
        **values,
    )


def greek_vs_strike(
    greek: str,
    option_type: Union[OptionType, str] = OptionType.CALL,
    strikes: Optional[Sequence[float]] = None,
    spot_price: float = 100.0,
    time_to_expiry: float = 1.0,
    risk_free_rate: float = 0.05,
    volatility: float = 0.2,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sweep one Greek across strikes with the other parameters fixed.

    Returns:
        (strikes, values) arrays of equal length
    """
    if greek not in GREEK_NAMES:
        raise ValueError(f"Unknown greek {greek!r}, expected one of {GREEK_NAMES}")

    strikes = DEFAULT_SWEEP_STRIKES.copy() if strikes is None else np.asarray(strikes, dtype=float)
    values = np.array([
        getattr(
            PricingModel(spot_price, float(strike), time_to_expiry, risk_free_rate, volatility)
            .greeks(option_type),
            greek,
        )
        for strike in strikes
    ], dtype=float)
    return strikes, values


def price_surface(
    spot_prices: Sequence[float],
    expiries: Sequence[float],
    strike_price: float,
    risk_free_rate: float,
    volatility: float,
    option_type: Union[OptionType, str] = OptionType.CALL,
) -> np.ndarray:
    """
    Option price over a spot x expiry mesh.

    Args:
        spot_prices: Spot axis
        expiries: Time-to-expiry axis (years)
        strike_price: Strike
        risk_free_rate: Risk-free rate
        volatility: Volatility
        option_type: OptionType.CALL / OptionType.PUT (or 'call' / 'put')

    Returns:
        Array of shape (len(expiries), len(spot_prices))
    """
    option_type = OptionType.coerce(option_type)
    spot_prices = np.asarray(spot_prices, dtype=float)
    expiries = np.asarray(expiries, dtype=float)

    surface = np.empty((len(expiries), len(spot_prices)))
    for i, expiry in enumerate(expiries):
        for j, spot in enumerate(spot_prices):
            model = PricingModel(float(spot), strike_price, float(expiry), risk_free_rate, volatility)
            surface[i, j] = model.price(option_type)

    logger.info(f"Computed price surface: {surface.shape[0]} expiries x {surface.shape[1]} spots")
    return surface


def breakevens(model: PricingModel) -> Tuple[float, float]:
    """
    Underlying prices at expiry where a long option just recovers its premium.

    Call break-even is K + call premium; put break-even is K - put premium.

    Returns:
        (call_breakeven, put_breakeven)
    """
    strike = model.strike_price
    return (
        strike + model.price(OptionType.CALL),
        strike - model.price(OptionType.PUT),
    )
