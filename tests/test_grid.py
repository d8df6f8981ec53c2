"""
Tests for price and Greek scenario grids.
"""

import pytest
import numpy as np

from bs_pricer.analysis.grid import (
    GREEK_NAMES,
    axis_points,
    breakevens,
    strike_volatility_grid,
    greek_vs_strike,
    price_surface,
)
from bs_pricer.config import GridConfig
from bs_pricer.pricing.black_scholes import (
    OptionType,
    PricingModel,
    calculate_greeks,
    calculate_option_price,
)


class TestAxisPoints:
    """Test axis construction."""

    def test_inclusive_range(self):
        assert np.allclose(axis_points(80.0, 120.0, 5.0), [80, 85, 90, 95, 100, 105, 110, 115, 120])

    def test_rounding_keeps_last_point(self):
        assert len(axis_points(0.1, 0.3, 0.1)) == 3

    def test_partial_step(self):
        assert np.allclose(axis_points(0.0, 1.0, 0.3), [0.0, 0.3, 0.6, 0.9])


class TestStrikeVolatilityGrid:
    """Test the strike x volatility heat map data."""

    def test_default_shape(self):
        grid = strike_volatility_grid(100.0, 1.0, 0.05)
        assert grid.shape == (9, 9)
        assert len(grid.strikes) == 9
        assert len(grid.volatilities) == 9
        for name in GREEK_NAMES:
            assert grid.greek(name).shape == (9, 9)

    def test_cells_match_single_calls(self):
        config = GridConfig(min_strike=90, max_strike=110, strike_step=10,
                            min_volatility=0.2, max_volatility=0.4, volatility_step=0.1)
        grid = strike_volatility_grid(100.0, 0.5, 0.03, OptionType.PUT, config)
        i, j = 1, 2
        vol, strike = grid.volatilities[i], grid.strikes[j]
        assert grid.prices[i, j] == calculate_option_price(100.0, strike, 0.5, 0.03, vol, 'put')
        greeks = calculate_greeks(100.0, strike, 0.5, 0.03, vol, 'put')
        assert grid.delta[i, j] == greeks.delta
        assert grid.rho[i, j] == greeks.rho

    def test_call_prices_fall_with_strike(self):
        grid = strike_volatility_grid(100.0, 1.0, 0.05, 'call')
        assert np.all(np.diff(grid.prices, axis=1) < 0)
        assert np.all(np.diff(grid.prices, axis=0) > 0)

    def test_unknown_greek(self):
        grid = strike_volatility_grid(100.0, 1.0, 0.05)
        with pytest.raises(ValueError):
            grid.greek('vanna')


class TestGreekVsStrike:
    """Test the Greek-versus-strike sweep."""

    def test_default_strikes(self):
        strikes, values = greek_vs_strike('delta')
        assert len(strikes) == 50
        assert strikes[0] == 50.0
        assert strikes[-1] == 148.0
        assert values.shape == strikes.shape

    def test_call_delta_decreases_with_strike(self):
        _, values = greek_vs_strike('delta', OptionType.CALL)
        assert np.all(np.diff(values) < 0)

    def test_custom_strikes(self):
        strikes, values = greek_vs_strike('vega', 'put', strikes=[90.0, 100.0, 110.0])
        expected = [calculate_greeks(100.0, k, 1.0, 0.05, 0.2, 'put').vega for k in strikes]
        assert np.allclose(values, expected)

    def test_unknown_greek(self):
        with pytest.raises(ValueError):
            greek_vs_strike('charm')

    def test_empty_strikes(self):
        strikes, values = greek_vs_strike('delta', strikes=[])
        assert len(strikes) == 0
        assert len(values) == 0


class TestPriceSurface:
    """Test the spot x expiry price surface."""

    def test_shape_and_values(self):
        spots = [80.0, 100.0, 120.0, 140.0]
        expiries = [0.25, 1.0, 2.0]
        surface = price_surface(spots, expiries, 100.0, 0.05, 0.2)
        assert surface.shape == (3, 4)
        assert surface[1, 1] == calculate_option_price(100.0, 100.0, 1.0, 0.05, 0.2, 'call')

    def test_call_surface_monotone(self):
        surface = price_surface(np.linspace(60, 140, 9), [0.5, 1.0, 2.0], 100.0, 0.05, 0.2)
        assert np.all(np.diff(surface, axis=1) > 0)
        assert np.all(np.diff(surface, axis=0) > 0)


class TestBreakevens:
    """Test break-even underlying prices at expiry."""

    def test_textbook_values(self):
        model = PricingModel(100.0, 100.0, 1.0, 0.05, 0.2)
        call_breakeven, put_breakeven = breakevens(model)
        assert np.isclose(call_breakeven, 100.0 + model.price('call'))
        assert np.isclose(put_breakeven, 100.0 - model.price('put'))
        assert np.isclose(call_breakeven, 110.4506, atol=1e-3)
        assert np.isclose(put_breakeven, 94.4265, atol=1e-3)

    def test_straddle_around_strike(self):
        """Call break-even sits above the strike, put break-even below."""
        model = PricingModel(90.0, 110.0, 0.5, 0.03, 0.35)
        call_breakeven, put_breakeven = breakevens(model)
        assert put_breakeven < 110.0 < call_breakeven


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
